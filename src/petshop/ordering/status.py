"""Admin-driven order status changes."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from petshop.domain import petshop
from petshop.ordering.order import Order

logger = structlog.get_logger(__name__)


@petshop.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@petshop.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find(command.order_id)

        previous = order.status
        if order.change_status(command.status):
            repo.add(order)
            logger.info(
                "Order status changed",
                order_id=str(order.id),
                previous_status=previous,
                new_status=order.status,
            )
        return str(order.id)
