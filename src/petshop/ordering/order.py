"""Order aggregate (CQRS) created atomically from a user's cart at checkout.

Line items freeze the product name and price at purchase time, so later
catalogue changes never alter an existing order.

State Machine (5 states):
    WAITING → IN_PROCESSING | WITHDRAWN | REJECTED
    IN_PROCESSING → COMPLETED | WITHDRAWN | REJECTED
    COMPLETED, WITHDRAWN, REJECTED → (terminal)

The table is enforced under the "strict" transition policy. The
"permissive" policy lets an admin set any status from any other.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from petshop import config
from petshop.domain import petshop
from petshop.ordering.events import OrderPlaced, OrderStatusChanged
from petshop.shared.errors import IllegalStatusTransitionError


class OrderStatus(Enum):
    WAITING = "Waiting"
    IN_PROCESSING = "InProcessing"
    COMPLETED = "Completed"
    WITHDRAWN = "Withdrawn"
    REJECTED = "Rejected"


_VALID_TRANSITIONS = {
    OrderStatus.WAITING: {OrderStatus.IN_PROCESSING, OrderStatus.WITHDRAWN, OrderStatus.REJECTED},
    OrderStatus.IN_PROCESSING: {OrderStatus.COMPLETED, OrderStatus.WITHDRAWN, OrderStatus.REJECTED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.WITHDRAWN: set(),  # Terminal
    OrderStatus.REJECTED: set(),  # Terminal
}

STRICT = "strict"
PERMISSIVE = "permissive"


def parse_status(value) -> OrderStatus:
    """Resolve a status name case-insensitively ("completed", "InProcessing", ...)."""
    if isinstance(value, OrderStatus):
        return value
    for status in OrderStatus:
        if str(value).strip().lower() in (status.value.lower(), status.name.lower()):
            return status
    allowed = ", ".join(s.value for s in OrderStatus)
    raise ValidationError({"status": [f"Unknown order status '{value}'. Use one of: {allowed}"]})


@petshop.entity(part_of="Order")
class OrderItem:
    """A purchased product with its price frozen at checkout."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=200)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)


@petshop.aggregate
class Order:
    user_id = Identifier(required=True)
    order_number = String(required=True, max_length=50, unique=True)
    status = String(choices=OrderStatus, default=OrderStatus.WAITING.value)
    total_amount = Float(required=True, min_value=0.0)
    shipping_address = Text(required=True)
    notes = Text()
    items = HasMany(OrderItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, order_number, shipping_address, lines, notes=None):
        """Create a Waiting order from ``lines`` of (product, quantity).

        Prices and names are read from the products as they are right now.
        """
        now = datetime.now(UTC)

        items = [
            OrderItem(
                product_id=str(product.id),
                product_name=product.name,
                quantity=quantity,
                unit_price=product.price,
                total_price=round(product.price * quantity, 2),
            )
            for product, quantity in lines
        ]
        total_amount = round(sum(item.total_price for item in items), 2)

        order = cls(
            user_id=user_id,
            order_number=order_number,
            status=OrderStatus.WAITING.value,
            total_amount=total_amount,
            shipping_address=shipping_address,
            notes=notes,
            items=items,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                user_id=str(user_id),
                total_amount=total_amount,
                item_count=sum(item.quantity for item in items),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def contains_product(self, product_id) -> bool:
        return any(str(item.product_id) == str(product_id) for item in self.items)

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _VALID_TRANSITIONS.get(OrderStatus(self.status), set())

    def change_status(self, new_status, policy=None):
        """Move the order to ``new_status``.

        Setting the current status again is a no-op. Under the strict policy
        only transitions from the table are accepted.
        """
        target = parse_status(new_status)
        current = OrderStatus(self.status)
        if target == current:
            return False

        policy = policy or config.ORDER_TRANSITION_POLICY
        if policy != PERMISSIVE and not self.can_transition_to(target):
            raise IllegalStatusTransitionError(current.value, target.value)

        self.status = target.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                user_id=str(self.user_id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=self.updated_at,
            )
        )
        return True
