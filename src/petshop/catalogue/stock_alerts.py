"""Reacts to stock falling to or below a product's reorder threshold."""

import structlog
from protean.utils.mixins import handle

from petshop.catalogue.events import LowStockDetected
from petshop.catalogue.product import Product
from petshop.domain import petshop

logger = structlog.get_logger(__name__)


@petshop.event_handler(part_of=Product)
class StockAlertEventHandler:
    @handle(LowStockDetected)
    def on_low_stock(self, event: LowStockDetected) -> None:
        logger.warning(
            "Product stock is low",
            product_id=str(event.product_id),
            name=event.name,
            stock_quantity=event.stock_quantity,
            low_stock_threshold=event.low_stock_threshold,
        )
