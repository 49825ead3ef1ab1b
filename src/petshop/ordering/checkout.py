"""Checkout: turn the user's cart into an order.

The handler runs inside a single unit of work. It reads the cart and every
product, validates all of them before writing anything, then creates the
order, decrements stock and empties the cart. An exception anywhere rolls
the whole unit back, so a failed checkout leaves no order and no stock
change behind.

Stock is validated here, inside the transaction, not just when items were
added to the cart. The Product aggregate also refuses to drop below zero,
so a checkout racing another one for the last units fails instead of
overselling.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from petshop.cart.cart import ShoppingCart
from petshop.catalogue.product import Product
from petshop.domain import petshop
from petshop.ordering.numbering import unique_order_number
from petshop.ordering.order import Order
from petshop.shared.errors import EmptyCartError, InsufficientStockError

logger = structlog.get_logger(__name__)


@petshop.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address = Text(required=True)
    notes = Text()


@petshop.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        product_repo = current_domain.repository_for(Product)
        order_repo = current_domain.repository_for(Order)

        cart = cart_repo.for_user(command.user_id)
        if cart is None or not cart.items:
            raise EmptyCartError()

        products = product_repo.find_many(item.product_id for item in cart.items)

        # Validate every line before touching any aggregate
        lines = []
        for item in cart.items:
            product = products.get(str(item.product_id))
            if product is None or not product.is_active:
                raise InsufficientStockError(item.product_id, available=0, requested=item.quantity)
            if product.stock_quantity < item.quantity:
                raise InsufficientStockError(
                    product.id,
                    product_name=product.name,
                    available=product.stock_quantity,
                    requested=item.quantity,
                )
            lines.append((product, item.quantity))

        order = Order.place(
            user_id=command.user_id,
            order_number=unique_order_number(order_repo.number_taken),
            shipping_address=command.shipping_address,
            notes=command.notes,
            lines=lines,
        )
        order_repo.add(order)

        for product, quantity in lines:
            product.decrement_stock(quantity)
            product_repo.add(product)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=str(command.user_id),
            total_amount=order.total_amount,
        )
        return str(order.id)
