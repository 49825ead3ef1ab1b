"""Cart item management: add, update quantity, remove and clear.

Every quantity change is checked against the product's live stock at call
time. Nothing is reserved; checkout checks stock again.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from petshop.cart.cart import ShoppingCart
from petshop.catalogue.product import Product
from petshop.domain import petshop
from petshop.shared.errors import InsufficientStockError


@petshop.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@petshop.command(part_of="ShoppingCart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@petshop.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@petshop.command(part_of="ShoppingCart")
class ClearCart:
    user_id = Identifier(required=True)


def _ensure_stock(product, requested):
    if requested > product.stock_quantity:
        raise InsufficientStockError(
            product.id,
            product_name=product.name,
            available=product.stock_quantity,
            requested=requested,
        )


@petshop.command_handler(part_of=ShoppingCart)
class CartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get_active(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_or_create_for_user(command.user_id)

        existing = cart.item_for_product(product.id)
        _ensure_stock(product, command.quantity + (existing.quantity if existing else 0))

        item = cart.add_item(product_id=str(product.id), quantity=command.quantity)
        repo.add(cart)
        return str(item.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            raise ObjectNotFoundError("Cart item not found")

        item = cart.find_item(command.item_id)
        product = current_domain.repository_for(Product).get_active(item.product_id)
        _ensure_stock(product, command.quantity)

        cart.update_item_quantity(command.item_id, command.quantity)
        repo.add(cart)
        return str(item.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        # Removing an absent item is reported as not found; the cart is left as is.
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            raise ObjectNotFoundError("Cart item not found")

        cart.remove_item(command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            return

        cart.clear()
        repo.add(cart)
