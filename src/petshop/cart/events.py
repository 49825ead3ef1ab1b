"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer

from petshop.domain import petshop


@petshop.event(part_of="ShoppingCart")
class CartItemAdded:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@petshop.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@petshop.event(part_of="ShoppingCart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@petshop.event(part_of="ShoppingCart")
class CartCleared:
    """All items left the cart, either explicitly or through checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    removed_items = Integer(required=True)
