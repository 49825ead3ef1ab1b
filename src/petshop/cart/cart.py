"""Shopping Cart aggregate (CQRS): one cart per user, holding product/quantity rows.

The cart stores no prices. Prices, stock and images are resolved from the
catalogue whenever the cart is read and again at checkout.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, HasMany, Identifier, Integer

from petshop.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from petshop.domain import petshop


@petshop.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    created_at = DateTime()
    updated_at = DateTime()


@petshop.aggregate
class ShoppingCart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    def item_for_product(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError("Cart item not found")
        return item

    def add_item(self, product_id, quantity):
        """Add a product to the cart, merging with an existing row for the same product."""
        now = datetime.now(UTC)
        existing = self.item_for_product(product_id)

        if existing:
            existing.quantity += quantity
            existing.updated_at = now
            self.add_items(existing)
            item = existing
        else:
            item = CartItem(product_id=product_id, quantity=quantity, created_at=now, updated_at=now)
            self.add_items(item)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=item.quantity,
            )
        )
        return item

    def update_item_quantity(self, item_id, new_quantity):
        item = self.find_item(item_id)
        previous_quantity = item.quantity

        now = datetime.now(UTC)
        item.quantity = new_quantity
        item.updated_at = now
        self.add_items(item)
        self.updated_at = now

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return item

    def remove_item(self, item_id):
        item = self.find_item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(item.product_id),
            )
        )

    def clear(self):
        """Remove every item. Clearing an empty cart changes nothing."""
        if not self.items:
            return

        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), user_id=str(self.user_id), removed_items=removed))
