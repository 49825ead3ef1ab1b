"""Repository for the ShoppingCart aggregate."""

from petshop.cart.cart import ShoppingCart
from petshop.domain import petshop


@petshop.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def for_user(self, user_id) -> ShoppingCart | None:
        """The user's cart, or None when they never added anything."""
        return self._dao.query.filter(user_id=str(user_id)).all().first

    def get_or_create_for_user(self, user_id) -> ShoppingCart:
        return self.for_user(user_id) or ShoppingCart.create(user_id=str(user_id))
