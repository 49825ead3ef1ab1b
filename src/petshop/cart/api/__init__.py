"""Cart API package."""

from petshop.cart.api.routes import cart_router

__all__ = ["cart_router"]
