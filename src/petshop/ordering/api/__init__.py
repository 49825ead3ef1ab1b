"""Orders API package."""

from petshop.ordering.api.routes import order_router

__all__ = ["order_router"]
