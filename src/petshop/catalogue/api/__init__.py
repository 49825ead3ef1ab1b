"""Products API package."""

from petshop.catalogue.api.routes import product_router

__all__ = ["product_router"]
