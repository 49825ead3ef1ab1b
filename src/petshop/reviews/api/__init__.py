"""Reviews API package."""

from petshop.reviews.api.routes import review_router

__all__ = ["review_router"]
