"""Auth API package."""

from petshop.identity.api.routes import auth_router

__all__ = ["auth_router"]
