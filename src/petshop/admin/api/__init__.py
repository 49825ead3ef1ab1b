"""Admin API package: dashboard, inventory and review moderation."""

from petshop.admin.api.routes import admin_router

__all__ = ["admin_router"]
