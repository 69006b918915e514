"""API v1: routers and dependencies."""

from portal_rbac.api.v1.router import admin_router, api_router

__all__ = ["admin_router", "api_router"]
