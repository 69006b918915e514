"""API v1 endpoint modules."""

from portal_rbac.api.v1.endpoints import health, rbac, staff

__all__ = ["health", "rbac", "staff"]
