"""API v1 dependencies. Import from here in endpoint modules."""

from portal_rbac.api.v1.dependencies.rbac import (
    CacheStoreDep,
    CurrentUserId,
    GatedUserId,
    Resolver,
    RoleAssignment,
    get_cache_store,
    get_current_user_id,
    get_permission_resolver,
    get_role_assignment_service,
    get_role_provider,
    require_route_access,
)

__all__ = [
    "CacheStoreDep",
    "CurrentUserId",
    "GatedUserId",
    "Resolver",
    "RoleAssignment",
    "get_cache_store",
    "get_current_user_id",
    "get_permission_resolver",
    "get_role_assignment_service",
    "get_role_provider",
    "require_route_access",
]
