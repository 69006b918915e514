"""Application services: catalog, hierarchy, resolver, invalidator, role assignment."""

from portal_rbac.application.services.invalidator import PermissionCacheInvalidator
from portal_rbac.application.services.permission_catalog import (
    PermissionCatalog,
    default_catalog,
    load_catalog,
)
from portal_rbac.application.services.permission_resolver import (
    PermissionResolver,
    api_pattern_matches,
    page_matches,
)
from portal_rbac.application.services.role_assignment_service import RoleAssignmentService
from portal_rbac.application.services.role_hierarchy import RoleHierarchy

__all__ = [
    "PermissionCacheInvalidator",
    "PermissionCatalog",
    "PermissionResolver",
    "RoleAssignmentService",
    "RoleHierarchy",
    "api_pattern_matches",
    "default_catalog",
    "load_catalog",
    "page_matches",
]
