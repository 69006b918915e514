"""DTOs for the application layer."""

from portal_rbac.application.dtos.permission import CachedPermissionEntry, RoleProfile

__all__ = ["CachedPermissionEntry", "RoleProfile"]
