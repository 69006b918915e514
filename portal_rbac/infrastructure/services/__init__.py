"""Infrastructure implementations of application service interfaces."""

from portal_rbac.infrastructure.services.in_memory_role_provider import InMemoryRoleProvider

__all__ = ["InMemoryRoleProvider"]
