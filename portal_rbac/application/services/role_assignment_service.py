"""Role assignment use case: change a staff member's role under hierarchy rules."""

from __future__ import annotations

import logging

from portal_rbac.application.interfaces.services import IRoleStore
from portal_rbac.application.services.permission_resolver import PermissionResolver
from portal_rbac.domain.enums import Role
from portal_rbac.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

# Roles allowed to grant each privileged role; other roles need only outrank the target.
_GRANTORS: dict[Role, frozenset[Role]] = {
    Role.SUPERADMIN: frozenset({Role.SUPERADMIN}),
    Role.ADMIN: frozenset({Role.SUPERADMIN, Role.ADMIN}),
}


class RoleAssignmentService:
    """Validates and applies role changes; the role store invalidates cached permissions."""

    def __init__(self, resolver: PermissionResolver, role_store: IRoleStore) -> None:
        self.resolver = resolver
        self.role_store = role_store

    async def change_role(self, actor_id: str, target_id: str, new_role: Role | str) -> Role:
        """Set target's role to new_role on behalf of actor.

        Rules:
            - actors cannot change their own role;
            - the actor's role must strictly outrank the target's current role;
            - only superadmin grants superadmin, only admin or superadmin grant admin.

        Returns:
            The role now assigned.

        Raises:
            ValidationException: Unknown role name or self change.
            AuthorizationException: Actor may not manage target or grant new_role.
            ResourceNotFoundException: Target has no staff profile to update.
        """
        role = Role.parse(new_role)
        if role is None:
            raise ValidationException(
                f"Valid role is required (one of: {', '.join(Role.values())})", field="role"
            )
        if actor_id == target_id:
            raise ValidationException("Cannot change your own role", field="staff_id")

        if not await self.resolver.can_manage_user(actor_id, target_id):
            raise AuthorizationException(
                message="Cannot manage staff member with equal or higher role"
            )

        grantors = _GRANTORS.get(role)
        if grantors is not None:
            if await self.resolver.role_of(actor_id) not in grantors:
                raise AuthorizationException(resource=f"role {role.value}", action="assign")

        if not await self.role_store.update_role(target_id, role):
            raise ResourceNotFoundException("staff_profile", target_id)

        logger.info("Role changed: actor_id=%s target_id=%s role=%s", actor_id, target_id, role.value)
        return role
