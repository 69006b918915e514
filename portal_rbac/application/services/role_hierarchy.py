"""Role hierarchy: privilege ranking used for cross-user management checks."""

from __future__ import annotations

from portal_rbac.domain.enums import ROLE_LEVELS, Role

# Roles admitted to the admin staff area.
STAFF_ADMIN_ROLES: frozenset[Role] = frozenset({Role.MANAGER, Role.ADMIN, Role.SUPERADMIN})


class RoleHierarchy:
    """Pure functions over the closed Role enum."""

    def __init__(self, levels: dict[Role, int] | None = None) -> None:
        self._levels = dict(levels or ROLE_LEVELS)

    def level_of(self, role: Role | str | None) -> int:
        """Privilege level of role; 0 for unknown or missing roles."""
        parsed = Role.parse(role)
        if parsed is None:
            return 0
        return self._levels.get(parsed, 0)

    def can_manage(self, manager: Role | str | None, target: Role | str | None) -> bool:
        """True only when manager outranks target (equal ranks cannot manage each other)."""
        return self.level_of(manager) > self.level_of(target)

    def is_admin(self, role: Role | str | None) -> bool:
        return Role.parse(role) in STAFF_ADMIN_ROLES

    def is_super_admin(self, role: Role | str | None) -> bool:
        return Role.parse(role) is Role.SUPERADMIN
