"""Domain enumerations for the portal RBAC core.

Enums represent fixed sets of domain values (e.g. staff role).
"""

from enum import Enum


class Role(str, Enum):
    """Staff authorization tier, ordered from least to most privileged.

    The privilege level of each member lives in ROLE_LEVELS; the ordering of
    the declaration below matches it.
    """

    NEW = "new"
    SUPPORT = "support"
    MANAGER = "manager"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role names as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [role.value for role in cls]

    @classmethod
    def parse(cls, value: "Role | str | None") -> "Role | None":
        """Return the Role for a role name, or None when the name is unknown."""
        if value is None:
            return None
        if isinstance(value, Role):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


ROLE_LEVELS: dict[Role, int] = {
    Role.NEW: 1,
    Role.SUPPORT: 2,
    Role.MANAGER: 3,
    Role.ADMIN: 4,
    Role.SUPERADMIN: 5,
}
