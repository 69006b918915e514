"""In-memory role provider for development and tests.

Holds user_id -> Role in a dict. Every change goes through the
invalidator so cached permissions never outlive a role change.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from portal_rbac.application.interfaces.services import IPermissionInvalidator
from portal_rbac.domain.enums import Role

logger = logging.getLogger(__name__)


class InMemoryRoleProvider:
    """Role store backed by a dict."""

    def __init__(
        self,
        roles: Mapping[str, Role] | None = None,
        invalidator: IPermissionInvalidator | None = None,
    ) -> None:
        self._roles: dict[str, Role] = dict(roles or {})
        self.invalidator = invalidator

    async def role_of(self, user_id: str) -> Role | None:
        return self._roles.get(user_id)

    async def update_role(self, user_id: str, role: Role) -> bool:
        """Change an existing user's role. Returns False for unknown users."""
        if user_id not in self._roles:
            return False
        await self.set_role(user_id, role)
        return True

    async def set_role(self, user_id: str, role: Role) -> None:
        """Create or change a user's role and invalidate their cached permissions."""
        self._roles[user_id] = role
        logger.debug("Role set: user_id=%s role=%s", user_id, role.value)
        await self._invalidate(user_id)

    async def remove(self, user_id: str) -> None:
        """Drop a user's role (e.g. staff deactivated)."""
        if self._roles.pop(user_id, None) is not None:
            await self._invalidate(user_id)

    async def _invalidate(self, user_id: str) -> None:
        if self.invalidator is not None:
            await self.invalidator.invalidate(user_id)
