"""Role provider backed by the staff_profiles table (implements IRoleStore)."""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portal_rbac.application.interfaces.services import IPermissionInvalidator
from portal_rbac.domain.enums import Role
from portal_rbac.infrastructure.persistence.models.staff_profile import StaffProfile

logger = logging.getLogger(__name__)


class StaffRoleProvider:
    """Reads and updates staff roles; invalidates cached permissions on change."""

    def __init__(
        self,
        db: AsyncSession,
        invalidator: IPermissionInvalidator | None = None,
    ) -> None:
        self.db = db
        self.invalidator = invalidator

    async def role_of(self, user_id: str) -> Role | None:
        """Return the role of an active staff profile, or None."""
        result = await self.db.execute(
            select(StaffProfile.role).where(
                StaffProfile.id == user_id,
                StaffProfile.is_active.is_(True),
            )
        )
        stored = result.scalar_one_or_none()
        if stored is None:
            return None
        role = Role.parse(stored)
        if role is None:
            logger.warning("Staff profile %s has unknown role %r; treating as no role", user_id, stored)
        return role

    async def update_role(self, user_id: str, role: Role) -> bool:
        """Set the staff member's role. Returns False when no profile matched.

        Commits before invalidating: a concurrent miss between the two could
        otherwise re-cache the old role for a full TTL.
        """
        result = await self.db.execute(
            update(StaffProfile).where(StaffProfile.id == user_id).values(role=role.value)
        )
        if not result.rowcount:
            return False
        await self.db.commit()
        if self.invalidator is not None:
            await self.invalidator.invalidate(user_id)
        return True
