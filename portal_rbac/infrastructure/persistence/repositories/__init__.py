"""Repositories backed by SQLAlchemy async sessions."""

from portal_rbac.infrastructure.persistence.repositories.staff_role_provider import (
    StaffRoleProvider,
)

__all__ = ["StaffRoleProvider"]
