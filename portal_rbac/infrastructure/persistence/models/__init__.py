"""ORM models. Import StaffProfile from here so Base.metadata sees it."""

from portal_rbac.infrastructure.persistence.models.staff_profile import StaffProfile

__all__ = ["StaffProfile"]
