"""DTOs for permission resolution (no dependency on ORM or cache backend)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from portal_rbac.domain.enums import Role
from portal_rbac.shared.utils.datetime import ensure_utc, utc_now


@dataclass(frozen=True)
class RoleProfile:
    """Everything a role grants: permission keys, page prefixes and API patterns."""

    role: Role
    permissions: frozenset[str]
    pages: frozenset[str]
    api_patterns: frozenset[str]


@dataclass(frozen=True)
class CachedPermissionEntry:
    """Derived permissions for one user, as written to the cache.

    Equals the catalog profile of `role` at the time it was written. Stored
    as JSON via to_cache()/from_cache().
    """

    user_id: str
    role: Role
    permissions: frozenset[str]
    pages: frozenset[str]
    api_patterns: frozenset[str]
    expires_at: datetime

    @classmethod
    def from_profile(
        cls, user_id: str, profile: RoleProfile, ttl_seconds: int, now: datetime | None = None
    ) -> CachedPermissionEntry:
        """Build the entry for user_id from the role profile, expiring ttl_seconds from now."""
        written_at = now or utc_now()
        return cls(
            user_id=user_id,
            role=profile.role,
            permissions=profile.permissions,
            pages=profile.pages,
            api_patterns=profile.api_patterns,
            expires_at=written_at + timedelta(seconds=ttl_seconds),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True when expires_at has passed."""
        return (now or utc_now()) >= self.expires_at

    def to_cache(self) -> dict[str, Any]:
        """JSON-serializable payload (sets become sorted lists)."""
        return {
            "user_id": self.user_id,
            "role": self.role.value,
            "permissions": sorted(self.permissions),
            "pages": sorted(self.pages),
            "api_patterns": sorted(self.api_patterns),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_cache(cls, data: Any) -> CachedPermissionEntry | None:
        """Rebuild an entry from a cached payload; None if the payload is malformed."""
        if not isinstance(data, dict):
            return None
        role = Role.parse(data.get("role"))
        if role is None:
            return None
        try:
            return cls(
                user_id=str(data["user_id"]),
                role=role,
                permissions=frozenset(data["permissions"]),
                pages=frozenset(data.get("pages", ())),
                api_patterns=frozenset(data.get("api_patterns", ())),
                expires_at=ensure_utc(datetime.fromisoformat(data["expires_at"])),
            )
        except (KeyError, TypeError, ValueError):
            return None
