"""Service interfaces (ports) for the application layer.

Protocols define contracts for the collaborators of the permission
resolver (DIP): the cache store and the role provider.
"""

from __future__ import annotations

from typing import Any, Protocol

from portal_rbac.domain.enums import Role


# Cache store interface
class ICacheStore(Protocol):
    """Key-value cache with TTL. Implementations never raise to the caller.

    Any backend fault (unreachable, timeout, unconfigured) degrades to a
    miss (get) or a no-op returning False (set, delete).
    """

    @property
    def is_configured(self) -> bool:
        """True when backed by a store; False for the permanent no-op variant."""

    async def get(self, key: str) -> Any | None:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store value with TTL in seconds. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True when the delete reached the backend."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching a glob pattern. Returns count deleted."""

    async def is_healthy(self) -> bool:
        """Liveness probe: True if the backend answers."""


# Role provider interface
class IRoleProvider(Protocol):
    """Source of truth for a user's current role (read-only to the resolver)."""

    async def role_of(self, user_id: str) -> Role | None:
        """Return the user's role, or None when the user has no active role."""


# Role store interface: role provider that can also change roles
class IRoleStore(IRoleProvider, Protocol):
    """Role provider that persists role changes and invalidates cached permissions."""

    async def update_role(self, user_id: str, role: Role) -> bool:
        """Set the user's role. Returns False when the user does not exist."""


# Invalidator interface
class IPermissionInvalidator(Protocol):
    """Cache-busting contract invoked on role changes."""

    async def invalidate(self, user_id: str) -> bool:
        """Drop the cached permission entry for one user (best effort)."""
