"""Permission cache invalidation, called by role providers on role changes."""

from __future__ import annotations

import logging

from portal_rbac.application.interfaces.services import ICacheStore
from portal_rbac.infrastructure.cache.keys import permission_key, permission_pattern

logger = logging.getLogger(__name__)


class PermissionCacheInvalidator:
    """Best-effort deletion of cached permission entries."""

    def __init__(self, cache: ICacheStore) -> None:
        self.cache = cache

    async def invalidate(self, user_id: str) -> bool:
        """Delete the cached entry for user_id.

        Returns:
            True if the delete reached the cache backend. False when the cache
            is unconfigured or degraded; the entry then lives until its TTL.
        """
        try:
            key = permission_key(user_id)
        except ValueError:
            return False
        deleted = await self.cache.delete(key)
        if deleted:
            logger.info("Invalidated cached permissions for user_id=%s", user_id)
        elif self.cache.is_configured:
            logger.warning(
                "Could not invalidate cached permissions for user_id=%s; stale until TTL expiry",
                user_id,
            )
        return deleted

    async def invalidate_all(self) -> int:
        """Flush every cached permission entry. Returns the number of keys removed."""
        count = await self.cache.delete_pattern(permission_pattern())
        logger.info("Flushed %s cached permission entries", count)
        return count
