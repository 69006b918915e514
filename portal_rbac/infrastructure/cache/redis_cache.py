"""Redis-backed cache store for derived staff permissions.

Provides async Redis caching with TTL support. Every call is bounded by a
short timeout; errors and timeouts are logged and degrade to a miss or a
no-op, so a slow or unreachable Redis only ever costs a recompute.
Integrates with portal_rbac.infrastructure.cache.keys for key format (DRY).
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

import redis.asyncio as redis

from portal_rbac.core.constants import CACHE_DELETE_CHUNK_SIZE, CACHE_TIMEOUT_SECONDS
from portal_rbac.domain.exceptions import CacheUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SOFT_ERRORS = (redis.RedisError, OSError, asyncio.TimeoutError)


class _Unavailable(Exception):
    """Internal marker: the backend call failed; carries the CacheUnavailable detail."""

    def __init__(self, error: CacheUnavailable) -> None:
        self.error = error
        super().__init__(error.message)


class RedisCacheStore:
    """Async Redis cache store with TTL support (the configured variant).

    Construct with a ready redis.asyncio.Redis client (see
    create_cache_store). Values are stored as JSON strings.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        timeout: float = CACHE_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize cache store.

        Args:
            redis_client: Redis client (decode_responses=True expected).
            timeout: Upper bound in seconds for each backend call.
        """
        self.redis = redis_client
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return True

    async def _call(self, operation: str, key: str, awaitable: Awaitable[T]) -> T:
        """Await a backend call under the timeout; raise _Unavailable on any soft fault."""
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise _Unavailable(CacheUnavailable(operation, key, "timeout")) from e
        except _SOFT_ERRORS as e:
            raise _Unavailable(CacheUnavailable(operation, key, e)) from e

    @staticmethod
    def _log_unavailable(exc: _Unavailable) -> None:
        details = exc.error.details
        logger.warning(
            "Cache degraded: operation=%s key=%s cause=%s",
            details["operation"],
            details["key"],
            details["cause"],
        )

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key (use portal_rbac.infrastructure.cache.keys builders).

        Returns:
            Cached value or None.
        """
        try:
            value = await self._call("get", key, self.redis.get(key))
        except _Unavailable as e:
            self._log_unavailable(e)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.warning("Cache entry for key %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return decoded

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store value with TTL. Returns True on success.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds.

        Returns:
            True if stored, False otherwise.
        """
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("Cache set skipped for key %s: value is not JSON-serializable", key)
            return False
        try:
            await self._call("set", key, self.redis.setex(key, ttl, serialized))
        except _Unavailable as e:
            self._log_unavailable(e)
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True when the delete reached Redis.

        Args:
            key: Cache key to delete.

        Returns:
            True if the command succeeded (whether or not the key existed).
        """
        try:
            await self._call("delete", key, self.redis.delete(key))
        except _Unavailable as e:
            self._log_unavailable(e)
            return False
        logger.debug("Cache DELETE: %s", key)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK (non-blocking).

        Each UNLINK batch is bounded by the timeout; the SCAN itself is not,
        so this is meant for administrative flushes, not the request path.

        Args:
            pattern: Redis SCAN match pattern (e.g. staff:permissions:*).

        Returns:
            Number of keys deleted.
        """
        deleted = 0
        try:
            chunk: list[str] = []
            async for key in self.redis.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= CACHE_DELETE_CHUNK_SIZE:
                    deleted += int(await self._call("delete_pattern", pattern, self.redis.unlink(*chunk)) or 0)
                    chunk = []
            if chunk:
                deleted += int(await self._call("delete_pattern", pattern, self.redis.unlink(*chunk)) or 0)
        except _Unavailable as e:
            self._log_unavailable(e)
        except _SOFT_ERRORS as e:
            logger.warning("Cache degraded: operation=delete_pattern key=%s cause=%s", pattern, e)
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted

    async def is_healthy(self) -> bool:
        """Return True if Redis answers PING within the timeout."""
        try:
            return bool(await self._call("ping", "-", self.redis.ping()))
        except _Unavailable as e:
            self._log_unavailable(e)
            return False

    async def close(self) -> None:
        """Close the Redis connection pool. Call on app shutdown."""
        try:
            await self.redis.aclose()
        except _SOFT_ERRORS:
            logger.warning("Error while closing Redis connection", exc_info=True)
        logger.info("Redis cache disconnected")
