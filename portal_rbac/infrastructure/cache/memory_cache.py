"""In-process cache store with passive TTL expiry.

For single-process deployments, local development and tests. Values are
stored JSON-encoded so callers get the same copies a Redis round trip
would give them. Expired entries are dropped when read, and when the
store is full a write first purges expired entries, then evicts the
oldest write. There is no background sweep.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import time
from collections.abc import Callable
from typing import Any

from portal_rbac.core.constants import MEMORY_CACHE_MAX_ENTRIES

logger = logging.getLogger(__name__)


class MemoryCacheStore:
    """Dict-backed cache store keyed by string with per-key expiry."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        maxsize: int = MEMORY_CACHE_MAX_ENTRIES,
    ) -> None:
        """Initialize an empty store.

        Args:
            clock: Monotonic seconds source; injectable for tests.
            maxsize: Most entries held at once.
        """
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self._clock = clock
        self.maxsize = maxsize
        self._entries: dict[str, tuple[str, float]] = {}

    @property
    def is_configured(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Any | None:
        """Return cached value or None if missing or expired."""
        item = self._entries.get(key)
        if item is None:
            logger.debug("Cache MISS: %s", key)
            return None
        serialized, expires_at = item
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            logger.debug("Cache EXPIRED: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(serialized)

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store value with TTL. Returns False when value is not JSON-serializable."""
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("Cache set skipped for key %s: value is not JSON-serializable", key)
            return False
        now = self._clock()
        # Re-insert so dict order stays oldest write first.
        self._entries.pop(key, None)
        if len(self._entries) >= self.maxsize:
            self._make_room(now)
        self._entries[key] = (serialized, now + ttl)
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    def _make_room(self, now: float) -> None:
        """Purge expired entries; if still full, evict the oldest writes."""
        expired = [k for k, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        while len(self._entries) >= self.maxsize:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("Cache EVICT: %s", oldest)
        if expired:
            logger.debug("Cache PURGE: %s expired entries", len(expired))

    async def delete(self, key: str) -> bool:
        self._entries.pop(key, None)
        logger.debug("Cache DELETE: %s", key)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching a glob pattern."""
        matched = [k for k in self._entries if fnmatch.fnmatchcase(k, pattern)]
        for key in matched:
            del self._entries[key]
        if matched:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, len(matched))
        return len(matched)

    async def is_healthy(self) -> bool:
        return True

    async def close(self) -> None:
        self._entries.clear()
