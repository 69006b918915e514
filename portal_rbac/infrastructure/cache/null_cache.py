"""Unconfigured cache store: permanent no-op, chosen when no backend is set."""

from __future__ import annotations

from typing import Any


class NullCacheStore:
    """Cache store without a backend. Every read misses, every write is dropped."""

    @property
    def is_configured(self) -> bool:
        return False

    async def get(self, key: str) -> Any | None:
        return None

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        return False

    async def delete(self, key: str) -> bool:
        return False

    async def delete_pattern(self, pattern: str) -> int:
        return 0

    async def is_healthy(self) -> bool:
        return False

    async def close(self) -> None:
        return None
