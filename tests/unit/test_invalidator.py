"""PermissionCacheInvalidator: single-user and full flush."""

import logging
from unittest.mock import AsyncMock

from portal_rbac.application.services import PermissionCacheInvalidator
from portal_rbac.infrastructure.cache import MemoryCacheStore, NullCacheStore, permission_key


async def test_invalidate_deletes_user_entry() -> None:
    cache = MemoryCacheStore()
    await cache.set(permission_key("u1"), {"role": "admin"}, ttl=60)
    await cache.set(permission_key("u2"), {"role": "new"}, ttl=60)
    assert await PermissionCacheInvalidator(cache).invalidate("u1") is True
    assert await cache.get(permission_key("u1")) is None
    assert await cache.get(permission_key("u2")) == {"role": "new"}


async def test_invalidate_without_cache_is_noop() -> None:
    assert await PermissionCacheInvalidator(NullCacheStore()).invalidate("u1") is False


async def test_invalidate_warns_when_configured_cache_fails(caplog) -> None:
    cache = AsyncMock()
    cache.is_configured = True
    cache.delete = AsyncMock(return_value=False)
    with caplog.at_level(logging.WARNING):
        assert await PermissionCacheInvalidator(cache).invalidate("u1") is False
    assert "stale until TTL expiry" in caplog.text


async def test_invalidate_skips_unusable_user_id() -> None:
    cache = AsyncMock()
    assert await PermissionCacheInvalidator(cache).invalidate("a:b") is False
    cache.delete.assert_not_called()


async def test_invalidate_all_flushes_permission_entries_only() -> None:
    cache = MemoryCacheStore()
    for user_id in ("u1", "u2", "u3"):
        await cache.set(permission_key(user_id), {}, ttl=60)
    await cache.set("other:key", 1, ttl=60)
    assert await PermissionCacheInvalidator(cache).invalidate_all() == 3
    assert await cache.get("other:key") == 1
