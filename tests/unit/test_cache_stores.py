"""Cache stores: memory (passive TTL), null (unconfigured), Redis (degrades, never raises)."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from portal_rbac.core.config import Settings
from portal_rbac.infrastructure.cache import (
    MemoryCacheStore,
    NullCacheStore,
    RedisCacheStore,
    create_cache_store,
    permission_key,
    permission_pattern,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


# ---- keys ----


def test_permission_key_format() -> None:
    assert permission_key("u1") == "staff:permissions:u1"
    assert permission_pattern() == "staff:permissions:*"


@pytest.mark.parametrize("user_id", ["", "a:b"])
def test_permission_key_rejects_unusable_ids(user_id: str) -> None:
    with pytest.raises(ValueError):
        permission_key(user_id)


# ---- memory ----


async def test_memory_set_get_roundtrip() -> None:
    store = MemoryCacheStore()
    assert await store.set("k", {"a": [1, 2]}, ttl=60) is True
    assert await store.get("k") == {"a": [1, 2]}
    assert store.is_configured is True


async def test_memory_entry_expires_passively() -> None:
    clock = FakeClock()
    store = MemoryCacheStore(clock=clock)
    await store.set("k", "v", ttl=10)
    clock.now += 9.9
    assert await store.get("k") == "v"
    clock.now += 0.1
    assert await store.get("k") is None
    assert len(store) == 0


async def test_memory_returns_copies() -> None:
    store = MemoryCacheStore()
    await store.set("k", {"perms": ["a"]}, ttl=60)
    first = await store.get("k")
    first["perms"].append("b")
    assert await store.get("k") == {"perms": ["a"]}


async def test_memory_set_rejects_non_serializable() -> None:
    store = MemoryCacheStore()
    assert await store.set("k", {1, 2}, ttl=60) is False
    assert await store.get("k") is None


async def test_memory_full_store_purges_expired_entries_first() -> None:
    clock = FakeClock()
    store = MemoryCacheStore(clock=clock, maxsize=3)
    await store.set("stale-1", 1, ttl=10)
    await store.set("stale-2", 1, ttl=10)
    await store.set("live", 1, ttl=100)
    clock.now += 50
    await store.set("new", 1, ttl=100)
    assert len(store) == 2
    assert await store.get("live") == 1
    assert await store.get("new") == 1


async def test_memory_full_store_evicts_oldest_write() -> None:
    """Keys never read again cannot grow the store past maxsize."""
    store = MemoryCacheStore(maxsize=2)
    await store.set("a", 1, ttl=60)
    await store.set("b", 2, ttl=60)
    await store.set("a", 3, ttl=60)
    await store.set("c", 4, ttl=60)
    assert len(store) == 2
    assert await store.get("b") is None
    assert await store.get("a") == 3
    assert await store.get("c") == 4


def test_memory_maxsize_must_be_positive() -> None:
    with pytest.raises(ValueError):
        MemoryCacheStore(maxsize=0)


async def test_memory_delete_and_delete_pattern() -> None:
    store = MemoryCacheStore()
    await store.set("staff:permissions:a", 1, ttl=60)
    await store.set("staff:permissions:b", 1, ttl=60)
    await store.set("other:c", 1, ttl=60)
    assert await store.delete("staff:permissions:a") is True
    assert await store.delete("missing") is True
    assert await store.delete_pattern("staff:permissions:*") == 1
    assert await store.get("other:c") == 1
    assert await store.is_healthy() is True


# ---- null ----


async def test_null_store_is_permanent_noop() -> None:
    store = NullCacheStore()
    assert store.is_configured is False
    assert await store.set("k", "v", ttl=60) is False
    assert await store.get("k") is None
    assert await store.delete("k") is False
    assert await store.delete_pattern("*") == 0
    assert await store.is_healthy() is False


# ---- redis ----


@pytest.fixture
def redis_client() -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.setex = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.unlink = AsyncMock(side_effect=lambda *keys: len(keys))
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client


async def test_redis_get_decodes_json(redis_client: MagicMock) -> None:
    redis_client.get.return_value = '{"role": "admin"}'
    store = RedisCacheStore(redis_client, timeout=0.25)
    assert await store.get("k") == {"role": "admin"}
    redis_client.get.assert_awaited_once_with("k")


async def test_redis_get_invalid_json_is_miss(redis_client: MagicMock) -> None:
    redis_client.get.return_value = "not json"
    store = RedisCacheStore(redis_client, timeout=0.25)
    assert await store.get("k") is None


async def test_redis_set_uses_setex_with_ttl(redis_client: MagicMock) -> None:
    store = RedisCacheStore(redis_client, timeout=0.25)
    assert await store.set("k", ["a"], ttl=3600) is True
    redis_client.setex.assert_awaited_once_with("k", 3600, '["a"]')


async def test_redis_errors_degrade_without_raising(redis_client: MagicMock, caplog) -> None:
    """Connection errors become a miss / False / 0 and are logged as degraded."""
    error = RedisConnectionError("connection refused")
    redis_client.get.side_effect = error
    redis_client.setex.side_effect = error
    redis_client.delete.side_effect = error
    redis_client.ping.side_effect = error
    store = RedisCacheStore(redis_client, timeout=0.25)

    assert await store.get("k") is None
    assert await store.set("k", 1, ttl=60) is False
    assert await store.delete("k") is False
    assert await store.is_healthy() is False
    assert "Cache degraded" in caplog.text


async def test_redis_slow_call_is_treated_as_miss(redis_client: MagicMock) -> None:
    async def slow_get(key: str) -> str:
        await asyncio.sleep(1)
        return '"late"'

    redis_client.get.side_effect = slow_get
    store = RedisCacheStore(redis_client, timeout=0.01)
    assert await store.get("k") is None


async def test_redis_delete_pattern_scans_and_unlinks(redis_client: MagicMock) -> None:
    async def scan_iter(match: str):
        for key in ("staff:permissions:a", "staff:permissions:b"):
            yield key

    redis_client.scan_iter = scan_iter
    store = RedisCacheStore(redis_client, timeout=0.25)
    assert await store.delete_pattern("staff:permissions:*") == 2
    redis_client.unlink.assert_awaited_once_with("staff:permissions:a", "staff:permissions:b")


async def test_redis_delete_pattern_scan_failure_returns_zero(redis_client: MagicMock) -> None:
    async def scan_iter(match: str):
        raise RedisConnectionError("gone")
        yield  # pragma: no cover

    redis_client.scan_iter = scan_iter
    store = RedisCacheStore(redis_client, timeout=0.25)
    assert await store.delete_pattern("staff:permissions:*") == 0


async def test_redis_close(redis_client: MagicMock) -> None:
    store = RedisCacheStore(redis_client, timeout=0.25)
    await store.close()
    redis_client.aclose.assert_awaited_once()


# ---- factory ----


def test_factory_without_redis_host_is_unconfigured() -> None:
    store = create_cache_store(Settings(cache_backend="redis", redis_host=""))
    assert isinstance(store, NullCacheStore)


def test_factory_none_backend() -> None:
    store = create_cache_store(Settings(cache_backend="none", redis_host="localhost"))
    assert isinstance(store, NullCacheStore)


def test_factory_memory_backend() -> None:
    assert isinstance(create_cache_store(Settings(cache_backend="memory")), MemoryCacheStore)


def test_factory_redis_backend_uses_timeout() -> None:
    store = create_cache_store(
        Settings(cache_backend="redis", redis_host="localhost", cache_timeout_seconds=0.1)
    )
    assert isinstance(store, RedisCacheStore)
    assert store.timeout == 0.1
