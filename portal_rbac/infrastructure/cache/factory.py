"""Cache store selection: configured (Redis or memory) or unconfigured (no-op).

The variant is chosen once, from settings, when the process starts.
"""

from __future__ import annotations

import logging

import redis.asyncio as redis

from portal_rbac.core.config import Settings
from portal_rbac.infrastructure.cache.memory_cache import MemoryCacheStore
from portal_rbac.infrastructure.cache.null_cache import NullCacheStore
from portal_rbac.infrastructure.cache.redis_cache import RedisCacheStore

logger = logging.getLogger(__name__)

CacheStore = RedisCacheStore | MemoryCacheStore | NullCacheStore


def create_cache_store(settings: Settings) -> CacheStore:
    """Build the cache store described by settings.

    - cache_backend "none", or "redis" without REDIS_HOST: NullCacheStore.
    - cache_backend "memory": MemoryCacheStore.
    - cache_backend "redis": RedisCacheStore with sub-second socket timeouts.

    The Redis client connects lazily; an unreachable server shows up as
    degraded calls and a failing is_healthy(), never as a start-up error.
    """
    if settings.cache_backend == "memory":
        logger.info("Permission cache: in-process memory store")
        return MemoryCacheStore()
    if settings.cache_backend == "none" or not settings.redis_host:
        logger.warning("Permission cache not configured; every check recomputes from the catalog")
        return NullCacheStore()
    client = redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
        password=settings.redis_password.get_secret_value() if settings.redis_password else None,
        decode_responses=True,
        socket_connect_timeout=settings.cache_timeout_seconds,
        socket_timeout=settings.cache_timeout_seconds,
        socket_keepalive=True,
        max_connections=settings.redis_max_connections,
    )
    logger.info(
        "Permission cache: Redis at %s:%s (timeout %ss)",
        settings.redis_host,
        settings.redis_port,
        settings.cache_timeout_seconds,
    )
    return RedisCacheStore(client, timeout=settings.cache_timeout_seconds)
