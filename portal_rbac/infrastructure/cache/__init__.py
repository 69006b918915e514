"""Cache: permission cache stores and cache key utilities.

Used by the permission resolver (cache-aside) and the invalidator.
Store selection is in factory.py; key format is in keys.py (DRY).
"""

from portal_rbac.infrastructure.cache.factory import CacheStore, create_cache_store
from portal_rbac.infrastructure.cache.keys import permission_key, permission_pattern
from portal_rbac.infrastructure.cache.memory_cache import MemoryCacheStore
from portal_rbac.infrastructure.cache.null_cache import NullCacheStore
from portal_rbac.infrastructure.cache.redis_cache import RedisCacheStore

__all__ = [
    "CacheStore",
    "MemoryCacheStore",
    "NullCacheStore",
    "RedisCacheStore",
    "create_cache_store",
    "permission_key",
    "permission_pattern",
]
