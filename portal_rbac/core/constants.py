"""Core constants: cache key prefixes, TTLs and timeouts.

Single source of truth for cache key structure (DRY). Used by the
infrastructure cache, the invalidator and the permission resolver.
"""

# Cache key prefix for derived staff permissions (staff:permissions:<user_id>)
CACHE_PREFIX_STAFF_PERMISSIONS = "staff:permissions"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Lifetime of a cached permission entry. Bounds staleness after a role change
# when the invalidator was not called.
PERMISSION_CACHE_TTL_SECONDS = 3600

# Per-call bound on networked cache operations (seconds).
CACHE_TIMEOUT_SECONDS = 0.25

# Batch size for SCAN + UNLINK when flushing keys by pattern.
CACHE_DELETE_CHUNK_SIZE = 500

# Upper bound on entries held by the in-process cache store.
MEMORY_CACHE_MAX_ENTRIES = 10_000
