"""Cache key builders. Single place for key format (DRY).

Key components (user_id) must not contain CACHE_KEY_SEP to avoid ambiguous
or colliding keys.
"""

from portal_rbac.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_STAFF_PERMISSIONS


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def permission_key(user_id: str) -> str:
    """Cache key for a staff user's derived permissions."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_STAFF_PERMISSIONS}{CACHE_KEY_SEP}{user_id}"


def permission_pattern() -> str:
    """Glob pattern matching every staff permission entry."""
    return f"{CACHE_PREFIX_STAFF_PERMISSIONS}{CACHE_KEY_SEP}*"
