"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend selectors (cache_backend, role_provider_backend)
are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from portal_rbac.core.constants import (
    CACHE_TIMEOUT_SECONDS,
    PERMISSION_CACHE_TTL_SECONDS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Every field has a default so the service starts with an in-memory role
    provider and no cache; production sets CACHE_BACKEND=redis and
    ROLE_PROVIDER_BACKEND=sql.
    """

    # App
    app_name: str = "portal-rbac"
    app_version: str = "1.0.0"
    debug: bool = False

    # Cache: "redis" (shared, networked), "memory" (single process) or "none"
    cache_backend: str = "redis"
    redis_host: str = ""
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_max_connections: int = 10
    # Upper bound for any single cache call; a slow cache is treated as a miss.
    cache_timeout_seconds: float = CACHE_TIMEOUT_SECONDS
    cache_ttl_permissions: int = PERMISSION_CACHE_TTL_SECONDS

    # RBAC
    # When True, page and API checks read the cached entry like has_permission does.
    rbac_uniform_caching: bool = False
    rbac_catalog_path: str | None = None

    # Role provider: "memory" (dev/tests) or "sql" (staff_profiles table)
    role_provider_backend: str = "memory"
    database_url: str = ""
    database_echo: bool = False

    # Request identity, set by the upstream authentication layer
    user_id_header: str = "X-User-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backends(self) -> "Settings":
        """Validate backend selectors and their required settings.

        - cache_backend must be one of redis, memory, none.
        - role_provider_backend "sql" requires DATABASE_URL.
        - cache_timeout_seconds must be positive and below one second.
        """
        if self.cache_backend not in ("redis", "memory", "none"):
            raise ValueError(
                f"cache_backend must be 'redis', 'memory' or 'none', got: {self.cache_backend!r}"
            )
        if self.role_provider_backend == "sql":
            if not self.database_url:
                raise ValueError(
                    "DATABASE_URL is required when role_provider_backend is 'sql'. "
                    "Set in environment or .env file."
                )
        elif self.role_provider_backend != "memory":
            raise ValueError(
                f"role_provider_backend must be 'memory' or 'sql', got: {self.role_provider_backend!r}"
            )
        if not 0 < self.cache_timeout_seconds < 1:
            raise ValueError(
                "cache_timeout_seconds must be greater than 0 and below 1 second, "
                f"got: {self.cache_timeout_seconds}"
            )
        if self.cache_ttl_permissions <= 0:
            raise ValueError("cache_ttl_permissions must be a positive number of seconds")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
