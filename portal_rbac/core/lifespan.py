"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (permission
catalog, cache store, invalidator, role provider, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from portal_rbac.application.services.invalidator import PermissionCacheInvalidator
from portal_rbac.application.services.permission_catalog import default_catalog, load_catalog
from portal_rbac.application.services.role_hierarchy import RoleHierarchy
from portal_rbac.core.config import Settings, get_settings
from portal_rbac.infrastructure.cache import create_cache_store
from portal_rbac.infrastructure.services import InMemoryRoleProvider

logger = logging.getLogger(__name__)


def init_rbac_state(app: FastAPI, settings: Settings) -> None:
    """Build the process-wide RBAC collaborators and attach them to app.state.

    The cache store variant (configured or not) is decided here, once.
    With the sql backend a StaffRoleProvider is built per request instead
    of app.state.role_provider.
    """
    app.state.catalog = (
        load_catalog(settings.rbac_catalog_path) if settings.rbac_catalog_path else default_catalog()
    )
    app.state.hierarchy = RoleHierarchy()
    app.state.cache_store = create_cache_store(settings)
    app.state.invalidator = PermissionCacheInvalidator(app.state.cache_store)
    if settings.role_provider_backend == "memory":
        app.state.role_provider = InMemoryRoleProvider(invalidator=app.state.invalidator)
    else:
        app.state.role_provider = None


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: RBAC state (catalog, cache store, invalidator, role provider)
    unless already attached (tests wire their own). Shutdown: cache store
    close, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    if getattr(app.state, "cache_store", None) is None:
        init_rbac_state(app, settings)
    if app.state.cache_store.is_configured and not await app.state.cache_store.is_healthy():
        logger.warning("Permission cache is unreachable at startup; serving without cache until it recovers")

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache_store", None) is not None:
        await app.state.cache_store.close()
        logger.info("Cache store closed")

    from portal_rbac.infrastructure.persistence import database

    await database.dispose_engine()
