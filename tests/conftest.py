"""Pytest configuration and fixtures for portal-rbac.

HTTP tests run against a fresh app per test with an in-memory cache store
and an in-memory role provider seeded with one staff user per role.
ASGITransport does not run the lifespan, so the fixture wires app.state
itself via init_rbac_state.
"""

import os

# Before any portal_rbac import: portal_rbac.main builds an app at import time.
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("ROLE_PROVIDER_BACKEND", "memory")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from portal_rbac.application.services import (
    PermissionCacheInvalidator,
    PermissionResolver,
    RoleHierarchy,
    default_catalog,
)
from portal_rbac.core.config import get_settings
from portal_rbac.core.lifespan import init_rbac_state
from portal_rbac.domain.enums import Role
from portal_rbac.infrastructure.cache import MemoryCacheStore
from portal_rbac.infrastructure.services import InMemoryRoleProvider
from portal_rbac.main import create_app

# One staff member per role, plus a second admin for equal-rank checks.
STAFF: dict[str, Role] = {
    "u-new": Role.NEW,
    "u-support": Role.SUPPORT,
    "u-manager": Role.MANAGER,
    "u-admin": Role.ADMIN,
    "u-admin-2": Role.ADMIN,
    "u-super": Role.SUPERADMIN,
}


@pytest.fixture
def cache() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def invalidator(cache: MemoryCacheStore) -> PermissionCacheInvalidator:
    return PermissionCacheInvalidator(cache)


@pytest.fixture
def role_provider(invalidator: PermissionCacheInvalidator) -> InMemoryRoleProvider:
    return InMemoryRoleProvider(STAFF, invalidator=invalidator)


@pytest.fixture
def resolver(role_provider: InMemoryRoleProvider, cache: MemoryCacheStore) -> PermissionResolver:
    """Resolver over the default catalog, an in-memory cache and the seeded staff."""
    return PermissionResolver(
        catalog=default_catalog(),
        hierarchy=RoleHierarchy(),
        role_provider=role_provider,
        cache=cache,
    )


@pytest.fixture
async def app() -> FastAPI:
    """Fresh application with RBAC state attached and staff seeded."""
    get_settings.cache_clear()
    application = create_app()
    init_rbac_state(application, get_settings())
    for user_id, role in STAFF.items():
        await application.state.role_provider.set_role(user_id, role)
    yield application
    await application.state.cache_store.close()


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


