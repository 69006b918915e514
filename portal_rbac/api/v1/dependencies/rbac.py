"""RBAC dependencies (composition root): cache, role provider, resolver, gate.

Process-wide collaborators live on app.state (see core.lifespan); the
resolver itself is cheap and built per request.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request

from portal_rbac.application.interfaces.services import ICacheStore, IRoleStore
from portal_rbac.application.services.permission_resolver import PermissionResolver
from portal_rbac.application.services.role_assignment_service import RoleAssignmentService
from portal_rbac.core.config import get_settings
from portal_rbac.domain.exceptions import AuthenticationException, AuthorizationException
from portal_rbac.infrastructure.cache import NullCacheStore
from portal_rbac.infrastructure.persistence import database
from portal_rbac.infrastructure.persistence.repositories import StaffRoleProvider

ADMIN_PAGE_PREFIX = "/admin"
ADMIN_API_PREFIX = "/api/admin"


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def get_cache_store(request: Request) -> ICacheStore:
    """Cache store built at startup; the no-op store when none was attached."""
    cache = getattr(request.app.state, "cache_store", None)
    return cache if cache is not None else NullCacheStore()


async def get_role_provider(request: Request) -> AsyncIterator[IRoleStore]:
    """In-memory provider from app.state, or a StaffRoleProvider on a request-scoped session."""
    provider = getattr(request.app.state, "role_provider", None)
    if provider is not None:
        yield provider
        return
    async with database.session_scope() as session:
        yield StaffRoleProvider(session, invalidator=request.app.state.invalidator)


async def get_permission_resolver(
    request: Request,
    role_provider: Annotated[IRoleStore, Depends(get_role_provider)],
    cache: Annotated[ICacheStore, Depends(get_cache_store)],
) -> PermissionResolver:
    """Build PermissionResolver from app.state collaborators and settings."""
    settings = get_settings()
    return PermissionResolver(
        catalog=request.app.state.catalog,
        hierarchy=request.app.state.hierarchy,
        role_provider=role_provider,
        cache=cache,
        ttl=settings.cache_ttl_permissions,
        uniform_caching=settings.rbac_uniform_caching,
    )


async def get_role_assignment_service(
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
    role_provider: Annotated[IRoleStore, Depends(get_role_provider)],
) -> RoleAssignmentService:
    return RoleAssignmentService(resolver, role_provider)


def get_current_user_id(request: Request) -> str:
    """Authenticated staff user id, set upstream on request.state or forwarded as a header.

    Raises:
        AuthenticationException: No identity on the request.
    """
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        user_id = request.headers.get(get_settings().user_id_header)
    if not user_id:
        raise AuthenticationException()
    return str(user_id)


async def require_route_access(
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
) -> str:
    """Request gate: admin API routes need can_access_api, admin pages can_access_page.

    Other paths pass through. Returns the caller's user id.

    Raises:
        AuthorizationException: The role does not reach this path (403).
    """
    path = request.url.path
    if _under(path, ADMIN_API_PREFIX):
        allowed = await resolver.can_access_api(user_id, path)
    elif _under(path, ADMIN_PAGE_PREFIX):
        allowed = await resolver.can_access_page(user_id, path)
    else:
        allowed = True
    if not allowed:
        raise AuthorizationException(resource=path, action="access")
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
GatedUserId = Annotated[str, Depends(require_route_access)]
Resolver = Annotated[PermissionResolver, Depends(get_permission_resolver)]
RoleAssignment = Annotated[RoleAssignmentService, Depends(get_role_assignment_service)]
CacheStoreDep = Annotated[ICacheStore, Depends(get_cache_store)]
