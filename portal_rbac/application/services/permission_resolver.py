"""Permission resolver: authorization decisions for staff users, cache-aside.

Composes the permission catalog, the role hierarchy, a role provider and a
cache store. Every public operation returns a decision and never raises:
cache faults degrade to a recompute, a failed role lookup counts as "no
role" and an unknown role grants nothing.

has_permission (and get_user_permissions) read the cached entry first and
write it back on a miss. Page and API checks look the role up on every call
unless uniform_caching is enabled, in which case they read the same entry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from portal_rbac.application.dtos.permission import CachedPermissionEntry, RoleProfile
from portal_rbac.application.interfaces.services import ICacheStore, IRoleProvider
from portal_rbac.application.services.permission_catalog import PermissionCatalog
from portal_rbac.application.services.role_hierarchy import RoleHierarchy
from portal_rbac.core.constants import PERMISSION_CACHE_TTL_SECONDS
from portal_rbac.domain.enums import Role
from portal_rbac.domain.exceptions import CacheUnavailable, RoleLookupFailure
from portal_rbac.infrastructure.cache.keys import permission_key

logger = logging.getLogger(__name__)


def _strip_query(path: str) -> str:
    return path.split("?", 1)[0].split("#", 1)[0]


def _normalize_page(path: str) -> str:
    path = _strip_query(path).strip()
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def _covers(section: str, path: str) -> bool:
    """True when path is section itself or lies below it at a '/' boundary."""
    if section == "/":
        return path.startswith("/")
    return path == section or path.startswith(section + "/")


def page_matches(path: str, allowed: Iterable[str], known: Iterable[str]) -> bool:
    """Return True if the most specific page section covering path is allowed.

    Sections are the known admin pages plus the allowed ones. "/admin" covers
    "/admin/users/42", but "/admin/staff" is a section of its own, so a role
    granted "/admin" only reaches "/admin/staff" if it is granted that too.
    """
    target = _normalize_page(path)
    if not target:
        return False
    allowed_pages = {_normalize_page(p) for p in allowed if p}
    sections = allowed_pages | {_normalize_page(p) for p in known if p}
    covering = [s for s in sections if _covers(s, target)]
    if not covering:
        return False
    return max(covering, key=len) in allowed_pages


def api_pattern_matches(endpoint: str, patterns: Iterable[str]) -> bool:
    """Return True if endpoint equals a pattern or falls under a '/*' pattern.

    "/api/admin/users/*" matches "/api/admin/users", "/api/admin/users/123"
    and "/api/admin/users/123/edit", not "/api/admin/userstuff".
    """
    target = _strip_query(endpoint)
    if not target:
        return False
    for pattern in patterns:
        if target == pattern:
            return True
        if pattern.endswith("/*"):
            base = pattern[:-2]
            if target == base or target.startswith(base + "/"):
                return True
    return False


class PermissionResolver:
    """Answers has_permission / can_access_page / can_access_api / can_manage_user."""

    def __init__(
        self,
        catalog: PermissionCatalog,
        hierarchy: RoleHierarchy,
        role_provider: IRoleProvider,
        cache: ICacheStore,
        *,
        ttl: int = PERMISSION_CACHE_TTL_SECONDS,
        uniform_caching: bool = False,
    ) -> None:
        """Initialize the resolver.

        Args:
            catalog: Role -> permissions/pages/API patterns.
            hierarchy: Role ranking for can_manage_user.
            role_provider: Source of truth for a user's current role.
            cache: Cache store (configured or the no-op variant).
            ttl: Lifetime in seconds of a cached permission entry.
            uniform_caching: Serve page/API checks from the cached entry too.
        """
        self.catalog = catalog
        self.hierarchy = hierarchy
        self.role_provider = role_provider
        self.cache = cache
        self.ttl = ttl
        self.uniform_caching = uniform_caching

    # ---- Fine-grained permissions (cache-aside) ----

    async def has_permission(self, user_id: str, permission: str) -> bool:
        """Return True if the user's role grants permission. Cache-backed."""
        entry = await self._resolve_entry(user_id, "has_permission")
        allowed = entry is not None and permission in entry.permissions
        logger.debug("has_permission user_id=%s permission=%s -> %s", user_id, permission, allowed)
        return allowed

    async def validate_action(self, user_id: str, resource: str, action: str) -> bool:
        """has_permission for the key "resource:action"."""
        return await self.has_permission(user_id, f"{resource}:{action}")

    async def get_user_permissions(self, user_id: str) -> frozenset[str]:
        """Return every permission key the user holds (empty when no role)."""
        entry = await self._resolve_entry(user_id, "get_user_permissions")
        return entry.permissions if entry else frozenset()

    # ---- Pages and API routes ----

    async def can_access_page(self, user_id: str, path: str) -> bool:
        """Return True if path falls within one of the role's page sections."""
        profile = await self._route_profile(user_id, "can_access_page")
        allowed = profile is not None and page_matches(path, profile.pages, self.catalog.known_pages())
        logger.debug("can_access_page user_id=%s path=%s -> %s", user_id, path, allowed)
        return allowed

    async def can_access_api(self, user_id: str, endpoint: str) -> bool:
        """Return True if endpoint matches one of the role's API patterns."""
        profile = await self._route_profile(user_id, "can_access_api")
        allowed = profile is not None and api_pattern_matches(endpoint, profile.api_patterns)
        logger.debug("can_access_api user_id=%s endpoint=%s -> %s", user_id, endpoint, allowed)
        return allowed

    async def get_user_pages(self, user_id: str) -> frozenset[str]:
        """Return the page sections the user may open (empty when no role)."""
        profile = await self._route_profile(user_id, "get_user_pages")
        return profile.pages if profile else frozenset()

    # ---- Hierarchy ----

    async def can_manage_user(self, manager_id: str, target_id: str) -> bool:
        """Return True only when manager's role strictly outranks target's.

        Lookups run one after the other: a SQL role provider shares one
        session per request, which does not accept concurrent queries.
        """
        manager_role = await self._role_of(manager_id, "can_manage_user")
        if manager_role is None:
            return False
        target_role = await self._role_of(target_id, "can_manage_user")
        if target_role is None:
            return False
        return self.hierarchy.can_manage(manager_role, target_role)

    async def is_admin(self, user_id: str) -> bool:
        """True for staff admitted to the admin area (manager and above)."""
        return self.hierarchy.is_admin(await self._role_of(user_id, "is_admin"))

    async def is_super_admin(self, user_id: str) -> bool:
        return self.hierarchy.is_super_admin(await self._role_of(user_id, "is_super_admin"))

    async def role_of(self, user_id: str) -> Role | None:
        """Current role of user_id; None when missing, unknown or the lookup failed."""
        return Role.parse(await self._role_of(user_id, "role_of"))

    # ---- Internals ----

    async def _role_of(self, user_id: str, operation: str) -> Role | str | None:
        """Ask the role provider; any failure is logged and treated as no role."""
        try:
            return await self.role_provider.role_of(user_id)
        except Exception as e:
            failure = RoleLookupFailure(user_id, operation, e)
            logger.warning(
                "%s: user_id=%s operation=%s cause=%s",
                failure.error_code,
                user_id,
                operation,
                failure.details["cause"],
            )
            return None

    async def _route_profile(self, user_id: str, operation: str) -> RoleProfile | None:
        if self.uniform_caching:
            entry = await self._resolve_entry(user_id, operation)
            if entry is None:
                return None
            return RoleProfile(
                role=entry.role,
                permissions=entry.permissions,
                pages=entry.pages,
                api_patterns=entry.api_patterns,
            )
        role = await self._role_of(user_id, operation)
        if role is None:
            return None
        return self.catalog.profile_for(role)

    async def _resolve_entry(self, user_id: str, operation: str) -> CachedPermissionEntry | None:
        """Cached entry for user_id, recomputed and written back on a miss."""
        key = self._key(user_id)
        if key is not None:
            entry = await self._read_cached(key, user_id)
            if entry is not None:
                return entry

        role = await self._role_of(user_id, operation)
        if role is None:
            return None
        profile = self.catalog.profile_for(role)
        if profile is None:
            return None
        entry = CachedPermissionEntry.from_profile(user_id, profile, self.ttl)
        if key is not None:
            await self._write_cached(key, entry)
        return entry

    def _key(self, user_id: str) -> str | None:
        try:
            return permission_key(user_id)
        except ValueError:
            logger.warning("Not caching permissions for user_id=%r: unusable as a cache key", user_id)
            return None

    async def _read_cached(self, key: str, user_id: str) -> CachedPermissionEntry | None:
        try:
            raw = await self.cache.get(key)
        except Exception as e:
            self._log_cache_fault(CacheUnavailable("get", key, e), user_id)
            return None
        if raw is None:
            return None
        entry = CachedPermissionEntry.from_cache(raw)
        if entry is None or entry.user_id != user_id:
            logger.warning("Discarding malformed cached permissions for user_id=%s", user_id)
            return None
        if entry.is_expired():
            return None
        return entry

    async def _write_cached(self, key: str, entry: CachedPermissionEntry) -> None:
        try:
            await self.cache.set(key, entry.to_cache(), self.ttl)
        except Exception as e:
            self._log_cache_fault(CacheUnavailable("set", key, e), entry.user_id)

    @staticmethod
    def _log_cache_fault(error: CacheUnavailable, user_id: str) -> None:
        logger.warning(
            "%s: user_id=%s operation=%s cause=%s",
            error.error_code,
            user_id,
            error.details["operation"],
            error.details["cause"],
        )
