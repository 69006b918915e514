"""Permission catalog: static, total mapping from role to what it grants.

Pure in-memory lookups, built once at start-up. Unknown roles resolve to
empty sets (fail-closed) and are reported once per role.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from portal_rbac.application.dtos.permission import RoleProfile
from portal_rbac.application.services.catalog_data import (
    ADMIN_PAGES,
    PERMISSIONS,
    ROLE_PERMISSIONS,
)
from portal_rbac.domain.enums import Role
from portal_rbac.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_EMPTY: frozenset[str] = frozenset()


class PermissionCatalog:
    """Role -> RoleProfile lookups (permissions, pages, API patterns)."""

    def __init__(
        self,
        profiles: Mapping[Role, RoleProfile],
        universe: Iterable[str] | None = None,
        admin_pages: Iterable[str] = ADMIN_PAGES,
    ) -> None:
        """Initialize from per-role profiles.

        Args:
            profiles: One RoleProfile per role; missing roles resolve to empty sets.
            universe: All grantable permission keys; defaults to the union of grants.
            admin_pages: Known admin page sections beyond those granted to roles.
        """
        self._profiles: dict[Role, RoleProfile] = dict(profiles)
        granted = frozenset().union(*(p.permissions for p in self._profiles.values()))
        self._universe = frozenset(universe) if universe is not None else granted
        self._known_pages = frozenset(admin_pages).union(
            *(p.pages for p in self._profiles.values())
        )
        self._reported: set[str] = set()
        missing = self.missing_roles()
        if missing:
            logger.warning(
                "Permission catalog has no profile for roles %s; they resolve to no access",
                [r.value for r in missing],
            )

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Mapping[str, Any]],
        universe: Iterable[str] | None = None,
        admin_pages: Iterable[str] = ADMIN_PAGES,
    ) -> PermissionCatalog:
        """Build a catalog from role-name-keyed configuration data.

        Each value holds "permissions", "pages" and "api_endpoints" lists.

        Raises:
            ConfigurationError: If a key is not a known role name.
        """
        profiles: dict[Role, RoleProfile] = {}
        for name, entry in mapping.items():
            role = Role.parse(name)
            if role is None:
                raise ConfigurationError(f"Unknown role in permission catalog: {name!r}", role=name)
            profiles[role] = RoleProfile(
                role=role,
                permissions=frozenset(entry.get("permissions", ())),
                pages=frozenset(entry.get("pages", ())),
                api_patterns=frozenset(entry.get("api_endpoints", ())),
            )
        return cls(profiles, universe=universe, admin_pages=admin_pages)

    def missing_roles(self) -> list[Role]:
        """Roles without a profile (empty for a total catalog)."""
        return [role for role in Role if role not in self._profiles]

    def all_permissions(self) -> frozenset[str]:
        """The global permission universe."""
        return self._universe

    def known_pages(self) -> frozenset[str]:
        """Every admin page section known to the catalog."""
        return self._known_pages

    def profile_for(self, role: Role | str | None) -> RoleProfile | None:
        """Return the role's profile, or None (logged once) when it has none."""
        parsed = Role.parse(role)
        profile = self._profiles.get(parsed) if parsed is not None else None
        if profile is None:
            self._report_missing(role)
        return profile

    def permissions_for(self, role: Role | str | None) -> frozenset[str]:
        profile = self.profile_for(role)
        return profile.permissions if profile else _EMPTY

    def pages_for(self, role: Role | str | None) -> frozenset[str]:
        profile = self.profile_for(role)
        return profile.pages if profile else _EMPTY

    def api_patterns_for(self, role: Role | str | None) -> frozenset[str]:
        profile = self.profile_for(role)
        return profile.api_patterns if profile else _EMPTY

    def _report_missing(self, role: Role | str | None) -> None:
        name = role.value if isinstance(role, Role) else str(role)
        if name in self._reported:
            return
        self._reported.add(name)
        error = ConfigurationError(f"Role {name!r} has no permission catalog entry", role=name)
        logger.warning("%s (%s); denying by default", error.message, error.error_code)


def default_catalog() -> PermissionCatalog:
    """Catalog built from the source-controlled table in catalog_data."""
    return PermissionCatalog.from_mapping(ROLE_PERMISSIONS, universe=PERMISSIONS.values())


def load_catalog(path: str | Path) -> PermissionCatalog:
    """Load a catalog from a JSON file keyed by role name.

    The permission universe is the union of every role's grants.

    Raises:
        ConfigurationError: If the file cannot be read or is not a JSON object.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot load permission catalog from {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Permission catalog {path} must be a JSON object keyed by role")
    return PermissionCatalog.from_mapping(data)
