"""Domain layer: roles and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from portal_rbac.domain.enums import ROLE_LEVELS, Role
from portal_rbac.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CacheUnavailable,
    ConfigurationError,
    PortalRbacException,
    ResourceNotFoundException,
    RoleLookupFailure,
    ValidationException,
)

__all__ = [
    # Enums
    "ROLE_LEVELS",
    "Role",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "CacheUnavailable",
    "ConfigurationError",
    "PortalRbacException",
    "ResourceNotFoundException",
    "RoleLookupFailure",
    "ValidationException",
]
