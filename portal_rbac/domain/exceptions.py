"""Domain exceptions for the portal RBAC core.

Defines domain-level exceptions for configuration gaps, degraded
infrastructure and rejected requests. Authorization decisions never raise
these to their callers; the resolver builds them for structured logging.
The presentation layer maps the rest to HTTP responses in exception handlers.
"""

from typing import Any


class PortalRbacException(Exception):
    """Base exception for all portal RBAC errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. user_id, operation).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(PortalRbacException):
    """Raised (or logged) when a role has no entry in the permission catalog."""

    def __init__(self, message: str, role: str | None = None) -> None:
        details = {"role": role} if role else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class CacheUnavailable(PortalRbacException):
    """Soft fault: the cache backend failed or timed out. Never surfaced to callers."""

    def __init__(self, operation: str, key: str, cause: BaseException | str) -> None:
        """Initialize with the failed cache operation.

        Args:
            operation: Cache primitive that failed (get, set, delete, ...).
            key: Cache key involved.
            cause: Underlying error or a short description (e.g. 'timeout').
        """
        super().__init__(
            f"Cache {operation} failed for {key}",
            "CACHE_UNAVAILABLE",
            {"operation": operation, "key": key, "cause": str(cause) or type(cause).__name__},
        )


class RoleLookupFailure(PortalRbacException):
    """The role provider raised while resolving a user's role; treated as no role."""

    def __init__(self, user_id: str, operation: str, cause: BaseException | str) -> None:
        """Initialize with the failed lookup context.

        Args:
            user_id: User whose role was requested.
            operation: Resolver operation that triggered the lookup.
            cause: Underlying error.
        """
        super().__init__(
            f"Role lookup failed for user {user_id}",
            "ROLE_LOOKUP_FAILURE",
            {"user_id": user_id, "operation": operation, "cause": str(cause) or type(cause).__name__},
        )


class ValidationException(PortalRbacException):
    """Raised when input validation fails (e.g. unknown role name)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(PortalRbacException):
    """Raised when the caller identity is missing (authentication happens upstream)."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(PortalRbacException):
    """Raised when the user lacks required permissions for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource (e.g. 'staff', '/api/admin/cards').
            action: Optional action that was attempted (e.g. 'roles', 'access').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(PortalRbacException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'staff_profile').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )
