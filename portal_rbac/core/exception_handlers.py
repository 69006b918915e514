"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps portal RBAC and framework
exceptions to HTTP responses and logs access refusals with the route checked.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portal_rbac.core.config import get_settings
from portal_rbac.domain.exceptions import PortalRbacException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "VALIDATION_ERROR": 400,
    "CONFIGURATION_ERROR": 500,
}


# Refusals logged for audit: who was turned away from which route.
_AUDITED_ERROR_CODES = frozenset({"AUTHENTICATION_ERROR", "PERMISSION_DENIED"})


def _caller(request: Request) -> str | None:
    user_id = getattr(request.state, "user_id", None)
    return user_id or request.headers.get(get_settings().user_id_header)


def _portal_exception_handler(
    request: Request, exc: PortalRbacException
) -> JSONResponse:
    """Return JSON from PortalRbacException.to_dict() with appropriate status code.

    Access refusals are logged at WARNING with caller, method and path;
    catalog configuration gaps at ERROR.
    """
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if exc.error_code in _AUDITED_ERROR_CODES:
        logger.warning(
            "%s: user_id=%s method=%s path=%s details=%s",
            exc.error_code,
            _caller(request),
            request.method,
            request.url.path,
            exc.details,
        )
    elif status >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status,
        content=exc.to_dict(),
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: PortalRbacException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(PortalRbacException, _portal_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
