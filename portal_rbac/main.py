"""FastAPI application entry point.

Wiring only: logging, lifespan, exception handlers, routers.
No business logic here. See portal_rbac.core.lifespan and
portal_rbac.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and clear
the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI

from portal_rbac.api.v1 import admin_router, api_router
from portal_rbac.core.config import get_settings
from portal_rbac.core.exception_handlers import register_exception_handlers
from portal_rbac.core.lifespan import create_lifespan
from portal_rbac.shared.telemetry import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/admin")

    return app


app = create_app()
