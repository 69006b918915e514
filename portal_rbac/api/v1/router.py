"""API router aggregation.

Public RBAC routes live under /api/v1; admin routes under /api/admin so the
request gate can match them against the catalog's API patterns.
"""

from fastapi import APIRouter

from portal_rbac.api.v1.endpoints import health, rbac, staff

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(rbac.router, prefix="/rbac", tags=["rbac"])

admin_router = APIRouter()

admin_router.include_router(staff.router, prefix="/staff", tags=["staff"])
