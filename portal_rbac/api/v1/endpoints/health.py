"""Health check endpoints: liveness and readiness (reports cache state)."""

from fastapi import APIRouter

from portal_rbac.api.v1.dependencies import CacheStoreDep
from portal_rbac.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(cache: CacheStoreDep) -> ReadinessResponse:
    """Return cache mode and liveness. A degraded cache does not make the service unready."""
    return ReadinessResponse(
        cache="configured" if cache.is_configured else "unconfigured",
        cache_healthy=await cache.is_healthy(),
    )
