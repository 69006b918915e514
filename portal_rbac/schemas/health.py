"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready.

    The service stays ready when the cache is down; decisions then recompute.
    """

    status: str = Field(default="ok", description="Readiness status")
    cache: str = Field(..., description="'configured' or 'unconfigured'")
    cache_healthy: bool = Field(..., description="Result of the cache liveness probe")
