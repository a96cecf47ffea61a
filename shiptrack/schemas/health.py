"""Health check API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for GET /health/live (liveness)."""

    status: str = Field(default="ok", description="Service status")


class DependencyStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: str = Field(..., description="up, down or disabled")
    latency_ms: int | None = None
    error: str | None = None


class HealthReportResponse(BaseModel):
    """Response for GET /health (detailed)."""

    model_config = ConfigDict(from_attributes=True)

    status: str = Field(..., description="healthy or unhealthy")
    timestamp: datetime
    uptime_seconds: int
    database: DependencyStatusResponse
    cache: DependencyStatusResponse


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready (503 when not ready)."""

    status: str = Field(default="ok", description="ok or not_ready")
    ready: bool = True
