"""Health check endpoints: detailed status, liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shiptrack.api.v1.dependencies import get_health_service
from shiptrack.application.services import HealthService
from shiptrack.schemas.health import (
    HealthReportResponse,
    HealthResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthReportResponse)
async def health_check(
    health: Annotated[HealthService, Depends(get_health_service)],
) -> HealthReportResponse:
    """Return database and cache status with latencies. Always 200."""
    report = await health.check_health()
    return HealthReportResponse.model_validate(report)


@router.get("/live", response_model=HealthResponse)
def liveness_check() -> HealthResponse:
    """Return simple ok status for liveness. Touches no backing store."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database or cache down", "model": ReadinessResponse}},
)
async def readiness_check(
    health: Annotated[HealthService, Depends(get_health_service)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 if database and cache are up; 503 otherwise."""
    if await health.is_ready():
        return ReadinessResponse()
    return JSONResponse(
        status_code=503,
        content=ReadinessResponse(status="not_ready", ready=False).model_dump(),
    )
