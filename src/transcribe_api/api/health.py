"""Health check endpoints."""

from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


class HealthStatus(BaseModel):
    """Health check response model."""
    status: str
    timestamp: datetime
    version: str
    checks: Dict[str, Any]


@router.get(
    "/health",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Health check endpoint",
    description="Check if the service is healthy and ready to accept requests"
)
async def health_check(request: Request) -> HealthStatus:
    """Perform health check and return service status."""
    transcriber = getattr(request.app.state, "transcriber", None)
    if transcriber is None:
        transcriber_check = "not_initialised"
    elif transcriber.configured:
        transcriber_check = "configured"
    else:
        transcriber_check = "missing_credentials"

    checks = {
        "api": "healthy",
        "transcriber": transcriber_check,
    }

    overall_status = "healthy"
    if transcriber_check != "configured":
        overall_status = "degraded"

    return HealthStatus(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        checks=checks
    )


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Simple liveness check for Kubernetes"
)
async def liveness():
    """Simple liveness probe."""
    return {"status": "alive"}


@router.get(
    "/health/ready",
    summary="Readiness probe",
    description="Check if service is ready to accept traffic"
)
async def readiness(request: Request):
    """Readiness probe for Kubernetes."""
    if getattr(request.app.state, "transcriber", None) is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready"}
        )
    return {"status": "ready"}
