"""
Health check endpoints.

Provides basic and detailed health check functionality.
"""

import time
from pathlib import Path
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from api.schemas.common import (
    HealthStatus,
    HealthCheckResponse,
    DetailedHealthCheckResponse,
    ComponentHealth,
)
from core.config import get_settings, Settings
from database import DatabaseHealthCheck

router = APIRouter(prefix="/health", tags=["health"])

# Track application start time for uptime calculation
_start_time = time.time()


@router.get(
    "",
    response_model=HealthCheckResponse,
    summary="Basic health check",
    description="Quick health check endpoint for load balancers and container orchestration.",
)
async def health_check() -> HealthCheckResponse:
    """
    Basic health check.

    Returns a simple healthy status if the API is running.
    """
    return HealthCheckResponse(
        status=HealthStatus.HEALTHY,
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/detailed",
    response_model=DetailedHealthCheckResponse,
    summary="Detailed health check",
    description="Health check with database connectivity and upload directory status.",
)
async def detailed_health_check(
    settings: Settings = Depends(get_settings),
) -> DetailedHealthCheckResponse:
    """
    Detailed health check with component status.

    Checks the health of:
    - PostgreSQL connection
    - Image uploads directory
    """
    components = {}
    overall_status = HealthStatus.HEALTHY

    # Check database
    db_health = await DatabaseHealthCheck.check()
    if db_health["status"] == "healthy":
        components["database"] = ComponentHealth(
            status=HealthStatus.HEALTHY,
            latency_ms=db_health.get("latency_ms"),
        )
    else:
        components["database"] = ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            error=db_health.get("error") or "Database not initialized",
        )
        overall_status = HealthStatus.UNHEALTHY

    # Check uploads directory (created on first upload)
    uploads = Path(settings.uploads_dir)
    if uploads.is_dir():
        components["uploads"] = ComponentHealth(
            status=HealthStatus.HEALTHY,
            details={"path": str(uploads)},
        )
    else:
        components["uploads"] = ComponentHealth(
            status=HealthStatus.DEGRADED,
            error="Uploads directory does not exist yet",
        )
        if overall_status == HealthStatus.HEALTHY:
            overall_status = HealthStatus.DEGRADED

    uptime_seconds = time.time() - _start_time

    return DetailedHealthCheckResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        environment=settings.environment,
        uptime_seconds=round(uptime_seconds, 2),
        components=components,
    )
