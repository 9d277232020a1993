"""Health check endpoints.

Provides liveness and readiness probes for Kubernetes and load balancers.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from shopadmin.cache.redis import check_redis_health
from shopadmin.core.config import Settings, get_settings
from shopadmin.database.connection import check_database_health
from shopadmin.schemas.health import HealthResponse, ReadinessResponse


router = APIRouter(tags=["health"])

_OK_STATUSES = ("healthy", "disabled")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Check if the service is alive. External dependencies are not checked."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check verifying Redis and the database are available.",
)
async def readiness_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ReadinessResponse:
    """Check if the service is ready to handle requests."""
    dependencies: dict[str, str] = {}
    dependencies.update(await check_redis_health())

    if settings.database.enabled:
        dependencies.update(await check_database_health())
    else:
        dependencies["database"] = "disabled"

    all_healthy = all(s in _OK_STATUSES for s in dependencies.values())

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
