"""
Health check and monitoring endpoints.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from log_service.config import Settings
from log_service.database import Database, get_db
from log_service.models import HealthStatus

router = APIRouter(tags=["monitoring"])

# Track application start time
START_TIME = time.time()


def get_app_settings(request: Request) -> Settings:
    """Dependency injection for the settings the app was created with."""
    return request.app.state.settings


@router.get("/health", response_model=HealthStatus)
async def health_check(
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """
    Health check endpoint.

    Returns the overall health status of the service including:
    - Database connectivity
    - Service uptime
    - Application version
    """
    db_healthy = await db.health_check()

    return HealthStatus(
        status="healthy" if db_healthy else "unhealthy",
        version=settings.app_version,
        database="connected" if db_healthy else "disconnected",
        uptime_seconds=time.time() - START_TIME,
        timestamp=datetime.now(timezone.utc)
    )


@router.get("/health/live")
async def liveness_check():
    """
    Liveness probe.

    Does not check dependencies.
    """
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness_check(db: Database = Depends(get_db)):
    """
    Readiness probe.

    Verifies database connectivity.
    """
    db_healthy = await db.health_check()

    if not db_healthy:
        return Response(
            content='{"status": "not ready", "reason": "database disconnected"}',
            status_code=503,
            media_type="application/json"
        )

    return {"status": "ready"}


async def metrics():
    """
    Prometheus metrics endpoint.

    Mounted at ``settings.metrics_path`` when metrics are enabled.
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get("/info")
async def info(settings: Settings = Depends(get_app_settings)):
    """Basic information about the running service."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "uptime_seconds": time.time() - START_TIME
    }
