"""Health, readiness and service info routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.config import settings
from ..core.database import has_db
from ..core.observability import SERVICE_NAME, SERVICE_VERSION
from ..schemas.health import (
    HealthResponse,
    HealthStatus,
    ReadinessChecks,
    ReadinessResponse,
    StorageMode,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> JSONResponse:
    """
    Health check endpoint.

    Returns current service status and timestamp.
    """
    response_data = HealthResponse(
        status=HealthStatus.HEALTHY,
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc),
    )

    logger.debug(
        "Health check requested",
        extra={
            "status": response_data.status,
            "timestamp": response_data.timestamp.isoformat()
        }
    )

    return JSONResponse(
        status_code=200,
        content=response_data.model_dump(mode="json")
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> JSONResponse:
    """
    Readiness check.

    A process without a database is still ready: it serves fallback content
    and keeps submissions in memory.
    """
    storage = StorageMode.CONFIGURED if has_db() else StorageMode.FALLBACK
    response_data = ReadinessResponse(
        status=HealthStatus.READY,
        service=SERVICE_NAME,
        checks=ReadinessChecks(database=storage),
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.get("/info", tags=["Info"])
async def service_info() -> dict:
    """Service information endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Safari tour operator API: site content, bookings, contact messages and admin console",
        "environment": settings.environment,
        "debug": settings.debug,
        "features": {
            "database": has_db(),
            "fallback_content": True,
            "tracing": True,
            "problem_details": True,
        },
        "endpoints": {
            "health": "/health",
            "readiness": "/ready",
            "info": "/info",
            "metrics": "/metrics",
            "docs": "/docs" if settings.debug else None,
        },
    }
