"""Health-related Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"
    READY = "ready"


class StorageMode(str, Enum):
    """Where data requests are being served from."""
    CONFIGURED = "configured"
    FALLBACK = "fallback"


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: HealthStatus = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: str = Field("1.0.0", description="API version")
    environment: str = Field(..., description="Deployment environment")
    timestamp: datetime = Field(..., description="Current server time (ISO 8601)")


class ReadinessChecks(BaseModel):
    database: StorageMode


class ReadinessResponse(BaseModel):
    """Readiness response; a fallback-only process is still ready."""

    status: HealthStatus
    service: str
    checks: ReadinessChecks
