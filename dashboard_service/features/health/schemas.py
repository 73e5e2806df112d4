"""Health check response schemas."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ComponentHealthDetail(BaseModel):
    """Health information for a single dependency."""

    healthy: bool = Field(description="Whether component is healthy")
    status: HealthStatus = Field(description="Component health status")
    message: str = Field(default="", description="Status message")
    latency_ms: float = Field(description="Check latency in milliseconds")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "healthy": True,
                "status": "healthy",
                "message": "Database operational",
                "latency_ms": 5.23,
            }
        }
    )


class HealthResponse(BaseModel):
    """Full health check response.

    Example:
        ```json
        {
            "status": "healthy",
            "timestamp": "2026-01-01T00:00:00Z",
            "service": "dashboard-service",
            "version": "1.0.0",
            "checks": {
                "database": {"healthy": true, "status": "healthy", "message": "Database operational", "latency_ms": 1.9}
            }
        }
        ```
    """

    status: HealthStatus = Field(description="Health status (healthy, degraded, unhealthy)")
    timestamp: datetime = Field(description="Check timestamp")
    service: str = Field(min_length=1, max_length=100, description="Service name")
    version: str = Field(min_length=1, max_length=50, description="Service version")
    checks: dict[str, ComponentHealthDetail] = Field(
        default_factory=dict, description="Individual dependency health checks"
    )


class ReadinessResponse(BaseModel):
    """Readiness probe response. Returns 200 if ready, 503 if not ready."""

    ready: bool = Field(description="Overall readiness status")
    checks: dict[str, bool] = Field(default_factory=dict, description="Individual dependency checks")
    timestamp: datetime = Field(description="Check timestamp")


class LivenessResponse(BaseModel):
    """Liveness probe response; the process is up if it can answer."""

    alive: bool = Field(description="Liveness status")
    timestamp: datetime = Field(description="Check timestamp")
    service: str = Field(min_length=1, max_length=100, description="Service name")
