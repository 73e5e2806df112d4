"""Health check API endpoints.

- Full health: /health - database check with latency
- Liveness probe: /health/liveness - is the process alive?
- Readiness probe: /health/readiness - can the service accept traffic?
"""

from fastapi import APIRouter, Response, status

from dashboard_service.features.health.schemas import (
    HealthResponse,
    HealthStatus,
    LivenessResponse,
    ReadinessResponse,
)
from dashboard_service.features.health.service import HealthServiceDep

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthResponse,
    summary="Full health check",
    responses={503: {"model": HealthResponse, "description": "A dependency is unhealthy"}},
)
async def health_check(service: HealthServiceDep, response: Response) -> HealthResponse:
    """Return overall status and per-dependency results; 503 when unhealthy."""
    result = await service.check_health()
    if result.status == HealthStatus.UNHEALTHY:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result


@router.get("/liveness", response_model=LivenessResponse, summary="Liveness probe")
async def liveness(service: HealthServiceDep) -> LivenessResponse:
    return service.liveness()


@router.get(
    "/readiness",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    responses={503: {"model": ReadinessResponse, "description": "Service not ready"}},
)
async def readiness(service: HealthServiceDep, response: Response) -> ReadinessResponse:
    """Return 200 when the database answers, 503 otherwise."""
    result = await service.readiness()
    if not result.ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result
