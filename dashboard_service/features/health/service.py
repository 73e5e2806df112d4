"""Health checks against the service's dependencies."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
import logging
import time
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends
from sqlalchemy import text

from dashboard_service.core.dependencies import SessionFactoryDep
from dashboard_service.core.settings import AppSettings, get_app_settings
from dashboard_service.features.health.schemas import (
    ComponentHealthDetail,
    HealthResponse,
    HealthStatus,
    LivenessResponse,
    ReadinessResponse,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)

# Latency above which the database is reported as degraded
DEGRADED_LATENCY_THRESHOLD_MS = 1000.0


class HealthService:
    """Runs dependency checks and builds probe responses.

    Args:
        session_factory: Factory used for the ``SELECT 1`` probe.
        app_settings: Service name and version reported in responses.
        timeout: Seconds allowed for each dependency check.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        app_settings: AppSettings,
        timeout: float = 2.0,
        latency_threshold_ms: float = DEGRADED_LATENCY_THRESHOLD_MS,
    ) -> None:
        self._session_factory = session_factory
        self._settings = app_settings
        self._timeout = timeout
        self._latency_threshold = latency_threshold_ms

    async def check_database(self) -> ComponentHealthDetail:
        """Execute ``SELECT 1`` and measure the round trip."""
        start_time = time.perf_counter()
        try:
            async with asyncio.timeout(self._timeout):
                async with self._session_factory() as session:
                    await session.execute(text("SELECT 1"))
        except Exception as e:
            latency_ms = (time.perf_counter() - start_time) * 1000
            logger.warning(
                "Database health check failed",
                extra={"error": str(e), "error_type": type(e).__name__, "latency_ms": round(latency_ms, 2)},
            )
            message = "Database check timed out" if isinstance(e, TimeoutError) else "Database unreachable"
            return ComponentHealthDetail(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=message,
                latency_ms=latency_ms,
            )

        latency_ms = (time.perf_counter() - start_time) * 1000
        if latency_ms > self._latency_threshold:
            return ComponentHealthDetail(
                healthy=True,
                status=HealthStatus.DEGRADED,
                message=f"High latency: {latency_ms:.2f}ms",
                latency_ms=latency_ms,
            )
        return ComponentHealthDetail(
            healthy=True,
            status=HealthStatus.HEALTHY,
            message="Database operational",
            latency_ms=latency_ms,
        )

    async def check_health(self) -> HealthResponse:
        """Full check; the overall status is the worst component status."""
        checks = {"database": await self.check_database()}
        statuses = {check.status for check in checks.values()}
        if HealthStatus.UNHEALTHY in statuses:
            overall = HealthStatus.UNHEALTHY
        elif HealthStatus.DEGRADED in statuses:
            overall = HealthStatus.DEGRADED
        else:
            overall = HealthStatus.HEALTHY
        return HealthResponse(
            status=overall,
            timestamp=datetime.now(UTC),
            service=self._settings.service_name,
            version=self._settings.version,
            checks=checks,
        )

    async def readiness(self) -> ReadinessResponse:
        database = await self.check_database()
        return ReadinessResponse(
            ready=database.healthy,
            checks={"database": database.healthy},
            timestamp=datetime.now(UTC),
        )

    def liveness(self) -> LivenessResponse:
        return LivenessResponse(alive=True, timestamp=datetime.now(UTC), service=self._settings.service_name)


def get_health_service(
    session_factory: SessionFactoryDep,
    app_settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> HealthService:
    """FastAPI dependency building a ``HealthService``."""
    return HealthService(session_factory, app_settings)


HealthServiceDep = Annotated[HealthService, Depends(get_health_service)]
