"""Integration tests for health check endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from dashboard_service.core.dependencies import get_session_factory

pytestmark = pytest.mark.integration


@pytest.fixture
async def unreachable_db(app):
    """Point every session at a SQLite file that cannot be opened."""
    engine = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/health.db")
    app.dependency_overrides[get_session_factory] = lambda: async_sessionmaker(engine)
    try:
        yield
    finally:
        await engine.dispose()


async def test_health_reports_database(client: AsyncClient):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "test-service"
    assert body["checks"]["database"]["healthy"] is True
    assert body["checks"]["database"]["latency_ms"] >= 0


async def test_liveness(client: AsyncClient):
    response = await client.get("/api/v1/health/liveness")

    assert response.status_code == 200
    assert response.json()["alive"] is True


async def test_readiness(client: AsyncClient):
    response = await client.get("/api/v1/health/readiness")

    assert response.status_code == 200
    assert response.json()["ready"] is True
    assert response.json()["checks"] == {"database": True}


async def test_health_unhealthy_database(client: AsyncClient, unreachable_db):
    response = await client.get("/api/v1/health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "unhealthy"
    assert body["checks"]["database"]["healthy"] is False


async def test_readiness_unhealthy_database(client: AsyncClient, unreachable_db):
    response = await client.get("/api/v1/health/readiness")

    assert response.status_code == 503
    assert response.json()["ready"] is False


async def test_liveness_ignores_database(client: AsyncClient, unreachable_db):
    response = await client.get("/api/v1/health/liveness")

    assert response.status_code == 200
