"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings pinned before any application module is imported
    - Database Fixtures: in-memory SQLite engine, session factory, sample rows
    - Application Fixtures: FastAPI app wired to the test database, HTTP client
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
import os
from typing import TYPE_CHECKING
import uuid

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from dashboard_service.features.dummies.models import Dummy

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("APP_SERVICE_NAME", "test-service")
os.environ.setdefault("DB_ENABLED", "false")
os.environ.setdefault("DB_FALLBACK_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_JSON_LOGS", "false")
os.environ.setdefault("PAGINATION_DEFAULT_LIMIT", "20")
os.environ.setdefault("PAGINATION_MAX_LIMIT", "100")

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Async engine on a private in-memory SQLite database with all tables.

    ``StaticPool`` keeps a single connection so every session sees the
    same database.
    """
    from dashboard_service.infra.database import configure_sqlite_engine, create_all

    engine = configure_sqlite_engine(
        create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    )
    await create_all(bind=engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def dummy_factory(session_factory: async_sessionmaker[AsyncSession]):
    """Insert dummies with deterministic timestamps.

    Each row is ``(name, description)``; the n-th row is created n minutes
    after ``BASE_TIME`` so the default newest-first order is known.

    Example:
        rows = await dummy_factory(("alpha", None), ("beta", "fifteen chars ok"))
    """
    from dashboard_service.features.dummies.models import Dummy

    async def create(*values: tuple[str, str | None]) -> list[Dummy]:
        rows = [
            Dummy(
                id=uuid.uuid4(),
                name=name,
                description=description,
                created_at=BASE_TIME + timedelta(minutes=index),
                updated_at=BASE_TIME + timedelta(minutes=index),
            )
            for index, (name, description) in enumerate(values)
        ]
        async with session_factory() as session:
            session.add_all(rows)
            await session.commit()
        return rows

    return create


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    """FastAPI application whose sessions come from the test database."""
    from dashboard_service.app.main import create_app
    from dashboard_service.core.dependencies import get_session_factory

    application = create_app()
    application.dependency_overrides[get_session_factory] = lambda: session_factory
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTPX client calling the app in-process.

    Example:
        async def test_liveness(client):
            response = await client.get("/api/v1/health/liveness")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
