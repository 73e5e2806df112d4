"""Service layer and list executor wiring for dummies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dashboard_service.core.crud import CrudService
from dashboard_service.core.database import SQLAlchemyStorage
from dashboard_service.core.pagination import PaginatedQueryExecutor
from dashboard_service.features.dummies.models import Dummy
from dashboard_service.features.dummies.repository import DummyRepository, get_dummy_repository
from dashboard_service.features.dummies.resource import DUMMY_RESOURCE

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from dashboard_service.core.settings import DatabaseSettings, PaginationSettings


class DummyService(CrudService[Dummy]):
    """Create/read/update/delete for dummies on a request-scoped session."""

    def __init__(self, session: AsyncSession, repository: DummyRepository | None = None) -> None:
        super().__init__(session, repository or get_dummy_repository(), resource_name=DUMMY_RESOURCE.name)


def build_dummy_executor(
    session_factory: async_sessionmaker[AsyncSession],
    pagination: PaginationSettings,
    database: DatabaseSettings,
) -> PaginatedQueryExecutor[Dummy]:
    """Compose the dummies resource with SQLAlchemy snapshot storage."""
    storage = SQLAlchemyStorage(
        session_factory,
        Dummy,
        id_field=DUMMY_RESOURCE.id_field,
        isolation_level=database.snapshot_isolation,
    )
    return PaginatedQueryExecutor(
        DUMMY_RESOURCE,
        storage,
        default_limit=pagination.default_limit,
        max_limit=pagination.max_limit,
        timeout=pagination.query_timeout,
    )


__all__ = ["DummyService", "build_dummy_executor"]
