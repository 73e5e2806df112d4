"""API router for the dummies feature.

Endpoints:
    POST   /dummies            - Create a dummy
    GET    /dummies            - Offset listing (page, limit)
    GET    /dummies/cursor     - Cursor listing (cursor, limit)
    GET    /dummies/{id}       - Fetch a dummy
    PUT    /dummies/{id}       - Update a dummy
    DELETE /dummies/{id}       - Delete a dummy

Both listings accept ``searchTerm``, ``searchFields``, ``sortField``,
``sortDirection`` and the ``name``/``description`` filters:

    GET /dummies?searchTerm=alp&sortField=name&sortDirection=asc&page=2&limit=10
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends

from dashboard_service.core.crud import create_crud_router
from dashboard_service.core.dependencies import DBSessionDep, PaginationSettingsDep, SessionFactoryDep
from dashboard_service.core.pagination import PaginatedQueryExecutor
from dashboard_service.core.settings import DatabaseSettings, get_db_settings
from dashboard_service.features.dummies.models import Dummy
from dashboard_service.features.dummies.schemas import (
    DummyCreate,
    DummyCursorQuery,
    DummyOffsetQuery,
    DummyResponse,
    DummyUpdate,
)
from dashboard_service.features.dummies.service import DummyService, build_dummy_executor


def get_dummy_service(session: DBSessionDep) -> DummyService:
    return DummyService(session)


def get_dummy_executor(
    session_factory: SessionFactoryDep,
    pagination: PaginationSettingsDep,
    database: Annotated[DatabaseSettings, Depends(get_db_settings)],
) -> PaginatedQueryExecutor[Dummy]:
    return build_dummy_executor(session_factory, pagination, database)


router = create_crud_router(
    prefix="/dummies",
    create_schema=DummyCreate,
    update_schema=DummyUpdate,
    response_schema=DummyResponse,
    get_service=get_dummy_service,
    get_executor=get_dummy_executor,
    offset_query=DummyOffsetQuery,
    cursor_query=DummyCursorQuery,
    id_type=UUID,
    tags=["dummies"],
)
