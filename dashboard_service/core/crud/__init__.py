"""Reusable CRUD building blocks: query models, service and router factory."""

from dashboard_service.core.crud.router import create_crud_router
from dashboard_service.core.crud.schemas import CursorListQuery, ListQueryParams, OffsetListQuery
from dashboard_service.core.crud.service import CrudService

__all__ = [
    "CrudService",
    "CursorListQuery",
    "ListQueryParams",
    "OffsetListQuery",
    "create_crud_router",
]
