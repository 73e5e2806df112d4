"""Router factory for paginated CRUD resources.

Builds the standard route set for one resource by composing a service
dependency (single-record operations) with an executor dependency
(listings):

    POST   /            create, 201
    GET    /            offset listing
    GET    /cursor      cursor listing
    GET    /{id}        fetch one
    PUT    /{id}        update
    DELETE /{id}        delete, 204

Annotations here are evaluated eagerly (no postponed evaluation) so the
per-resource schema types bound in the closure reach FastAPI.
"""

from collections.abc import Callable
import logging
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from dashboard_service.core.crud.schemas import CursorListQuery, OffsetListQuery
from dashboard_service.core.crud.service import CrudService
from dashboard_service.core.pagination.executor import PaginatedQueryExecutor
from dashboard_service.core.pagination.schemas import (
    CursorListResponse,
    OffsetListResponse,
    ResponseEnvelope,
)

logger = logging.getLogger(__name__)


def parse_query[Q: BaseModel](schema: type[Q], request: Request) -> Q:
    """Validate the raw query string against ``schema``.

    Raises:
        RequestValidationError: With ``query``-prefixed error locations.
    """
    try:
        return schema.model_validate(dict(request.query_params))
    except ValidationError as exc:
        raise RequestValidationError(
            [{**error, "loc": ("query", *error["loc"])} for error in exc.errors(include_url=False)]
        ) from exc


def query_parameters(schema: type[BaseModel]) -> list[dict[str, Any]]:
    """OpenAPI parameter objects for a query model read from ``Request``."""
    return [
        {
            "name": field.alias or name,
            "in": "query",
            "required": False,
            "description": field.description or "",
            "schema": {"type": "string"},
        }
        for name, field in schema.model_fields.items()
    ]


def create_crud_router(
    *,
    prefix: str,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    response_schema: type[BaseModel],
    get_service: Callable[..., Any],
    get_executor: Callable[..., Any],
    offset_query: type[OffsetListQuery] = OffsetListQuery,
    cursor_query: type[CursorListQuery] = CursorListQuery,
    id_type: type = UUID,
    tags: list[str] | None = None,
) -> APIRouter:
    """Build the CRUD and list routes for one resource.

    Args:
        prefix: Collection path, e.g. ``/dummies``.
        create_schema: POST body model.
        update_schema: PUT body model; only fields sent are applied.
        response_schema: Item model, validated from ORM instances.
        get_service: Dependency returning a ``CrudService``.
        get_executor: Dependency returning a ``PaginatedQueryExecutor``.
        offset_query: Query model for the offset listing.
        cursor_query: Query model for the cursor listing.
        id_type: Type of the ``{id}`` path parameter.
        tags: OpenAPI tags.

    Returns:
        Router to include under the API prefix.
    """
    router = APIRouter(prefix=prefix, tags=tags)
    serialize = response_schema.model_validate

    ServiceDep = Annotated[CrudService, Depends(get_service)]
    ExecutorDep = Annotated[PaginatedQueryExecutor, Depends(get_executor)]

    def offset_params(request: Request) -> OffsetListQuery:
        return parse_query(offset_query, request)

    def cursor_params(request: Request) -> CursorListQuery:
        return parse_query(cursor_query, request)

    @router.post(
        "",
        status_code=status.HTTP_201_CREATED,
        response_model=ResponseEnvelope[response_schema],
        summary="Create an item",
    )
    async def create_item(payload: create_schema, service: ServiceDep) -> Any:
        created = await service.create(payload)
        return ResponseEnvelope[response_schema](status=status.HTTP_201_CREATED, data=serialize(created))

    @router.get(
        "",
        response_model=OffsetListResponse[response_schema],
        summary="List items by page",
        openapi_extra={"parameters": query_parameters(offset_query)},
    )
    async def list_items(
        executor: ExecutorDep,
        params: Annotated[OffsetListQuery, Depends(offset_params)],
    ) -> Any:
        page = await executor.list_offset(params.to_raw())
        return OffsetListResponse[response_schema].from_page(page, serialize)

    @router.get(
        "/cursor",
        response_model=CursorListResponse[response_schema],
        summary="List items after a cursor",
        openapi_extra={"parameters": query_parameters(cursor_query)},
    )
    async def list_items_by_cursor(
        executor: ExecutorDep,
        params: Annotated[CursorListQuery, Depends(cursor_params)],
    ) -> Any:
        page = await executor.list_cursor(params.to_raw())
        return CursorListResponse[response_schema].from_page(page, serialize)

    @router.get(
        "/{item_id}",
        response_model=ResponseEnvelope[response_schema],
        summary="Get an item",
    )
    async def get_item(item_id: id_type, service: ServiceDep) -> Any:
        return ResponseEnvelope[response_schema](data=serialize(await service.get(item_id)))

    @router.put(
        "/{item_id}",
        response_model=ResponseEnvelope[response_schema],
        summary="Update an item",
    )
    async def update_item(item_id: id_type, payload: update_schema, service: ServiceDep) -> Any:
        updated = await service.update(item_id, payload)
        return ResponseEnvelope[response_schema](data=serialize(updated))

    @router.delete(
        "/{item_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        summary="Delete an item",
    )
    async def delete_item(item_id: id_type, service: ServiceDep) -> Response:
        await service.delete(item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    logger.debug("CRUD router built", extra={"prefix": prefix, "schema": response_schema.__name__})
    return router


__all__ = ["create_crud_router", "parse_query", "query_parameters"]
