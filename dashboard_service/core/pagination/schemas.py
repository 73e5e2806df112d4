"""HTTP response envelopes for list and item endpoints.

Every JSON body produced by a resource router has the same outer shape:

    {"status": 200, "message": "Success", "data": ...}

Offset listings add ``pagination``; cursor listings add ``nextCursor``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .envelopes import CursorPage, OffsetPage

T = TypeVar("T")

SUCCESS_MESSAGE = "Success"


class PaginationMeta(BaseModel):
    """Offset pagination metadata."""

    total: int = Field(ge=0, description="Total number of matching items")
    page: int = Field(ge=1, description="Current page number")
    limit: int = Field(ge=1, description="Items per page")


class ResponseEnvelope(BaseModel, Generic[T]):
    """Single-item response."""

    status: int = Field(default=200, description="HTTP status code")
    message: str = Field(default=SUCCESS_MESSAGE, description="Response message")
    data: T = Field(description="Response data")


class OffsetListResponse(BaseModel, Generic[T]):
    """Offset-paginated list response.

    Usage:
        @router.get("/", response_model=OffsetListResponse[DummyResponse])
        async def list_dummies(...):
            page = await executor.list_offset(params)
            return OffsetListResponse.from_page(page, DummyResponse.model_validate)
    """

    status: int = Field(default=200, description="HTTP status code")
    message: str = Field(default=SUCCESS_MESSAGE, description="Response message")
    data: list[T] = Field(default_factory=list, description="Items on this page")
    pagination: PaginationMeta

    @classmethod
    def from_page(
        cls,
        page: OffsetPage[Any],
        serialize: Callable[[Any], T],
        *,
        status: int = 200,
    ) -> OffsetListResponse[T]:
        return cls(
            status=status,
            data=list(page.map(serialize).data),
            pagination=PaginationMeta(total=page.total, page=page.page, limit=page.limit),
        )


class CursorListResponse(BaseModel, Generic[T]):
    """Cursor-paginated list response.

    ``nextCursor`` is passed back unchanged as ``cursor`` to fetch the
    following page; ``null`` means there is nothing after this page.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: int = Field(default=200, description="HTTP status code")
    message: str = Field(default=SUCCESS_MESSAGE, description="Response message")
    data: list[T] = Field(default_factory=list, description="Items on this page")
    next_cursor: str | None = Field(
        default=None,
        alias="nextCursor",
        description="Cursor to fetch the next page",
    )

    @classmethod
    def from_page(
        cls,
        page: CursorPage[Any],
        serialize: Callable[[Any], T],
        *,
        status: int = 200,
    ) -> CursorListResponse[T]:
        return cls(
            status=status,
            data=list(page.map(serialize).data),
            next_cursor=page.next_cursor,
        )


__all__ = [
    "SUCCESS_MESSAGE",
    "CursorListResponse",
    "OffsetListResponse",
    "PaginationMeta",
    "ResponseEnvelope",
]
