"""Pydantic schemas for the dummies feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from dashboard_service.core.crud import CursorListQuery, OffsetListQuery
from dashboard_service.core.schemas import CustomBase


class DummyCreate(BaseModel):
    """Payload used when creating a dummy.

    ``id`` and ``created_at`` may be supplied, e.g. when importing data;
    otherwise they are generated.
    """

    id: UUID | None = Field(default=None, description="The unique identifier of the dummy")
    name: str = Field(..., min_length=3, max_length=255, description="The name of the dummy")
    description: str | None = Field(
        default=None,
        min_length=15,
        description="The description of the dummy",
    )
    created_at: datetime | None = Field(default=None, description="Creation timestamp")


class DummyUpdate(BaseModel):
    """Partial update; only the fields sent are applied."""

    name: str | None = Field(default=None, min_length=3, max_length=255)
    description: str | None = Field(default=None, min_length=15)

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("name cannot be null")
        return value


class DummyResponse(CustomBase):
    """Representation returned from the API."""

    id: UUID
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class _DummyFilters(BaseModel):
    name: str | None = Field(default=None, description="Filter by name (case-insensitive contains)")
    description: str | None = Field(
        default=None,
        description="Filter by description (case-insensitive contains)",
    )


class DummyOffsetQuery(OffsetListQuery, _DummyFilters):
    """Offset listing parameters for dummies."""


class DummyCursorQuery(CursorListQuery, _DummyFilters):
    """Cursor listing parameters for dummies."""


__all__ = [
    "DummyCreate",
    "DummyCursorQuery",
    "DummyOffsetQuery",
    "DummyResponse",
    "DummyUpdate",
]
