"""Query parameter models shared by resource list endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ListQueryParams(BaseModel):
    """Common list parameters, named as they appear on the wire.

    Unknown parameters are kept (``extra="allow"``) and treated as filters;
    the executor rejects any that the resource does not declare. ``page``
    and ``limit`` stay raw strings because the normalizer clamps them
    instead of rejecting them.

    Subclass per resource to document its filter fields:

        class DummyListQuery(ListQueryParams):
            name: str | None = None
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, str_strip_whitespace=True)

    search_term: str | None = Field(default=None, alias="searchTerm", description="Free-text search term")
    search_fields: str | None = Field(
        default=None,
        alias="searchFields",
        description="Comma-separated fields to search; defaults to every searchable field",
    )
    sort_field: str | None = Field(default=None, alias="sortField", description="Field to sort by")
    sort_direction: str | None = Field(default=None, alias="sortDirection", description="asc or desc")
    limit: str | None = Field(default=None, description="Page size (clamped to 1..max)")

    @model_validator(mode="before")
    @classmethod
    def _drop_blank(cls, data: Any) -> Any:
        """Treat ``?name=`` like an absent parameter."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if not (isinstance(value, str) and not value.strip())}
        return data

    def to_raw(self) -> dict[str, Any]:
        """Wire-named mapping for ``PaginatedQueryExecutor``."""
        return self.model_dump(by_alias=True, exclude_none=True)


class OffsetListQuery(ListQueryParams):
    page: str | None = Field(default=None, description="1-based page number")


class CursorListQuery(ListQueryParams):
    cursor: str | None = Field(default=None, description="nextCursor from the previous page")


__all__ = ["CursorListQuery", "ListQueryParams", "OffsetListQuery"]
