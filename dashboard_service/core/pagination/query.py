"""Normalization of raw list-query parameters.

Turns the loosely typed mapping an HTTP layer hands over into a frozen
``NormalizedQuery``. Numeric parameters are clamped rather than rejected;
field-name validation is left to the executor, which knows the resource.

Example:
    >>> query = normalize({"limit": "500", "page": "0", "name": "foo"}, PaginationMode.OFFSET)
    >>> query.limit, query.page, query.skip, query.filters
    (100, 1, 0, {'name': 'foo'})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
import math
from typing import Any

DEFAULT_LIMIT = 20
MAX_LIMIT = 100
# Largest row offset a BIGINT OFFSET clause accepts
MAX_OFFSET = 2**63 - 1

SEARCH_TERM_PARAM = "searchTerm"
SEARCH_FIELDS_PARAM = "searchFields"
SORT_FIELD_PARAM = "sortField"
SORT_DIRECTION_PARAM = "sortDirection"
PAGE_PARAM = "page"
LIMIT_PARAM = "limit"
CURSOR_PARAM = "cursor"

RESERVED_PARAMS = frozenset(
    {
        SEARCH_TERM_PARAM,
        SEARCH_FIELDS_PARAM,
        SORT_FIELD_PARAM,
        SORT_DIRECTION_PARAM,
        PAGE_PARAM,
        LIMIT_PARAM,
        CURSOR_PARAM,
    }
)


class PaginationMode(StrEnum):
    """Which pagination protocol a list request uses."""

    OFFSET = "offset"
    CURSOR = "cursor"


@dataclass(slots=True, frozen=True)
class NormalizedQuery:
    """Clamped, typed list parameters for a single request.

    ``page``/``skip`` are only meaningful in offset mode and ``cursor`` only
    in cursor mode; the other pair keeps its neutral default.

    Attributes:
        mode: Pagination protocol.
        limit: Page size, always within ``[1, max_limit]``.
        page: 1-based page number (offset mode).
        skip: Rows to skip, never negative (offset mode).
        cursor: Opaque token naming the last record already seen (cursor mode).
        search_term: Free-text term, ``None`` when blank.
        search_fields: Explicit fields to search, ``None`` to use the resource defaults.
        sort_field: Requested sort field, unvalidated.
        sort_direction: Requested sort direction, unvalidated.
        filters: Every non-reserved parameter with a value.
    """

    mode: PaginationMode
    limit: int
    page: int = 1
    skip: int = 0
    cursor: str | None = None
    search_term: str | None = None
    search_fields: tuple[str, ...] | None = None
    sort_field: str | None = None
    sort_direction: str | None = None
    filters: dict[str, Any] = field(default_factory=dict)


def _coerce_number(value: Any) -> float | None:
    """Best-effort numeric conversion; ``None`` for anything unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def clamp_limit(
    limit: Any,
    *,
    default: int = DEFAULT_LIMIT,
    maximum: int = MAX_LIMIT,
) -> int:
    """Clamp a requested page size into ``[1, maximum]``.

    Total over any input: missing, null, NaN or non-numeric values yield
    ``default``; everything else is truncated to an integer and clamped.

    Args:
        limit: Raw limit as received.
        default: Page size used when ``limit`` is unusable.
        maximum: Upper bound on the page size.

    Returns:
        An integer page size between 1 and ``maximum`` inclusive.
    """
    number = _coerce_number(limit)
    if number is None:
        return default
    return int(min(max(number, 1), maximum))


def max_page(limit: int) -> int:
    """Highest page whose row offset still fits ``MAX_OFFSET``."""
    return MAX_OFFSET // max(limit, 1) + 1


def normalize_page(page: Any, limit: int = 1) -> int:
    """Coerce a raw page number into ``[1, max_page(limit)]``."""
    number = _coerce_number(page)
    if number is None:
        return 1
    if math.isinf(number):
        return 1 if number < 0 else max_page(limit)
    return min(max(int(number), 1), max_page(limit))


def compute_skip(page: Any, limit: int) -> int:
    """Return the row offset for ``page``; within ``[0, MAX_OFFSET]``."""
    return (normalize_page(page, limit) - 1) * limit


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _split_fields(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        parts = value.split(",")
    else:
        parts = [str(item) for item in value]
    fields = tuple(part.strip() for part in parts if part.strip())
    return fields or None


def normalize(
    raw: Mapping[str, Any],
    mode: PaginationMode,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> NormalizedQuery:
    """Split a raw query mapping into pagination, search, sort and filters.

    Never raises. Unknown keys are passed through as filters so the
    executor can reject them against the resource definition.

    Args:
        raw: Query parameters keyed by their wire names.
        mode: Offset or cursor pagination.
        default_limit: Page size used when ``limit`` is missing or invalid.
        max_limit: Upper bound on the page size.

    Returns:
        Frozen normalized query.
    """
    limit = clamp_limit(raw.get(LIMIT_PARAM), default=default_limit, maximum=max_limit)
    filters = {
        key: value
        for key, value in raw.items()
        if key not in RESERVED_PARAMS and value is not None
    }
    common: dict[str, Any] = {
        "mode": mode,
        "limit": limit,
        "search_term": _clean_text(raw.get(SEARCH_TERM_PARAM)),
        "search_fields": _split_fields(raw.get(SEARCH_FIELDS_PARAM)),
        "sort_field": _clean_text(raw.get(SORT_FIELD_PARAM)),
        "sort_direction": _clean_text(raw.get(SORT_DIRECTION_PARAM)),
        "filters": filters,
    }

    if mode is PaginationMode.CURSOR:
        return NormalizedQuery(cursor=_clean_text(raw.get(CURSOR_PARAM)), **common)

    raw_page = raw.get(PAGE_PARAM)
    return NormalizedQuery(
        page=normalize_page(raw_page, limit),
        skip=compute_skip(raw_page, limit),
        **common,
    )


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "MAX_OFFSET",
    "RESERVED_PARAMS",
    "NormalizedQuery",
    "PaginationMode",
    "clamp_limit",
    "compute_skip",
    "max_page",
    "normalize",
    "normalize_page",
]
