"""Generic list querying: filtering, search, sorting and pagination.

A resource declares which fields may be filtered, searched and sorted;
``PaginatedQueryExecutor`` turns raw HTTP query parameters into a
predicate and an ordering and runs them against an injected storage
delegate, in either of two protocols:

Offset:
    GET /dummies?page=2&limit=20&sortField=name&sortDirection=asc
    -> {"data": [...], "pagination": {"total": 57, "page": 2, "limit": 20}}

Cursor:
    GET /dummies/cursor?limit=20&cursor=<id of last item seen>
    -> {"data": [...], "nextCursor": "<id>" | null}

Orderings always end on the resource's identifier, so cursors resume
at a well-defined position even when sort values tie.
"""

from dashboard_service.core.pagination.envelopes import CursorPage, OffsetPage
from dashboard_service.core.pagination.exceptions import (
    InvalidCursorError,
    PaginationError,
    QueryTimeoutError,
    QueryValidationError,
    ResourceConfigurationError,
    TransientStorageError,
)
from dashboard_service.core.pagination.executor import (
    PaginatedQueryExecutor,
    QueryPlan,
    StorageDelegate,
    StorageReader,
)
from dashboard_service.core.pagination.ordering import (
    OrderKey,
    OrderSpec,
    SortDirection,
    SortSpec,
    resolve_order,
)
from dashboard_service.core.pagination.predicates import (
    And,
    Contains,
    Equals,
    Or,
    Predicate,
    build_where,
    matches,
)
from dashboard_service.core.pagination.query import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    MAX_OFFSET,
    NormalizedQuery,
    PaginationMode,
    clamp_limit,
    compute_skip,
    normalize,
)
from dashboard_service.core.pagination.resource import ResourceDefinition
from dashboard_service.core.pagination.schemas import (
    CursorListResponse,
    OffsetListResponse,
    PaginationMeta,
    ResponseEnvelope,
)

__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "MAX_OFFSET",
    # Predicates
    "And",
    "Contains",
    # Envelopes
    "CursorListResponse",
    "CursorPage",
    "Equals",
    # Errors
    "InvalidCursorError",
    "NormalizedQuery",
    "OffsetListResponse",
    "OffsetPage",
    "Or",
    # Ordering
    "OrderKey",
    "OrderSpec",
    # Executor
    "PaginatedQueryExecutor",
    "PaginationError",
    "PaginationMeta",
    "PaginationMode",
    "Predicate",
    "QueryPlan",
    "QueryTimeoutError",
    "QueryValidationError",
    "ResourceConfigurationError",
    "ResourceDefinition",
    "ResponseEnvelope",
    "SortDirection",
    "SortSpec",
    "StorageDelegate",
    "StorageReader",
    "TransientStorageError",
    "build_where",
    "clamp_limit",
    "compute_skip",
    "matches",
    "normalize",
    "resolve_order",
]
