"""Errors raised by the pagination core.

Each error carries the HTTP status it maps to, so the exception handlers
can render it without the core importing any web framework.
"""

from __future__ import annotations

from typing import Any, ClassVar


class PaginationError(Exception):
    """Base exception for list/query failures.

    Attributes:
        message: Error description.
        details: Structured context (offending field, value, resource).
    """

    status_code: ClassVar[int] = 500
    problem_type: ClassVar[str] = "pagination-error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class QueryValidationError(PaginationError):
    """A filter, search or sort field is not declared for the resource.

    Also raised for a sort direction other than ``asc``/``desc``. Raised
    before the storage delegate is touched.
    """

    status_code = 422
    problem_type = "invalid-query"

    def __init__(
        self,
        message: str,
        *,
        resource: str,
        parameter: str,
        value: Any,
    ) -> None:
        self.resource = resource
        self.parameter = parameter
        self.value = value
        super().__init__(
            message,
            details={"resource": resource, "parameter": parameter, "value": value},
        )


class InvalidCursorError(PaginationError):
    """The cursor does not identify a record visible under the current filters."""

    status_code = 400
    problem_type = "invalid-cursor"

    def __init__(self, resource: str, cursor: str) -> None:
        self.resource = resource
        self.cursor = cursor
        super().__init__(
            f"Cursor does not resolve to a {resource} record",
            details={"resource": resource, "cursor": cursor},
        )


class TransientStorageError(PaginationError):
    """Connection loss, pool exhaustion or an aborted transaction.

    Read paths are idempotent, so callers may retry with the same parameters.
    """

    status_code = 503
    problem_type = "storage-unavailable"


class QueryTimeoutError(TransientStorageError):
    """The storage round trip exceeded the configured query timeout."""

    problem_type = "query-timeout"

    def __init__(self, resource: str, timeout: float) -> None:
        self.resource = resource
        self.timeout = timeout
        super().__init__(
            f"Listing {resource} timed out",
            details={"resource": resource, "timeout_seconds": timeout},
        )


class ResourceConfigurationError(PaginationError):
    """A resource definition is internally inconsistent.

    Raised when the definition is built (at import/registration time),
    never per request.
    """

    problem_type = "resource-misconfigured"
