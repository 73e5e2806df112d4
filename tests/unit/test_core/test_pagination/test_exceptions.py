"""Unit tests for pagination errors."""

from __future__ import annotations

from dashboard_service.core.pagination import (
    InvalidCursorError,
    PaginationError,
    QueryTimeoutError,
    QueryValidationError,
    ResourceConfigurationError,
    TransientStorageError,
)


def test_status_codes():
    assert QueryValidationError("x", resource="r", parameter="p", value=1).status_code == 422
    assert InvalidCursorError("r", "c").status_code == 400
    assert TransientStorageError("down").status_code == 503
    assert QueryTimeoutError("r", 1.5).status_code == 503
    assert ResourceConfigurationError("bad").status_code == 500


def test_problem_types_are_distinct():
    types = {
        cls.problem_type
        for cls in (
            QueryValidationError,
            InvalidCursorError,
            TransientStorageError,
            QueryTimeoutError,
            ResourceConfigurationError,
        )
    }
    assert len(types) == 5


def test_hierarchy():
    assert issubclass(QueryTimeoutError, TransientStorageError)
    for cls in (QueryValidationError, InvalidCursorError, TransientStorageError, ResourceConfigurationError):
        assert issubclass(cls, PaginationError)


def test_details_in_str():
    error = QueryValidationError("Unknown filter field 'x'", resource="dummies", parameter="x", value="1")

    assert error.details == {"resource": "dummies", "parameter": "x", "value": "1"}
    assert str(error) == "Unknown filter field 'x' (resource='dummies', parameter='x', value='1')"


def test_timeout_details():
    error = QueryTimeoutError("dummies", 2.0)

    assert error.details == {"resource": "dummies", "timeout_seconds": 2.0}
    assert error.message == "Listing dummies timed out"


def test_message_without_details():
    assert str(TransientStorageError("down")) == "down"
