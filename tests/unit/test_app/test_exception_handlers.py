"""Unit tests for the problem-details exception handlers."""

from __future__ import annotations

import json

from fastapi import Request
from fastapi.exceptions import RequestValidationError

from dashboard_service.app.exception_handlers import (
    PROBLEM_JSON,
    app_exception_handler,
    generic_exception_handler,
    pagination_exception_handler,
    validation_exception_handler,
)
from dashboard_service.core.exceptions import NotFoundException
from dashboard_service.core.pagination import (
    InvalidCursorError,
    QueryTimeoutError,
    QueryValidationError,
    ResourceConfigurationError,
)


def _request(path: str = "/api/v1/dummies", request_id: str | None = "req-1") -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "query_string": b"",
        "headers": [],
        "state": {"request_id": request_id} if request_id else {},
    }
    return Request(scope)


def _body(response) -> dict:
    return json.loads(response.body)


class TestPaginationHandler:
    async def test_query_validation(self):
        exc = QueryValidationError("Unknown filter field 'owner'", resource="dummies", parameter="owner", value="bob")

        response = await pagination_exception_handler(_request(), exc)

        assert response.status_code == 422
        assert response.media_type == PROBLEM_JSON
        assert _body(response) == {
            "type": "invalid-query",
            "title": "Unprocessable Entity",
            "status": 422,
            "detail": "Unknown filter field 'owner'",
            "instance": "/api/v1/dummies",
            "request_id": "req-1",
            "resource": "dummies",
            "parameter": "owner",
            "value": "bob",
        }

    async def test_invalid_cursor(self):
        response = await pagination_exception_handler(_request(), InvalidCursorError("dummies", "abc"))

        body = _body(response)
        assert response.status_code == 400
        assert body["type"] == "invalid-cursor"
        assert body["cursor"] == "abc"

    async def test_transient_sets_retry_after(self):
        response = await pagination_exception_handler(_request(), QueryTimeoutError("dummies", 5.0))

        assert response.status_code == 503
        assert response.headers["retry-after"] == "1"
        assert _body(response)["type"] == "query-timeout"

    async def test_configuration_error_is_opaque(self):
        exc = ResourceConfigurationError("Dummy has no column 'secret'", details={"field": "secret"})

        response = await pagination_exception_handler(_request(), exc)

        body = _body(response)
        assert response.status_code == 500
        assert body["type"] == "internal-error"
        assert "secret" not in json.dumps(body)


async def test_app_exception():
    exc = NotFoundException(detail="dummies with id=1 does not exist", extra={"resource": "dummies"})

    response = await app_exception_handler(_request("/api/v1/dummies/1"), exc)

    body = _body(response)
    assert response.status_code == 404
    assert body["title"] == "Not Found"
    assert body["instance"] == "/api/v1/dummies/1"
    assert body["resource"] == "dummies"


async def test_validation_errors_are_listed():
    exc = RequestValidationError(
        [{"loc": ("body", "name"), "msg": "String should have at least 3 characters", "type": "string_too_short", "input": "ab"}]
    )

    response = await validation_exception_handler(_request(), exc)

    body = _body(response)
    assert response.status_code == 422
    assert body["errors"] == [
        {
            "field": "body.name",
            "message": "String should have at least 3 characters",
            "type": "string_too_short",
            "value": "ab",
        }
    ]


async def test_generic_exception_hides_details():
    response = await generic_exception_handler(_request(request_id=None), RuntimeError("db password is hunter2"))

    body = _body(response)
    assert response.status_code == 500
    assert "hunter2" not in json.dumps(body)
    assert "request_id" not in body
