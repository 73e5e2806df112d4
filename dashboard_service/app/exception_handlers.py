"""Global exception handlers for FastAPI application.

Every error leaves the service as an RFC 7807 problem document with the
``application/problem+json`` media type and, when available, the request
id assigned by ``RequestIDMiddleware``.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dashboard_service.core.exceptions import AppException
from dashboard_service.core.pagination.exceptions import (
    PaginationError,
    QueryValidationError,
    TransientStorageError,
)
from dashboard_service.core.schemas.problem_details import ProblemDetails

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"

# Seconds clients should wait before retrying an idempotent list call.
STORAGE_RETRY_AFTER = 1


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def _problem_response(
    request: Request,
    status_code: int,
    detail: str,
    type_: str = "about:blank",
    title: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    problem = ProblemDetails(
        type=type_,
        title=title or AppException._default_title(status_code),
        status=status_code,
        detail=detail,
        instance=instance or request.url.path,
        request_id=_get_request_id(request),
        errors=errors,
    )
    content = problem.model_dump(exclude_none=True)
    if extra:
        content.update({k: v for k, v in extra.items() if k not in content})
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(content),
        headers=headers,
        media_type=PROBLEM_JSON,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert ``AppException`` instances into problem documents."""
    logger.warning(
        "Application exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )
    return _problem_response(
        request,
        status_code=exc.status_code,
        detail=exc.detail,
        type_=exc.type,
        title=exc.title,
        instance=exc.instance,
        extra=exc.extra,
    )


async def pagination_exception_handler(request: Request, exc: PaginationError) -> JSONResponse:
    """Convert pagination core errors using the status each class declares.

    Configuration errors are server faults; their details stay in the logs.
    """
    headers = None
    if exc.status_code >= 500 and not isinstance(exc, TransientStorageError):
        logger.error(
            "Pagination misconfiguration",
            extra={"path": request.url.path, "error": str(exc)},
            exc_info=exc,
        )
        return _problem_response(
            request,
            status_code=exc.status_code,
            detail="An unexpected error occurred while processing your request",
            type_="internal-error",
        )

    if isinstance(exc, TransientStorageError):
        headers = {"Retry-After": str(STORAGE_RETRY_AFTER)}
        logger.warning("Listing failed transiently", extra={"path": request.url.path, "error": str(exc)})
    else:
        logger.info(
            "List query rejected",
            extra={"path": request.url.path, "problem": exc.problem_type, "error": str(exc)},
        )

    extra: dict[str, Any] = dict(exc.details)
    if isinstance(exc, QueryValidationError):
        extra = {"resource": exc.resource, "parameter": exc.parameter, "value": exc.value}
    return _problem_response(
        request,
        status_code=exc.status_code,
        detail=exc.message,
        type_=exc.problem_type,
        extra=extra,
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI/Pydantic request validation errors with field-level detail."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
            "value": error.get("input"),
        }
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
        },
    )
    return _problem_response(
        request,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Request validation failed for {len(errors)} field(s)",
        type_="validation-error",
        title="Validation Error",
        errors=errors,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback and return a generic 500."""
    logger.error(
        "Unexpected exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=exc,
    )
    # Don't expose internal details
    return _problem_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred while processing your request",
        type_="internal-error",
        title="Internal Server Error",
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register the problem-details handlers on ``app``.

    Example:
        app = FastAPI()
        configure_exception_handlers(app)
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(PaginationError, pagination_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers configured")
