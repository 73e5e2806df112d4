"""RFC 7807 Problem Details schema for error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Every error the service returns is rendered with this shape and the
    ``application/problem+json`` media type. Exception-specific context
    (the rejected query parameter, the stale cursor) travels as extra
    members.

    See: https://datatracker.ietf.org/doc/html/rfc7807

    Example:
        return JSONResponse(
            status_code=404,
            content=ProblemDetails(
                type="not-found",
                title="Not Found",
                status=404,
                detail="Dummy with id=... does not exist",
                instance="/api/v1/dummies/...",
            ).model_dump(exclude_none=True),
            media_type="application/problem+json",
        )
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        max_length=500,
        description="URI reference identifying the specific occurrence",
    )
    request_id: str | None = Field(default=None, description="Request identifier for log correlation")
    errors: list[dict[str, Any]] | None = Field(
        default=None,
        description="Field-level validation errors",
    )

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "type": "invalid-query",
                "title": "Invalid Query",
                "status": 422,
                "detail": "Unknown filter field 'colour' for resource 'dummies'",
                "instance": "/api/v1/dummies",
                "parameter": "colour",
            }
        },
        str_strip_whitespace=True,
    )
