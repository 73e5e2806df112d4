"""Request ID middleware for per-request tracking.

Takes ``X-Request-ID`` from the request or generates a UUID, exposes it
as ``request.state.request_id``, adds it to every log record emitted
while the request runs and returns it in the response headers.
"""

from __future__ import annotations

from dashboard_service.app.middleware.base import HeaderContextMiddleware, generate_uuid


class RequestIDMiddleware(HeaderContextMiddleware):
    """Add unique request ID to all requests for correlation.

    Usage:
        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)

        @app.get("/")
        async def root(request: Request):
            return {"request_id": request.state.request_id}
    """

    header_name = "x-request-id"
    state_key = "request_id"
    log_context_key = "request_id"

    def generate_value(self) -> str:
        return generate_uuid()
