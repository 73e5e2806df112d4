"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from dashboard_service.app.exception_handlers import configure_exception_handlers
from dashboard_service.app.lifespan import lifespan
from dashboard_service.app.middleware import configure_middleware
from dashboard_service.app.router import setup_routers
from dashboard_service.core.settings import get_app_settings, get_logging_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache; call
    ``clear_settings_cache()`` before ``create_app()`` to pick up
    environment changes.

    Returns:
        Configured FastAPI application instance.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        docs_url=app_settings.get_docs_url(),
        redoc_url=app_settings.get_redoc_url(),
        openapi_url=app_settings.get_openapi_url(),
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    # Configure exception handlers (must be before middleware)
    configure_exception_handlers(app)

    configure_middleware(app, app_settings, get_logging_settings())

    setup_routers(app, app_settings)

    return app


# Application instance for uvicorn
app = create_app()
