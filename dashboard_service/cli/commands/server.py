"""Server management commands."""

import sys

import click
import uvicorn

from dashboard_service.cli.utils import error, info, success, warning
from dashboard_service.core.settings import get_app_settings

APP_PATH = "dashboard_service.app.main:app"


@click.group(name="server")
def server() -> None:
    """Server management commands."""


@server.command()
@click.option(
    "--host",
    default=None,
    help="Host to bind (default: from settings)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind (default: from settings)",
)
@click.option(
    "--reload/--no-reload",
    default=True,
    help="Enable auto-reload on code changes",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["critical", "error", "warning", "info", "debug", "trace"]),
    help="Log level",
)
def dev(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Run development server with auto-reload."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    info(f"Server will run at: http://{host}:{port}{settings.api_prefix}")
    info(f"Environment: {settings.environment}")
    info(f"Auto-reload: {'enabled' if reload else 'disabled'}")

    try:
        success("Starting uvicorn...")
        uvicorn.run(APP_PATH, host=host, port=port, reload=reload, log_level=log_level)
    except KeyboardInterrupt:
        info("\nShutting down server...")
    except Exception as e:
        error(f"Failed to start server: {e}")
        sys.exit(1)


@server.command()
@click.option("--host", default=None, help="Host to bind (default: from settings)")
@click.option("--port", default=None, type=int, help="Port to bind (default: from settings)")
@click.option("--workers", default=4, type=int, help="Number of worker processes")
@click.option(
    "--access-log/--no-access-log",
    default=True,
    help="Enable access logging",
)
def prod(host: str | None, port: int | None, workers: int, access_log: bool) -> None:
    """Run production server (no auto-reload, multiple workers)."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    if settings.debug:
        warning("APP_DEBUG is enabled; disable it for production deployments")

    info(f"Server will run at: http://{host}:{port}{settings.api_prefix}")
    info(f"Workers: {workers}")

    try:
        success("Starting uvicorn in production mode...")
        uvicorn.run(APP_PATH, host=host, port=port, workers=workers, access_log=access_log)
    except KeyboardInterrupt:
        info("\nShutting down server...")
    except Exception as e:
        error(f"Failed to start server: {e}")
        sys.exit(1)
