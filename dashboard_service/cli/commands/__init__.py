"""CLI command modules."""

from dashboard_service.cli.commands import database, dummies, server

__all__ = [
    "database",
    "dummies",
    "server",
]
