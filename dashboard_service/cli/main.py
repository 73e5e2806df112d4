"""Main CLI entry point for dashboard-service management commands."""

import click

from dashboard_service.cli.commands import database, dummies, server
from dashboard_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="dashboard-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Dashboard Service CLI - management commands for the list API.

    \b
    Command Groups:
      db         Schema creation, connectivity and migrations
      dummies    Seed and page through sample records
      server     Development and production servers

    \b
    Quick Start:
      dashboard db upgrade              # Apply migrations
      dashboard dummies seed 50         # Insert sample rows
      dashboard dummies list --limit 5  # First page, newest first
      dashboard server dev              # Run with auto-reload
    """
    ctx.ensure_object(dict)


cli.add_command(database.db)
cli.add_command(dummies.dummies)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
