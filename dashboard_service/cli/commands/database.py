"""Database management commands.

Example:bash
    # Apply all pending migrations
    dashboard db upgrade

    # Create tables straight from the models (local SQLite)
    dashboard db init

    # Verify connectivity
    dashboard db check

    # Rollback last migration
    dashboard db downgrade
"""

import sys
import time

import click
from sqlalchemy import text

from dashboard_service.cli.utils import coro, error, info, success, warning
from dashboard_service.core.settings import get_db_settings


def get_alembic_commands():
    """Get AlembicCommands instance with lazy import."""
    from dashboard_service.infra.database.alembic import get_alembic_commands

    return get_alembic_commands()


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Create all tables from the model metadata."""
    from dashboard_service.infra.database import close_database, create_all

    db_settings = get_db_settings()
    info(f"Creating tables on: {db_settings.get_sqlalchemy_url().split('@')[-1]}")

    try:
        await create_all()
        success("Tables created")
    except Exception as e:
        error(f"Failed to create tables: {e}")
        sys.exit(1)
    finally:
        await close_database()


@db.command()
@coro
async def check() -> None:
    """Run SELECT 1 and report the round-trip latency."""
    from dashboard_service.infra.database import close_database, get_async_session

    try:
        async with get_async_session() as session:
            start = time.perf_counter()
            await session.execute(text("SELECT 1"))
            latency_ms = (time.perf_counter() - start) * 1000
        success(f"Database reachable ({latency_ms:.1f} ms)")
    except Exception as e:
        error(f"Failed to connect to database: {e}")
        sys.exit(1)
    finally:
        await close_database()


@db.command()
@click.option(
    "--revision",
    default="head",
    help="Target revision (default: head)",
)
@click.option(
    "--sql/--no-sql",
    default=False,
    help="Output SQL without executing",
)
@coro
async def upgrade(revision: str, sql: bool) -> None:
    """Apply database migrations."""
    info(f"Upgrading database to: {revision}")

    try:
        commands = get_alembic_commands()
        output = await commands.upgrade(revision, sql=sql)

        if output:
            click.echo(output)

        if not sql:
            success("Database upgraded successfully!")

    except Exception as e:
        error(f"Failed to upgrade database: {e}")
        sys.exit(1)


@db.command()
@click.option(
    "--steps",
    default=1,
    type=int,
    help="Number of migrations to rollback (0 for base)",
)
@click.option(
    "--sql/--no-sql",
    default=False,
    help="Output SQL without executing",
)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@coro
async def downgrade(steps: int, sql: bool, yes: bool) -> None:
    """Rollback database migrations."""
    if not sql and not yes:
        warning(f"Rolling back {steps or 'all'} migration(s)...")

        if not click.confirm("Are you sure you want to rollback migrations?"):
            info("Rollback cancelled")
            return

    try:
        commands = get_alembic_commands()
        target = f"-{steps}" if steps > 0 else "base"
        output = await commands.downgrade(target, sql=sql)

        if output:
            click.echo(output)

        if not sql:
            success("Database downgraded successfully!")

    except Exception as e:
        error(f"Failed to downgrade database: {e}")
        sys.exit(1)


@db.command()
@coro
async def current() -> None:
    """Show current database revision."""
    info("Current database revision:")

    try:
        commands = get_alembic_commands()
        output = await commands.current(verbose=True)

        if output:
            click.echo(output)
        else:
            info("No migrations applied")

    except Exception as e:
        error(f"Failed to get current revision: {e}")
        sys.exit(1)


@db.command()
@coro
async def history() -> None:
    """Show migration history."""
    try:
        commands = get_alembic_commands()
        output = await commands.history(verbose=True)

        if output:
            click.echo(output)
        else:
            info("No migrations found")

    except Exception as e:
        error(f"Failed to get migration history: {e}")
        sys.exit(1)
