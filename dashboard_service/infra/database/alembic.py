"""Programmatic Alembic command interface with async support.

Runs Alembic commands in a worker thread so they never block the event
loop. The migration environment builds its own short-lived engine from
the URL placed on the config, so nothing loop-bound crosses threads.

Example:
    from dashboard_service.infra.database.alembic import get_alembic_commands

    commands = get_alembic_commands()
    output = await commands.upgrade("head")
    revision = await commands.get_current_revision()
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import io
import logging
from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, pool

from alembic import command
from dashboard_service.core.settings import get_db_settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent


@dataclass(frozen=True, slots=True)
class AlembicCommandConfig:
    """Configuration for Alembic commands.

    Attributes:
        url: SQLAlchemy URL the migrations run against.
        script_location: Path to the alembic scripts directory.
        render_as_batch: Force batch mode (always on for SQLite).
    """

    url: str
    script_location: str = str(PROJECT_ROOT / "alembic")
    render_as_batch: bool = False

    def get_alembic_config(self, output_buffer: io.StringIO | None = None) -> Config:
        """Build an Alembic ``Config`` from the project's alembic.ini."""
        alembic_ini_path = PROJECT_ROOT / "alembic.ini"
        if not alembic_ini_path.exists():
            raise FileNotFoundError(f"alembic.ini not found at {alembic_ini_path}")

        config = Config(str(alembic_ini_path), stdout=output_buffer or io.StringIO())
        config.set_main_option("script_location", self.script_location)
        # ConfigParser interpolation treats % specially
        config.set_main_option("sqlalchemy.url", self.url.replace("%", "%%"))

        config.attributes["url_configured"] = True
        config.attributes["skip_logging_config"] = True
        config.attributes["render_as_batch"] = self.render_as_batch
        return config


class AlembicCommands:
    """Async wrapper around ``alembic.command``."""

    def __init__(self, config: AlembicCommandConfig) -> None:
        self.config = config

    async def upgrade(self, revision: str = "head", *, sql: bool = False) -> str:
        """Upgrade the database to ``revision`` (default: latest)."""
        logger.info("Upgrading database", extra={"revision": revision})
        output = io.StringIO()
        alembic_config = self.config.get_alembic_config(output)

        await asyncio.to_thread(command.upgrade, alembic_config, revision, sql=sql)
        logger.info("Upgrade completed", extra={"revision": revision})
        return output.getvalue()

    async def downgrade(self, revision: str = "-1", *, sql: bool = False) -> str:
        """Downgrade the database to ``revision`` (default: one step back)."""
        logger.info("Downgrading database", extra={"revision": revision})
        output = io.StringIO()
        alembic_config = self.config.get_alembic_config(output)

        await asyncio.to_thread(command.downgrade, alembic_config, revision, sql=sql)
        logger.info("Downgrade completed", extra={"revision": revision})
        return output.getvalue()

    async def current(self, *, verbose: bool = False) -> str:
        output = io.StringIO()
        alembic_config = self.config.get_alembic_config(output)
        await asyncio.to_thread(command.current, alembic_config, verbose=verbose)
        return output.getvalue()

    async def history(self, *, verbose: bool = False) -> str:
        output = io.StringIO()
        alembic_config = self.config.get_alembic_config(output)
        await asyncio.to_thread(command.history, alembic_config, verbose=verbose)
        return output.getvalue()

    async def get_head_revision(self) -> str | None:
        """Latest revision in the scripts directory."""
        script = ScriptDirectory.from_config(self.config.get_alembic_config())
        return script.get_current_head()

    async def get_current_revision(self) -> str | None:
        """Revision currently stamped on the database, or None."""
        return await asyncio.to_thread(self._read_current_revision)

    async def is_up_to_date(self) -> bool:
        current = await self.get_current_revision()
        return current is not None and current == await self.get_head_revision()

    def _read_current_revision(self) -> str | None:
        # Sync engine with the sync driver name; used only for the version read
        url = self.config.url.replace("+aiosqlite", "").replace("+asyncpg", "+psycopg")
        engine = create_engine(url, poolclass=pool.NullPool)
        try:
            with engine.connect() as connection:
                return MigrationContext.configure(connection).get_current_revision()
        finally:
            engine.dispose()


def get_alembic_commands() -> AlembicCommands:
    """AlembicCommands bound to the configured database URL."""
    return AlembicCommands(AlembicCommandConfig(url=get_db_settings().get_sqlalchemy_url()))
