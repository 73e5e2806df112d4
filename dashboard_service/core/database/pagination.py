"""SQLAlchemy storage delegate for the paginated query executor.

Compiles backend-neutral predicates and orderings into SQLAlchemy Core
expressions and runs every list call inside one session/transaction, so
the total count and the page rows of an offset listing observe the same
data.

Example:
    storage = SQLAlchemyStorage(AsyncSessionLocal, Dummy, isolation_level="REPEATABLE READ")
    executor = PaginatedQueryExecutor(DUMMY_RESOURCE, storage)
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, false, func, or_, select, true
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from dashboard_service.core.pagination.exceptions import (
    ResourceConfigurationError,
    TransientStorageError,
)
from dashboard_service.core.pagination.predicates import And, Contains, Equals, Or, Predicate

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    from sqlalchemy.sql.elements import ColumnElement

    from dashboard_service.core.pagination.ordering import OrderSpec

logger = logging.getLogger(__name__)

# Dialects whose drivers accept a per-transaction isolation level.
SNAPSHOT_DIALECTS = frozenset({"postgresql", "mysql", "mariadb"})

TRANSIENT_ERRORS = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so ``value`` matches literally."""
    return (
        value.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )


class SQLAlchemyReader[T]:
    """Executes scans, counts and cursor lookups on one open session."""

    __slots__ = ("session", "model", "id_field")

    def __init__(self, session: AsyncSession, model: type[T], id_field: str = "id") -> None:
        self.session = session
        self.model = model
        self.id_field = id_field

    def column(self, field: str) -> Any:
        try:
            return getattr(self.model, field)
        except AttributeError:
            raise ResourceConfigurationError(
                f"{self.model.__name__} has no column {field!r}",
                details={"model": self.model.__name__, "field": field},
            ) from None

    def compile(self, predicate: Predicate) -> ColumnElement[bool]:
        """Translate a predicate tree into a SQL boolean expression."""
        match predicate:
            case Equals(field=field, value=value):
                col = self.column(field)
                return col.is_(None) if value is None else col == value
            case Contains(field=field, value=value):
                pattern = f"%{escape_like(value.lower())}%"
                return func.lower(self.column(field)).like(pattern, escape="\\")
            case And(terms=terms):
                clauses = [self.compile(term) for term in terms]
                return and_(*clauses) if clauses else true()
            case Or(terms=terms):
                clauses = [self.compile(term) for term in terms]
                return or_(*clauses) if clauses else false()
        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def order_by(self, order: OrderSpec) -> list[Any]:
        """ORDER BY clauses; NULL sorts as the smallest value."""
        clauses = []
        for key in order:
            col = self.column(key.field)
            clauses.append(col.desc().nulls_last() if key.descending else col.asc().nulls_first())
        return clauses

    def seek(self, order: OrderSpec, anchor: T) -> ColumnElement[bool]:
        """Condition selecting rows strictly after ``anchor`` under ``order``.

        Expands to ``(k1 after) OR (k1 = v1 AND k2 after) OR ...`` with the
        same NULL placement as ``order_by``.
        """
        branches = []
        prefix: list[ColumnElement[bool]] = []
        for key in order:
            col = self.column(key.field)
            value = getattr(anchor, key.field)
            if key.descending:
                after = false() if value is None else or_(col < value, col.is_(None))
            else:
                after = col.is_not(None) if value is None else col > value
            branches.append(and_(*prefix, after) if prefix else after)
            prefix.append(col.is_(None) if value is None else col == value)
        return or_(*branches) if branches else false()

    def coerce_id(self, record_id: str) -> Any:
        """Convert a cursor token to the identifier column's Python type.

        Returns None when the token cannot be a valid identifier.
        """
        try:
            python_type = self.column(self.id_field).type.python_type
        except NotImplementedError:
            return record_id
        try:
            return python_type(record_id)
        except (TypeError, ValueError):
            return None

    async def scan(
        self,
        predicate: Predicate,
        order: OrderSpec,
        *,
        skip: int,
        take: int,
        after: T | None = None,
    ) -> Sequence[T]:
        stmt = select(self.model).where(self.compile(predicate))
        if after is not None:
            stmt = stmt.where(self.seek(order, after))
        stmt = stmt.order_by(*self.order_by(order)).offset(skip).limit(take)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, predicate: Predicate) -> int:
        stmt = select(func.count()).select_from(self.model).where(self.compile(predicate))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def locate(self, predicate: Predicate, record_id: str) -> T | None:
        key = self.coerce_id(record_id)
        if key is None:
            return None
        stmt = select(self.model).where(self.column(self.id_field) == key, self.compile(predicate))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class SQLAlchemyStorage[T]:
    """Snapshot provider backed by an ``async_sessionmaker``.

    Every ``snapshot()`` opens a fresh session and transaction and closes
    both on exit (including cancellation). Driver-level connectivity
    failures surface as ``TransientStorageError``; anything else
    propagates unchanged.

    Args:
        session_factory: Factory producing ``AsyncSession`` objects.
        model: Mapped class to list.
        id_field: Unique identifier attribute used for cursors.
        isolation_level: Per-snapshot isolation on dialects that support it.
    """

    __slots__ = ("_session_factory", "model", "id_field", "isolation_level")

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[T],
        *,
        id_field: str = "id",
        isolation_level: str | None = "REPEATABLE READ",
    ) -> None:
        self._session_factory = session_factory
        self.model = model
        self.id_field = id_field
        self.isolation_level = isolation_level

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[SQLAlchemyReader[T]]:
        try:
            async with self._session_factory() as session, session.begin():
                await self._pin_isolation(session)
                yield SQLAlchemyReader(session, self.model, self.id_field)
        except TRANSIENT_ERRORS as exc:
            logger.warning(
                "Storage snapshot failed",
                extra={"model": self.model.__name__, "error": type(exc).__name__},
            )
            raise TransientStorageError(
                f"Storage unavailable while listing {self.model.__name__}",
                details={"model": self.model.__name__, "error": type(exc).__name__},
            ) from exc

    async def _pin_isolation(self, session: AsyncSession) -> None:
        if self.isolation_level is None or session.bind is None:
            return
        if session.bind.dialect.name not in SNAPSHOT_DIALECTS:
            return
        await session.connection(execution_options={"isolation_level": self.isolation_level})
