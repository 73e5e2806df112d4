"""Offset and cursor pagination over an injected storage delegate.

The executor is storage-agnostic. It validates and normalizes the request,
builds the predicate and ordering, and then talks to a ``StorageDelegate``
through a single snapshot per call:

    executor = PaginatedQueryExecutor(DUMMY_RESOURCE, SQLAlchemyStorage(factory, Dummy))
    page = await executor.list_offset({"searchTerm": "alpha", "limit": "10"})
    page.total, len(page.data)

All validation happens before the delegate is touched; a rejected
request never opens a connection.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Mapping, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
import logging
from typing import Any, Protocol

from dashboard_service.infra.logging import get_lazy_logger

from .envelopes import CursorPage, OffsetPage
from .exceptions import InvalidCursorError, QueryTimeoutError
from .ordering import OrderSpec, resolve_order
from .predicates import And, Predicate, build_where
from .query import DEFAULT_LIMIT, MAX_LIMIT, NormalizedQuery, PaginationMode, normalize
from .resource import ResourceDefinition


class StorageReader[T](Protocol):
    """Read operations available inside one storage snapshot."""

    async def scan(
        self,
        predicate: Predicate,
        order: OrderSpec,
        *,
        skip: int,
        take: int,
        after: T | None = None,
    ) -> Sequence[T]:
        """Return up to ``take`` records matching ``predicate`` in ``order``.

        With ``after`` set, only records strictly after it under ``order``
        are considered; ``skip`` is applied after that.
        """
        ...

    async def count(self, predicate: Predicate) -> int:
        """Return the number of records matching ``predicate``."""
        ...

    async def locate(self, predicate: Predicate, record_id: str) -> T | None:
        """Return the record with ``record_id`` if it also matches ``predicate``."""
        ...


class StorageDelegate[T](Protocol):
    """Source of consistent read snapshots.

    ``snapshot()`` acquires whatever the backend needs (connection,
    transaction) and must release it on every exit path, including
    cancellation.
    """

    def snapshot(self) -> AbstractAsyncContextManager[StorageReader[T]]: ...


@dataclass(slots=True, frozen=True)
class QueryPlan:
    """Validated, storage-ready form of a list request."""

    query: NormalizedQuery
    predicate: And
    order: OrderSpec


class PaginatedQueryExecutor[T]:
    """List records of one resource with offset or cursor pagination.

    Composed from a resource definition and a storage delegate; one
    instance can be shared across requests because it holds no
    per-request state.

    Args:
        resource: Declared filter/search/sort fields of the resource.
        storage: Backend that provides snapshots.
        default_limit: Page size when the request gives none.
        max_limit: Upper bound on the page size.
        timeout: Seconds allowed per call, ``None`` for no bound.
    """

    __slots__ = ("resource", "_storage", "_default_limit", "_max_limit", "_timeout", "_logger", "_lazy")

    def __init__(
        self,
        resource: ResourceDefinition,
        storage: StorageDelegate[T],
        *,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
        timeout: float | None = None,
    ) -> None:
        self.resource = resource
        self._storage = storage
        self._default_limit = default_limit
        self._max_limit = max_limit
        self._timeout = timeout
        self._logger = logging.getLogger(f"pagination.{resource.name}")
        self._lazy = get_lazy_logger(f"pagination.{resource.name}")

    def plan(
        self,
        raw: Mapping[str, Any],
        mode: PaginationMode,
        where: Predicate | None = None,
    ) -> QueryPlan:
        """Normalize and validate ``raw`` without touching storage.

        Raises:
            QueryValidationError: If a field or direction is not allowed.
        """
        query = normalize(
            raw,
            mode,
            default_limit=self._default_limit,
            max_limit=self._max_limit,
        )
        sort = self.resource.validate(query)
        predicate = build_where(
            query.filters,
            query.search_term,
            query.search_fields,
            self.resource.searchable_fields,
            base=where,
        )
        order = resolve_order(sort, self.resource.fallback_order, self.resource.id_field)
        return QueryPlan(query=query, predicate=predicate, order=order)

    async def list_offset(
        self,
        raw: Mapping[str, Any],
        where: Predicate | None = None,
    ) -> OffsetPage[T]:
        """Return one offset page with a total count from the same snapshot.

        Args:
            raw: Query parameters keyed by wire name.
            where: Predicate every result must also satisfy.

        Returns:
            ``OffsetPage`` with ``total``, normalized ``page`` and clamped ``limit``.

        Raises:
            QueryValidationError: Before any storage access.
            TransientStorageError: If the snapshot read fails or times out.
        """
        plan = self.plan(raw, PaginationMode.OFFSET, where)
        query = plan.query

        async def read() -> tuple[int, Sequence[T]]:
            async with self._storage.snapshot() as reader:
                total = await reader.count(plan.predicate)
                rows = await reader.scan(
                    plan.predicate,
                    plan.order,
                    skip=query.skip,
                    take=query.limit,
                )
            return total, rows

        total, rows = await self._bounded(read())
        page = OffsetPage(data=list(rows), total=total, page=query.page, limit=query.limit)
        self._lazy.debug(
            lambda: f"list_offset: {self.resource.name}(page={page.page}, limit={page.limit}) -> {len(page.data)}/{page.total}"
        )
        return page

    async def list_cursor(
        self,
        raw: Mapping[str, Any],
        where: Predicate | None = None,
    ) -> CursorPage[T]:
        """Return the records following ``cursor`` and the cursor for the next call.

        Fetches ``limit + 1`` rows; the extra row only signals that another
        page exists and is not returned.

        Raises:
            QueryValidationError: Before any storage access.
            InvalidCursorError: If the cursor names no record visible under
                the current filters.
            TransientStorageError: If the snapshot read fails or times out.
        """
        plan = self.plan(raw, PaginationMode.CURSOR, where)
        query = plan.query

        async def read() -> Sequence[T]:
            async with self._storage.snapshot() as reader:
                anchor = None
                if query.cursor is not None:
                    anchor = await reader.locate(plan.predicate, query.cursor)
                    if anchor is None:
                        self._logger.info(
                            "Cursor did not resolve",
                            extra={"resource": self.resource.name, "cursor": query.cursor},
                        )
                        raise InvalidCursorError(self.resource.name, query.cursor)
                return await reader.scan(
                    plan.predicate,
                    plan.order,
                    skip=0,
                    take=query.limit + 1,
                    after=anchor,
                )

        rows = list(await self._bounded(read()))
        next_cursor = None
        if len(rows) > query.limit:
            rows = rows[: query.limit]
            next_cursor = str(self._identify(rows[-1]))

        self._lazy.debug(
            lambda: f"list_cursor: {self.resource.name}(cursor={query.cursor}, limit={query.limit}) -> {len(rows)} next={next_cursor}"
        )
        return CursorPage(data=rows, next_cursor=next_cursor)

    def _identify(self, record: T) -> Any:
        if isinstance(record, Mapping):
            return record[self.resource.id_field]
        return getattr(record, self.resource.id_field)

    async def _bounded[R](self, operation: Awaitable[R]) -> R:
        if self._timeout is None:
            return await operation
        try:
            async with asyncio.timeout(self._timeout):
                return await operation
        except TimeoutError as exc:
            self._logger.warning(
                "List query timed out",
                extra={"resource": self.resource.name, "timeout_seconds": self._timeout},
            )
            raise QueryTimeoutError(self.resource.name, self._timeout) from exc


__all__ = [
    "PaginatedQueryExecutor",
    "QueryPlan",
    "StorageDelegate",
    "StorageReader",
]
