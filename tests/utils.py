"""Test utilities and helper functions.

``MemoryStorage`` is a storage delegate over a list of dicts. It follows
the same ordering rules as the SQLAlchemy delegate (NULL sorts as the
smallest value) and records every call, so executor tests can assert how
often storage was touched.

Usage:
    from tests.utils import MemoryStorage

    storage = MemoryStorage([{"id": 1, "name": "alpha"}])
    executor = PaginatedQueryExecutor(resource, storage)
    page = await executor.list_offset({})
    assert storage.snapshots == 1
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from functools import cmp_to_key
from typing import Any

from dashboard_service.core.pagination.ordering import OrderSpec
from dashboard_service.core.pagination.predicates import Predicate, matches


def _compare_values(left: Any, right: Any) -> int:
    if left is None and right is None:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1
    return (left > right) - (left < right)


def compare_records(order: OrderSpec, left: dict[str, Any], right: dict[str, Any]) -> int:
    """Three-way comparison of two records under ``order``."""
    for key in order:
        result = _compare_values(left.get(key.field), right.get(key.field))
        if result:
            return -result if key.descending else result
    return 0


class MemoryReader:
    def __init__(self, storage: MemoryStorage) -> None:
        self._storage = storage

    async def scan(
        self,
        predicate: Predicate,
        order: OrderSpec,
        *,
        skip: int,
        take: int,
        after: dict[str, Any] | None = None,
    ) -> Sequence[dict[str, Any]]:
        self._storage.calls.append(("scan", {"skip": skip, "take": take, "after": after}))
        await self._storage.pause()
        rows = [row for row in self._storage.records if matches(predicate, row)]
        rows.sort(key=cmp_to_key(lambda a, b: compare_records(order, a, b)))
        if after is not None:
            rows = [row for row in rows if compare_records(order, row, after) > 0]
        return rows[skip : skip + take]

    async def count(self, predicate: Predicate) -> int:
        self._storage.calls.append(("count", {}))
        await self._storage.pause()
        return sum(1 for row in self._storage.records if matches(predicate, row))

    async def locate(self, predicate: Predicate, record_id: str) -> dict[str, Any] | None:
        self._storage.calls.append(("locate", {"record_id": record_id}))
        for row in self._storage.records:
            if str(row["id"]) == record_id and matches(predicate, row):
                return row
        return None


class MemoryStorage:
    """In-memory ``StorageDelegate`` that counts snapshots and calls.

    Args:
        records: Rows to serve; each must have an ``id`` key.
        delay: Seconds every scan/count sleeps, for timeout tests.
        error: Exception raised when a snapshot is opened.
    """

    def __init__(
        self,
        records: list[dict[str, Any]] | None = None,
        *,
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.records = list(records or [])
        self.delay = delay
        self.error = error
        self.snapshots = 0
        self.released = 0
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[MemoryReader]:
        self.snapshots += 1
        try:
            if self.error is not None:
                raise self.error
            yield MemoryReader(self)
        finally:
            self.released += 1

    async def pause(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


def make_records(count: int, **overrides: Any) -> list[dict[str, Any]]:
    """``count`` records with ids 1..count and names ``item-01``..``item-NN``."""
    return [
        {"id": index, "name": f"item-{index:02d}", "description": None, "rank": index, **overrides}
        for index in range(1, count + 1)
    ]
