"""Result envelopes produced by the paginated query executor."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class OffsetPage[T]:
    """One page of an offset-paginated listing.

    ``total`` and ``data`` come from the same snapshot, so
    ``ceil(total / limit)`` is the exact number of pages at read time.
    """

    data: Sequence[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.limit - 1) // self.limit

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    def map[U](self, fn: Callable[[T], U]) -> OffsetPage[U]:
        """Return the same page with every record transformed by ``fn``."""
        return OffsetPage(
            data=[fn(item) for item in self.data],
            total=self.total,
            page=self.page,
            limit=self.limit,
        )


@dataclass(slots=True, frozen=True)
class CursorPage[T]:
    """One page of a cursor-paginated listing.

    ``next_cursor`` is the identifier of the last record in ``data`` when
    more records follow, otherwise ``None``.
    """

    data: Sequence[T]
    next_cursor: str | None

    def map[U](self, fn: Callable[[T], U]) -> CursorPage[U]:
        """Return the same page with every record transformed by ``fn``."""
        return CursorPage(data=[fn(item) for item in self.data], next_cursor=self.next_cursor)


__all__ = ["CursorPage", "OffsetPage"]
