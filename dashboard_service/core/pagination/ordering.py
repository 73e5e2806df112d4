"""Sort resolution for list queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(slots=True, frozen=True)
class SortSpec:
    """A caller's sort request: one field, optional direction."""

    field: str
    direction: SortDirection = SortDirection.ASC


@dataclass(slots=True, frozen=True)
class OrderKey:
    """One component of a resolved ordering."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


type OrderSpec = tuple[OrderKey, ...]


def resolve_order(
    sort: SortSpec | None,
    fallback: OrderSpec,
    tie_breaker: str | None = "id",
) -> OrderSpec:
    """Resolve the ordering for a list query.

    An explicit sort replaces the fallback entirely. Either way the ordering
    is closed with ``tie_breaker`` ascending (unless that field is already
    part of it) so that equal sort values still come back in a stable order and
    cursors resume at a well-defined position.

    Args:
        sort: Caller's sort request, or ``None``.
        fallback: The resource's default ordering.
        tie_breaker: Unique field appended last; ``None`` disables it.

    Returns:
        Tuple of order keys, most significant first.
    """
    if sort is None:
        keys: list[OrderKey] = list(fallback)
    else:
        keys = [OrderKey(sort.field, sort.direction)]

    if tie_breaker is not None and not any(key.field == tie_breaker for key in keys):
        keys.append(OrderKey(tie_breaker, SortDirection.ASC))
    return tuple(keys)


__all__ = ["OrderKey", "OrderSpec", "SortDirection", "SortSpec", "resolve_order"]
