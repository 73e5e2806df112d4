"""Backend-neutral filter predicates.

A predicate is a small immutable tree of ``Equals``/``Contains`` leaves
combined with ``And``/``Or``. Storage delegates compile it into their own
query language; ``matches`` evaluates it directly against mappings or
objects and is the reference semantics every delegate must agree with.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class Equals:
    """``field == value``."""

    field: str
    value: Any


@dataclass(slots=True, frozen=True)
class Contains:
    """Case-insensitive substring match of ``value`` within ``field``."""

    field: str
    value: str


@dataclass(slots=True, frozen=True, init=False)
class And:
    """Conjunction. An empty ``And()`` matches every record."""

    terms: tuple[Predicate, ...]

    def __init__(self, *terms: Predicate) -> None:
        object.__setattr__(self, "terms", tuple(terms))

    def extend(self, *terms: Predicate) -> And:
        """Return a new conjunction with ``terms`` appended after the existing ones."""
        return And(*self.terms, *terms)


@dataclass(slots=True, frozen=True, init=False)
class Or:
    """Disjunction. An empty ``Or()`` matches nothing."""

    terms: tuple[Predicate, ...]

    def __init__(self, *terms: Predicate) -> None:
        object.__setattr__(self, "terms", tuple(terms))


type Predicate = Equals | Contains | And | Or


def filter_term(field: str, value: Any) -> Predicate:
    """Build the leaf for one explicit filter.

    Strings always become case-insensitive substring matches; every other
    value is an exact match.
    """
    if isinstance(value, str):
        return Contains(field, value)
    return Equals(field, value)


def search_clause(term: str, fields: Iterable[str]) -> Or:
    """OR of ``Contains(field, term)`` across ``fields``."""
    return Or(*(Contains(field, term) for field in fields))


def build_where(
    filters: Mapping[str, Any] | None = None,
    search_term: str | None = None,
    search_fields: Iterable[str] | None = None,
    searchable_fields: Iterable[str] = (),
    base: Predicate | None = None,
) -> And:
    """Combine explicit filters and a search term into one conjunction.

    The result is ``And(*base_terms, *filter_terms, Or(*search_matches))``.
    When ``base`` is already an ``And`` its terms are kept in front and the
    new ones appended; any other ``base`` becomes the first term.

    Args:
        filters: Field name to filter value.
        search_term: Free-text term; ``None`` disables the search clause.
        search_fields: Fields the caller asked to search, if any.
        searchable_fields: Resource defaults used when ``search_fields`` is empty.
        base: A predicate built earlier (e.g. a tenant scope).

    Returns:
        A conjunction. With no filters, search or base it is ``And()``.

    Example:
        >>> build_where({"status": "active"}, "abc", None, ("name", "description"))
        And(terms=(Contains(field='status', value='active'), Or(terms=(Contains(field='name', value='abc'), Contains(field='description', value='abc')))))
    """
    if base is None:
        where = And()
    elif isinstance(base, And):
        where = base
    else:
        where = And(base)

    terms: list[Predicate] = [
        filter_term(field, value) for field, value in (filters or {}).items()
    ]
    if search_term:
        fields = tuple(search_fields or ()) or tuple(searchable_fields)
        terms.append(search_clause(search_term, fields))

    return where.extend(*terms)


def _read(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def matches(predicate: Predicate, record: Any) -> bool:
    """Evaluate ``predicate`` against a mapping or attribute-bearing object.

    A ``None`` field never satisfies ``Contains``; ``Equals(field, None)``
    matches a missing or null field.
    """
    match predicate:
        case Equals(field=field, value=value):
            return _read(record, field) == value
        case Contains(field=field, value=value):
            current = _read(record, field)
            if current is None:
                return False
            return value.lower() in str(current).lower()
        case And(terms=terms):
            return all(matches(term, record) for term in terms)
        case Or(terms=terms):
            return any(matches(term, record) for term in terms)
    raise TypeError(f"Unsupported predicate: {predicate!r}")


__all__ = [
    "And",
    "Contains",
    "Equals",
    "Or",
    "Predicate",
    "build_where",
    "filter_term",
    "matches",
    "search_clause",
]
