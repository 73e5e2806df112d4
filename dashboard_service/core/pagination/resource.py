"""Per-resource declarations of what may be filtered, searched and sorted."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .exceptions import QueryValidationError, ResourceConfigurationError
from .ordering import OrderSpec, SortDirection, SortSpec
from .query import NormalizedQuery


@dataclass(slots=True, frozen=True, init=False)
class ResourceDefinition:
    """Field declarations for one listable resource.

    Consistency is checked once, at construction, so a misdeclared
    resource fails when its module is imported instead of on a request.

    Attributes:
        name: Resource name used in error details and logs.
        filterable_fields: Fields accepted as explicit filters.
        searchable_fields: Fields searched when no ``searchFields`` are given.
        sortable_fields: Fields accepted as ``sortField``.
        fallback_order: Ordering used when no sort is requested.
        id_field: Unique identifier used as cursor token and tie-break.

    Example:
        DUMMY_RESOURCE = ResourceDefinition(
            name="dummy",
            filterable_fields=("name", "description"),
            searchable_fields=("name", "description"),
            sortable_fields=("id", "name", "created_at"),
            fallback_order=(OrderKey("created_at", SortDirection.DESC),),
        )
    """

    name: str
    filterable_fields: frozenset[str]
    searchable_fields: tuple[str, ...]
    sortable_fields: frozenset[str]
    fallback_order: OrderSpec
    id_field: str

    def __init__(
        self,
        name: str,
        filterable_fields: Iterable[str] = (),
        searchable_fields: Iterable[str] = (),
        sortable_fields: Iterable[str] = (),
        fallback_order: OrderSpec = (),
        id_field: str = "id",
    ) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "filterable_fields", frozenset(filterable_fields))
        object.__setattr__(self, "searchable_fields", tuple(searchable_fields))
        object.__setattr__(self, "sortable_fields", frozenset(sortable_fields))
        object.__setattr__(self, "fallback_order", tuple(fallback_order))
        object.__setattr__(self, "id_field", id_field)
        self._check()

    def _check(self) -> None:
        if self.id_field not in self.sortable_fields:
            raise ResourceConfigurationError(
                f"Identifier field of {self.name!r} must be sortable",
                details={"resource": self.name, "field": self.id_field},
            )
        unsortable = [key.field for key in self.fallback_order if key.field not in self.sortable_fields]
        if unsortable:
            raise ResourceConfigurationError(
                f"Fallback order of {self.name!r} uses undeclared sort fields",
                details={"resource": self.name, "fields": unsortable},
            )
        unfilterable = sorted(set(self.searchable_fields) - self.filterable_fields)
        if unfilterable:
            raise ResourceConfigurationError(
                f"Searchable fields of {self.name!r} must also be filterable",
                details={"resource": self.name, "fields": unfilterable},
            )

    def _reject(self, message: str, parameter: str, value: object) -> QueryValidationError:
        return QueryValidationError(
            message,
            resource=self.name,
            parameter=parameter,
            value=value,
        )

    def validate(self, query: NormalizedQuery) -> SortSpec | None:
        """Check every field the query names against this definition.

        Args:
            query: Normalized request.

        Returns:
            The validated sort request, or ``None`` when none was given.

        Raises:
            QueryValidationError: On the first unknown filter, search or sort
                field, or an unrecognized sort direction.
        """
        for name in query.filters:
            if name not in self.filterable_fields:
                raise self._reject(f"Unknown filter field {name!r}", name, query.filters[name])

        if query.search_term is not None:
            if query.search_fields:
                for name in query.search_fields:
                    if name not in self.filterable_fields:
                        raise self._reject(f"Field {name!r} is not searchable", "searchFields", name)
            elif not self.searchable_fields:
                raise self._reject(
                    f"Resource {self.name!r} does not support search",
                    "searchTerm",
                    query.search_term,
                )

        direction = SortDirection.ASC
        if query.sort_direction is not None:
            try:
                direction = SortDirection(query.sort_direction.lower())
            except ValueError:
                raise self._reject(
                    "Sort direction must be 'asc' or 'desc'",
                    "sortDirection",
                    query.sort_direction,
                ) from None

        if query.sort_field is None:
            return None
        if query.sort_field not in self.sortable_fields:
            raise self._reject(
                f"Field {query.sort_field!r} is not sortable",
                "sortField",
                query.sort_field,
            )
        return SortSpec(query.sort_field, direction)


__all__ = ["ResourceDefinition"]
