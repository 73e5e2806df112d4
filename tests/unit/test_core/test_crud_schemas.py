"""Unit tests for list query parameter models."""

from __future__ import annotations

from dashboard_service.core.crud import CursorListQuery, OffsetListQuery
from dashboard_service.features.dummies.schemas import DummyOffsetQuery


def test_to_raw_uses_wire_names():
    query = OffsetListQuery.model_validate(
        {"searchTerm": "alp", "sortField": "name", "sortDirection": "desc", "page": "2", "limit": "5"}
    )

    assert query.to_raw() == {
        "searchTerm": "alp",
        "sortField": "name",
        "sortDirection": "desc",
        "limit": "5",
        "page": "2",
    }


def test_unknown_parameters_pass_through():
    query = CursorListQuery.model_validate({"cursor": "abc", "owner": "bob"})

    assert query.to_raw() == {"cursor": "abc", "owner": "bob"}


def test_blank_values_are_dropped():
    query = DummyOffsetQuery.model_validate({"name": "", "searchTerm": "   ", "limit": "3"})

    assert query.to_raw() == {"limit": "3"}


def test_values_are_stripped():
    query = DummyOffsetQuery.model_validate({"name": "  foo "})

    assert query.to_raw() == {"name": "foo"}


def test_page_and_limit_stay_raw():
    query = OffsetListQuery.model_validate({"page": "abc", "limit": "-1"})

    assert query.page == "abc"
    assert query.limit == "-1"
