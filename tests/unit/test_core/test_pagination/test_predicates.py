"""Unit tests for filter predicates and WHERE composition."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from dashboard_service.core.pagination.predicates import (
    And,
    Contains,
    Equals,
    Or,
    build_where,
    filter_term,
    matches,
)


class TestFilterTerm:
    def test_strings_become_contains(self):
        assert filter_term("name", "foo") == Contains("name", "foo")

    def test_other_values_become_equals(self):
        assert filter_term("rank", 3) == Equals("rank", 3)
        assert filter_term("active", True) == Equals("active", True)


class TestBuildWhere:
    """Tests for ``build_where``."""

    def test_nothing_gives_empty_conjunction(self):
        assert build_where() == And()

    def test_filters_and_search(self):
        where = build_where({"status": "active"}, "abc", None, ("name", "description"))

        assert where == And(
            Contains("status", "active"),
            Or(Contains("name", "abc"), Contains("description", "abc")),
        )

    def test_explicit_search_fields_win(self):
        where = build_where(None, "abc", ("name",), ("name", "description"))

        assert where == And(Or(Contains("name", "abc")))

    def test_no_searchable_fields_gives_empty_disjunction(self):
        where = build_where(None, "abc", None, ())

        assert where == And(Or())

    def test_empty_search_term_adds_no_clause(self):
        assert build_where(None, "", None, ("name",)) == And()
        assert build_where(None, None, None, ("name",)) == And()

    def test_base_conjunction_is_extended(self):
        base = And(Equals("tenant", "t1"))

        where = build_where({"name": "x"}, base=base)

        assert where == And(Equals("tenant", "t1"), Contains("name", "x"))
        assert base == And(Equals("tenant", "t1"))

    def test_non_conjunction_base_becomes_first_term(self):
        where = build_where({"name": "x"}, base=Equals("tenant", "t1"))

        assert where.terms[0] == Equals("tenant", "t1")
        assert where.terms[1] == Contains("name", "x")


class TestMatches:
    """``matches`` is the reference semantics for every storage delegate."""

    record = {"id": 1, "name": "Alpha Beta", "description": None, "rank": 2}

    def test_contains_is_case_insensitive(self):
        assert matches(Contains("name", "alpha"), self.record)
        assert matches(Contains("name", "A B"), self.record)
        assert not matches(Contains("name", "gamma"), self.record)

    def test_contains_folds_non_ascii(self):
        record = {"id": 2, "name": "Émile Zoë"}

        assert matches(Contains("name", "émile"), record)
        assert matches(Contains("name", "ZOË"), record)

    def test_contains_never_matches_null(self):
        assert not matches(Contains("description", ""), self.record)

    def test_equals(self):
        assert matches(Equals("rank", 2), self.record)
        assert not matches(Equals("rank", 3), self.record)
        assert matches(Equals("description", None), self.record)

    def test_empty_and_matches_everything(self):
        assert matches(And(), self.record)

    def test_empty_or_matches_nothing(self):
        assert not matches(Or(), self.record)

    def test_nested(self):
        predicate = And(Equals("rank", 2), Or(Contains("name", "zzz"), Contains("name", "beta")))

        assert matches(predicate, self.record)

    def test_attribute_records(self):
        record = SimpleNamespace(name="Widget", description="blue")

        assert matches(And(Contains("name", "wid"), Contains("description", "BLU")), record)

    def test_unknown_predicate_type(self):
        with pytest.raises(TypeError):
            matches("name = 1", self.record)  # type: ignore[arg-type]
