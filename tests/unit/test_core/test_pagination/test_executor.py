"""Unit tests for ``PaginatedQueryExecutor`` against an in-memory delegate."""

from __future__ import annotations

import pytest

from dashboard_service.core.pagination import (
    And,
    Equals,
    InvalidCursorError,
    OrderKey,
    PaginatedQueryExecutor,
    PaginationMode,
    QueryTimeoutError,
    QueryValidationError,
    ResourceDefinition,
    SortDirection,
    TransientStorageError,
)
from tests.utils import MemoryStorage, make_records

RESOURCE = ResourceDefinition(
    name="items",
    filterable_fields=("name", "description", "rank", "group"),
    searchable_fields=("name", "description"),
    sortable_fields=("id", "name", "description", "rank"),
    fallback_order=(OrderKey("rank", SortDirection.DESC),),
)


def _executor(storage: MemoryStorage, **kwargs) -> PaginatedQueryExecutor:
    return PaginatedQueryExecutor(RESOURCE, storage, **kwargs)


async def _walk_cursor(executor: PaginatedQueryExecutor, raw: dict) -> list[list]:
    """Follow ``nextCursor`` until exhaustion; return the ids of each page."""
    pages = []
    cursor = None
    while True:
        params = dict(raw)
        if cursor is not None:
            params["cursor"] = cursor
        page = await executor.list_cursor(params)
        pages.append([row["id"] for row in page.data])
        cursor = page.next_cursor
        if cursor is None:
            return pages


class TestListOffset:
    """Offset pagination."""

    async def test_default_page(self):
        storage = MemoryStorage(make_records(30))

        page = await _executor(storage).list_offset({})

        assert page.total == 30
        assert page.page == 1
        assert page.limit == 20
        assert [row["id"] for row in page.data] == list(range(30, 10, -1))

    async def test_second_page(self):
        storage = MemoryStorage(make_records(25))

        page = await _executor(storage).list_offset({"page": "2", "limit": "10", "sortField": "id"})

        assert [row["id"] for row in page.data] == list(range(11, 21))
        assert page.pages == 3
        assert page.has_next

    async def test_page_past_end_is_empty_with_total(self):
        storage = MemoryStorage(make_records(5))

        page = await _executor(storage).list_offset({"page": "9", "limit": "2"})

        assert page.data == []
        assert page.total == 5
        assert page.page == 9

    async def test_empty_result_set(self):
        storage = MemoryStorage([])

        page = await _executor(storage).list_offset({})

        assert page.data == []
        assert page.total == 0
        assert page.pages == 0
        assert not page.has_next

    async def test_count_and_rows_come_from_one_snapshot(self):
        storage = MemoryStorage(make_records(3))

        await _executor(storage).list_offset({})

        assert storage.snapshots == 1
        assert storage.released == 1
        assert storage.call_names() == ["count", "scan"]

    async def test_limit_is_clamped(self):
        storage = MemoryStorage(make_records(3))

        page = await _executor(storage, max_limit=2).list_offset({"limit": "1000"})

        assert page.limit == 2
        assert len(page.data) == 2

    async def test_filters_and_search(self):
        records = make_records(6)
        records[1]["description"] = "Has the MAGIC word"
        records[4]["name"] = "magic-item"
        records[5]["description"] = "magic too"
        records[5]["group"] = "other"
        for record in records[:5]:
            record["group"] = "main"
        storage = MemoryStorage(records)

        page = await _executor(storage).list_offset({"searchTerm": "magic", "group": "main", "sortField": "id"})

        assert [row["id"] for row in page.data] == [2, 5]
        assert page.total == 2

    async def test_search_restricted_to_fields(self):
        records = make_records(3)
        records[0]["description"] = "special"
        records[2]["name"] = "special-name"
        storage = MemoryStorage(records)

        page = await _executor(storage).list_offset({"searchTerm": "special", "searchFields": "name"})

        assert [row["id"] for row in page.data] == [3]

    async def test_filter_on_same_field_as_search_is_anded(self):
        records = make_records(4)
        storage = MemoryStorage(records)

        page = await _executor(storage).list_offset(
            {"name": "item-0", "searchTerm": "3", "searchFields": "name"}
        )

        assert [row["id"] for row in page.data] == [3]

    async def test_base_predicate_is_applied(self):
        storage = MemoryStorage(make_records(4))

        page = await _executor(storage).list_offset({}, where=And(Equals("rank", 2)))

        assert [row["id"] for row in page.data] == [2]
        assert page.total == 1

    async def test_null_sorts_first_ascending_and_last_descending(self):
        records = make_records(3)
        records[0]["description"] = "b"
        records[2]["description"] = "a"
        storage = MemoryStorage(records)
        executor = _executor(storage)

        ascending = await executor.list_offset({"sortField": "description", "sortDirection": "asc"})
        descending = await executor.list_offset({"sortField": "description", "sortDirection": "desc"})

        assert [row["id"] for row in ascending.data] == [2, 3, 1]
        assert [row["id"] for row in descending.data] == [1, 3, 2]


class TestValidationBeforeStorage:
    """Rejected requests never open a snapshot."""

    @pytest.mark.parametrize(
        "raw",
        [
            {"sortField": "secret"},
            {"sortDirection": "up"},
            {"owner": "bob"},
            {"searchTerm": "x", "searchFields": "owner"},
        ],
    )
    async def test_offset_rejects_without_storage_calls(self, raw):
        storage = MemoryStorage(make_records(3))

        with pytest.raises(QueryValidationError):
            await _executor(storage).list_offset(raw)

        assert storage.snapshots == 0
        assert storage.calls == []

    async def test_cursor_rejects_without_storage_calls(self):
        storage = MemoryStorage(make_records(3))

        with pytest.raises(QueryValidationError):
            await _executor(storage).list_cursor({"sortField": "secret", "cursor": "1"})

        assert storage.snapshots == 0


class TestListCursor:
    """Cursor pagination."""

    async def test_first_page_and_next_cursor(self):
        storage = MemoryStorage(make_records(5))

        page = await _executor(storage).list_cursor({"limit": "2", "sortField": "id"})

        assert [row["id"] for row in page.data] == [1, 2]
        assert page.next_cursor == "2"

    async def test_overfetches_one_row(self):
        storage = MemoryStorage(make_records(5))

        await _executor(storage).list_cursor({"limit": "2"})

        assert storage.calls[-1] == ("scan", {"skip": 0, "take": 3, "after": None})

    async def test_exact_multiple_has_no_trailing_empty_page(self):
        storage = MemoryStorage(make_records(4))

        pages = await _walk_cursor(_executor(storage), {"limit": "2", "sortField": "id"})

        assert pages == [[1, 2], [3, 4]]

    async def test_walk_visits_every_record_once(self):
        storage = MemoryStorage(make_records(7))

        pages = await _walk_cursor(_executor(storage), {"limit": "3"})

        flat = [record_id for page in pages for record_id in page]
        assert flat == [7, 6, 5, 4, 3, 2, 1]
        assert [len(page) for page in pages] == [3, 3, 1]

    async def test_walk_with_ties_and_nulls(self):
        records = make_records(9)
        for record in records:
            record["name"] = "same" if record["id"] % 2 else None
        storage = MemoryStorage(records)

        for direction in ("asc", "desc"):
            pages = await _walk_cursor(
                _executor(storage),
                {"limit": "2", "sortField": "name", "sortDirection": direction},
            )
            flat = [record_id for page in pages for record_id in page]
            assert sorted(flat) == list(range(1, 10))
            assert len(flat) == len(set(flat))

    async def test_empty_result_set(self):
        storage = MemoryStorage([])

        page = await _executor(storage).list_cursor({})

        assert page.data == []
        assert page.next_cursor is None

    async def test_unknown_cursor(self):
        storage = MemoryStorage(make_records(3))

        with pytest.raises(InvalidCursorError) as exc_info:
            await _executor(storage).list_cursor({"cursor": "999"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.cursor == "999"
        assert storage.released == 1

    async def test_cursor_excluded_by_filters(self):
        records = make_records(3)
        records[0]["group"] = "a"
        storage = MemoryStorage(records)

        with pytest.raises(InvalidCursorError):
            await _executor(storage).list_cursor({"cursor": "2", "group": "a"})

    async def test_cursor_from_deleted_record(self):
        storage = MemoryStorage(make_records(4))
        executor = _executor(storage)
        first = await executor.list_cursor({"limit": "2", "sortField": "id"})
        storage.records = [row for row in storage.records if row["id"] != 2]

        with pytest.raises(InvalidCursorError):
            await executor.list_cursor({"limit": "2", "sortField": "id", "cursor": first.next_cursor})


class TestFailures:
    async def test_timeout(self):
        storage = MemoryStorage(make_records(3), delay=0.5)

        with pytest.raises(QueryTimeoutError) as exc_info:
            await _executor(storage, timeout=0.01).list_offset({})

        assert isinstance(exc_info.value, TransientStorageError)
        assert exc_info.value.status_code == 503
        assert storage.released == 1

    async def test_no_timeout_when_disabled(self):
        storage = MemoryStorage(make_records(2), delay=0.01)

        page = await _executor(storage, timeout=None).list_offset({})

        assert page.total == 2

    async def test_storage_errors_propagate(self):
        error = TransientStorageError("pool exhausted")
        storage = MemoryStorage(make_records(2), error=error)

        with pytest.raises(TransientStorageError) as exc_info:
            await _executor(storage).list_cursor({})

        assert exc_info.value is error


class TestPlan:
    def test_plan_builds_predicate_and_order(self):
        executor = _executor(MemoryStorage())

        plan = executor.plan({"name": "x"}, PaginationMode.OFFSET)

        assert plan.order == (OrderKey("rank", SortDirection.DESC), OrderKey("id", SortDirection.ASC))
        assert plan.predicate.terms[0].field == "name"
