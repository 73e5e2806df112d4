"""Integration tests for the SQLAlchemy storage delegate on SQLite."""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from dashboard_service.core.database import SQLAlchemyReader, SQLAlchemyStorage, escape_like
from dashboard_service.core.pagination import (
    And,
    Contains,
    Equals,
    InvalidCursorError,
    OrderKey,
    Or,
    PaginatedQueryExecutor,
    ResourceConfigurationError,
    SortDirection,
    TransientStorageError,
)
from dashboard_service.core.pagination.query import max_page
from dashboard_service.features.dummies import DUMMY_RESOURCE, Dummy
from dashboard_service.infra.database import configure_sqlite_engine, create_all

pytestmark = pytest.mark.integration

ID_ORDER = (OrderKey("id"),)


def _storage(session_factory) -> SQLAlchemyStorage[Dummy]:
    return SQLAlchemyStorage(session_factory, Dummy)


def _executor(session_factory) -> PaginatedQueryExecutor[Dummy]:
    return PaginatedQueryExecutor(DUMMY_RESOURCE, _storage(session_factory))


def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"
    assert escape_like("plain") == "plain"


class TestReader:
    async def test_count_and_scan(self, session_factory, dummy_factory):
        await dummy_factory(("alpha", None), ("beta", None), ("gamma", None))

        async with _storage(session_factory).snapshot() as reader:
            total = await reader.count(And())
            rows = await reader.scan(And(), (OrderKey("name", SortDirection.DESC),) + ID_ORDER, skip=1, take=5)

        assert total == 3
        assert [row.name for row in rows] == ["beta", "alpha"]

    async def test_contains_is_case_insensitive(self, session_factory, dummy_factory):
        await dummy_factory(("Alpha", None), ("ALPINE", None), ("beta", None))

        async with _storage(session_factory).snapshot() as reader:
            rows = await reader.scan(And(Contains("name", "alp")), ID_ORDER, skip=0, take=10)

        assert sorted(row.name for row in rows) == ["ALPINE", "Alpha"]

    async def test_contains_folds_non_ascii(self, session_factory, dummy_factory):
        await dummy_factory(("Émile", None), ("ÉMILIE", None), ("Emil", None))

        page = await _executor(session_factory).list_offset({"name": "émil"})

        assert page.total == 2
        assert sorted(row.name for row in page.data) == ["ÉMILIE", "Émile"]

    async def test_like_wildcards_match_literally(self, session_factory, dummy_factory):
        await dummy_factory(("100% cotton", None), ("1000 cotton", None), ("snake_case", None), ("snakeXcase", None))

        async with _storage(session_factory).snapshot() as reader:
            percent = await reader.count(And(Contains("name", "0%")))
            underscore = await reader.count(And(Contains("name", "e_c")))

        assert percent == 1
        assert underscore == 1

    async def test_equals_and_null(self, session_factory, dummy_factory):
        await dummy_factory(("alpha", None), ("beta", "described well enough"))

        async with _storage(session_factory).snapshot() as reader:
            nulls = await reader.count(And(Equals("description", None)))
            exact = await reader.count(And(Equals("name", "beta")))

        assert nulls == 1
        assert exact == 1

    async def test_empty_or_matches_nothing(self, session_factory, dummy_factory):
        await dummy_factory(("alpha", None))

        async with _storage(session_factory).snapshot() as reader:
            assert await reader.count(And(Or())) == 0
            assert await reader.count(Or(Contains("name", "zzz"), Contains("name", "alp"))) == 1

    async def test_null_ordering(self, session_factory, dummy_factory):
        rows = await dummy_factory(("a", "second description"), ("b", None), ("c", "first description ok"))

        async with _storage(session_factory).snapshot() as reader:
            ascending = await reader.scan(And(), (OrderKey("description"),) + ID_ORDER, skip=0, take=10)
            descending = await reader.scan(
                And(), (OrderKey("description", SortDirection.DESC),) + ID_ORDER, skip=0, take=10
            )

        assert [row.name for row in ascending] == ["b", "c", "a"]
        assert [row.name for row in descending] == ["a", "c", "b"]
        assert len(rows) == 3

    async def test_locate(self, session_factory, dummy_factory):
        alpha, beta = await dummy_factory(("alpha", None), ("beta", None))

        async with _storage(session_factory).snapshot() as reader:
            found = await reader.locate(And(), str(alpha.id))
            filtered_out = await reader.locate(And(Contains("name", "beta")), str(alpha.id))
            missing = await reader.locate(And(), str(uuid.uuid4()))
            garbage = await reader.locate(And(), "not-a-uuid")

        assert found is not None and found.id == alpha.id
        assert filtered_out is None
        assert missing is None
        assert garbage is None
        assert beta.name == "beta"

    async def test_unknown_column(self, session_factory):
        async with _storage(session_factory).snapshot() as reader:
            with pytest.raises(ResourceConfigurationError):
                await reader.count(And(Contains("nope", "x")))

    def test_unsupported_predicate(self):
        reader = SQLAlchemyReader(session=None, model=Dummy)  # type: ignore[arg-type]

        with pytest.raises(TypeError):
            reader.compile("name = 1")  # type: ignore[arg-type]


class TestSeek:
    """Keyset pagination through the executor, including ties and NULLs."""

    async def _walk(self, executor, raw):
        seen = []
        cursor = None
        while True:
            params = dict(raw)
            if cursor:
                params["cursor"] = cursor
            page = await executor.list_cursor(params)
            seen.extend(row.id for row in page.data)
            cursor = page.next_cursor
            if cursor is None:
                return seen

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    @pytest.mark.parametrize("field", ["name", "description", "created_at"])
    async def test_walk_is_complete_and_ordered(self, session_factory, dummy_factory, field, direction):
        rows = await dummy_factory(
            ("same", None),
            ("same", "a long enough description"),
            ("other", None),
            ("same", "a long enough description"),
            ("other", "another description here"),
            ("same", None),
            ("zeta", None),
        )
        executor = _executor(session_factory)

        walked = await self._walk(executor, {"limit": "2", "sortField": field, "sortDirection": direction})
        offset = await executor.list_offset({"limit": "100", "sortField": field, "sortDirection": direction})

        assert len(walked) == len(rows)
        assert set(walked) == {row.id for row in rows}
        assert walked == [row.id for row in offset.data]

    async def test_default_order_is_newest_first(self, session_factory, dummy_factory):
        rows = await dummy_factory(("first", None), ("second", None), ("third", None))

        walked = await self._walk(_executor(session_factory), {"limit": "1"})

        assert walked == [row.id for row in reversed(rows)]

    async def test_stale_cursor(self, session_factory, dummy_factory):
        await dummy_factory(("alpha", None), ("beta", None))

        with pytest.raises(InvalidCursorError):
            await _executor(session_factory).list_cursor({"cursor": str(uuid.uuid4())})


class TestSnapshot:
    async def test_offset_total_and_rows(self, session_factory, dummy_factory):
        await dummy_factory(*[(f"row-{n:02d}", None) for n in range(12)])

        page = await _executor(session_factory).list_offset({"page": "3", "limit": "5", "sortField": "name"})

        assert page.total == 12
        assert [row.name for row in page.data] == ["row-10", "row-11"]

    @pytest.mark.parametrize("page", ["1e20", "99999999999999999999", "inf"])
    async def test_huge_page_is_empty(self, session_factory, dummy_factory, page):
        await dummy_factory(("alpha", None), ("beta", None))

        result = await _executor(session_factory).list_offset({"page": page})

        assert result.total == 2
        assert result.data == []
        assert result.page == max_page(result.limit)

    async def test_count_and_scan_share_one_transaction(self, tmp_path):
        db_path = tmp_path / "snapshot.db"
        url = f"sqlite+aiosqlite:///{db_path}"
        writer = create_async_engine(url)
        reader_engine = configure_sqlite_engine(create_async_engine(url))
        try:
            async with writer.connect() as conn:
                await conn.exec_driver_sql("PRAGMA journal_mode=WAL")
            await create_all(bind=writer)
            writes = async_sessionmaker(writer, expire_on_commit=False)
            async with writes() as session:
                session.add(Dummy(name="existing"))
                await session.commit()

            storage = SQLAlchemyStorage(async_sessionmaker(reader_engine), Dummy)
            async with storage.snapshot() as reader:
                total = await reader.count(And())
                async with writes() as session:
                    session.add(Dummy(name="concurrent"))
                    await session.commit()
                rows = await reader.scan(And(), ID_ORDER, skip=0, take=100)

            assert total == len(rows) == 1

            page = await PaginatedQueryExecutor(DUMMY_RESOURCE, storage).list_offset({})
            assert page.total == len(page.data) == 2
        finally:
            await reader_engine.dispose()
            await writer.dispose()

    async def test_isolation_not_pinned_on_sqlite(self, session_factory):
        storage = SQLAlchemyStorage(session_factory, Dummy, isolation_level="SERIALIZABLE")

        async with storage.snapshot() as reader:
            assert await reader.count(And()) == 0

    async def test_driver_errors_become_transient(self, session_factory):
        class BrokenSession:
            def __init__(self, *args, **kwargs):
                pass

            async def __aenter__(self):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

            async def __aexit__(self, *exc_info):
                return False

        storage = SQLAlchemyStorage(BrokenSession, Dummy)  # type: ignore[arg-type]

        with pytest.raises(TransientStorageError):
            async with storage.snapshot():
                pass
