"""Sample data commands for the dummies resource.

Example:bash
    # Insert 50 sample rows
    dashboard dummies seed 50

    # Second offset page, sorted by name
    dashboard dummies list --page 2 --limit 10 --sort name --direction asc

    # Cursor pagination, continuing after a known id
    dashboard dummies list --cursor 3f1c... --limit 10
"""

import sys

import click

from dashboard_service.cli.utils import coro, error, header, info, success
from dashboard_service.core.pagination import PaginationError
from dashboard_service.core.settings import get_db_settings, get_pagination_settings


@click.group(name="dummies")
def dummies() -> None:
    """Seed and inspect dummy records."""


@dummies.command()
@click.argument("count", type=click.IntRange(1, 10_000), default=25)
@click.option("--prefix", default="Dummy", show_default=True, help="Name prefix")
@coro
async def seed(count: int, prefix: str) -> None:
    """Insert COUNT sample dummies."""
    from dashboard_service.features.dummies import Dummy, get_dummy_repository
    from dashboard_service.infra.database import close_database, get_async_session

    width = len(str(count))
    records = [
        Dummy(
            name=f"{prefix} {index:0{width}d}",
            description=f"Seeded sample record number {index}" if index % 5 else None,
        )
        for index in range(1, count + 1)
    ]

    try:
        async with get_async_session() as session:
            await get_dummy_repository().create_many(session, records)
            await session.commit()
        success(f"Inserted {count} dummies")
    except Exception as e:
        error(f"Failed to seed dummies: {e}")
        sys.exit(1)
    finally:
        await close_database()


@dummies.command(name="list")
@click.option("--page", default=None, help="1-based page number (offset mode)")
@click.option("--cursor", default=None, help="Id of the last record already seen; '' starts cursor mode from the top")
@click.option("--limit", default=None, help="Page size")
@click.option("--search", "search_term", default=None, help="Free-text search term")
@click.option("--search-fields", default=None, help="Comma-separated fields to search")
@click.option("--sort", "sort_field", default=None, help="Sort field")
@click.option("--direction", "sort_direction", default=None, help="asc or desc")
@click.option("--filter", "filters", multiple=True, help="FIELD=VALUE substring filter (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Print the raw envelope as JSON")
@coro
async def list_dummies(
    page: str | None,
    cursor: str | None,
    limit: str | None,
    search_term: str | None,
    search_fields: str | None,
    sort_field: str | None,
    sort_direction: str | None,
    filters: tuple[str, ...],
    as_json: bool,
) -> None:
    """List dummies with the same parameters the HTTP API accepts.

    Uses cursor pagination when --cursor is given, offset otherwise.
    """
    from dashboard_service.core.pagination import CursorListResponse, OffsetListResponse
    from dashboard_service.features.dummies.schemas import DummyResponse
    from dashboard_service.features.dummies.service import build_dummy_executor
    from dashboard_service.infra.database import AsyncSessionLocal, close_database

    raw: dict[str, str] = {}
    for item in filters:
        field, sep, value = item.partition("=")
        if not sep:
            error(f"Invalid filter {item!r}; expected FIELD=VALUE")
            sys.exit(2)
        raw[field.strip()] = value
    params = {
        "page": page,
        "cursor": cursor,
        "limit": limit,
        "searchTerm": search_term,
        "searchFields": search_fields,
        "sortField": sort_field,
        "sortDirection": sort_direction,
    }
    raw.update({key: value for key, value in params.items() if value is not None})

    executor = build_dummy_executor(AsyncSessionLocal, get_pagination_settings(), get_db_settings())

    serialize = DummyResponse.model_validate
    try:
        if cursor is not None:
            response = CursorListResponse[DummyResponse].from_page(await executor.list_cursor(raw), serialize)
            summary = f"{len(response.data)} dummies, next cursor: {response.next_cursor or '(end)'}"
        else:
            response = OffsetListResponse[DummyResponse].from_page(await executor.list_offset(raw), serialize)
            meta = response.pagination
            summary = f"page {meta.page}, {len(response.data)} of {meta.total} dummies (limit {meta.limit})"
    except PaginationError as e:
        error(f"{e.problem_type}: {e}")
        sys.exit(1)
    finally:
        await close_database()

    if as_json:
        click.echo(response.model_dump_json(by_alias=True, indent=2))
        return

    header("Dummies")
    for item in response.data:
        click.echo(f"  {item.id}  {item.name:<30}  {item.description or '-'}")
    info(summary)
