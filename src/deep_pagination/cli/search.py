import asyncio
from collections.abc import Sequence
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from deep_pagination.core.errors import CursorError, InvalidFilterPredicate, SearchUnavailable
from deep_pagination.core.executor import CursorPaginator
from deep_pagination.core.mapping import project_hit
from deep_pagination.core.search import iterate_pages
from deep_pagination.core.sorting import parse_sort_expression
from deep_pagination.schemas import CursorSearchInput, SearchResult, SinglePrice, SortInput

console = Console()


def _format_price(result: SearchResult) -> str:
    price = result.price_with_tax
    if isinstance(price, SinglePrice):
        return f"{price.value:g}"
    return f"{price.min:g}-{price.max:g}"


def _render_page(items: Sequence[SearchResult]) -> None:
    table = Table(show_lines=False)
    for h in ("product_id", "variant_id", "name", "price", "currency"):
        table.add_column(h)
    for r in items:
        table.add_row(r.product_id, r.product_variant_id or "", r.product_name, _format_price(r), r.currency_code)
    console.print(table)


def _get_paginator() -> CursorPaginator:
    from deep_pagination.config import SearchSettings
    from deep_pagination.engine.client import get_client
    from deep_pagination.engine.elastic import ElasticsearchSearchEngine

    settings = SearchSettings.from_env()
    return CursorPaginator(ElasticsearchSearchEngine(get_client(settings)), settings)


def search(
    term: Annotated[str | None, typer.Option(help="Free-text search term.")] = None,
    facet: Annotated[list[str] | None, typer.Option(help="Facet value id (repeatable).")] = None,
    operator: Annotated[str, typer.Option(help="Combine facet values with AND or OR.")] = "OR",
    collection_id: Annotated[str | None, typer.Option(help="Restrict to a collection id.")] = None,
    collection_slug: Annotated[str | None, typer.Option(help="Restrict to a collection slug.")] = None,
    take: Annotated[int | None, typer.Option(help="Page size (clamped to the configured maximum).")] = None,
    cursor: Annotated[str | None, typer.Option(help="Resume after this cursor.")] = None,
    sort: Annotated[str | None, typer.Option(help="Sort, e.g. '-price,name' or 'price:desc'.")] = None,
    all_pages: Annotated[bool, typer.Option("--all", help="Follow cursors until the last page.")] = False,
    max_pages: Annotated[int | None, typer.Option(help="Stop after this many pages with --all.")] = None,
) -> None:
    """Run a cursor search and print the results."""
    try:
        sort_inputs = [SortInput(field=f, direction=d) for f, d in parse_sort_expression(sort or "")]
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--sort") from exc
    if operator.upper() not in ("AND", "OR"):
        raise typer.BadParameter("expected AND or OR", param_hint="--operator")

    request = CursorSearchInput(
        term=term,
        facet_value_ids=facet or [],
        facet_value_operator=operator.upper(),  # type: ignore[arg-type]
        collection_id=collection_id,
        collection_slug=collection_slug,
        take=take,
        cursor=cursor,
        sort=sort_inputs,
    )
    paginator = _get_paginator()

    async def _run() -> None:
        try:
            limit = max_pages if all_pages else 1
            seen = 0
            async for page in iterate_pages(paginator, request, project_hit, max_pages=limit):
                _render_page(page.items)
                seen += len(page.items)
                relation = "" if page.total_relation == "eq" else "+"
                console.print(f"({len(page.items)} rows, {seen} of {page.total_count}{relation} matching)")
                if page.next_cursor:
                    console.print(f"next cursor: {page.next_cursor}")
        finally:
            await paginator.engine.dispose()

    try:
        asyncio.run(_run())
    except (CursorError, InvalidFilterPredicate) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(2) from exc
    except SearchUnavailable as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc


