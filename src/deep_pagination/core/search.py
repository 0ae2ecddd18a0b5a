from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import TypeVar

from deep_pagination.core.cursor import decode_cursor, ensure_compatible
from deep_pagination.core.errors import MalformedCursor, SearchRejected
from deep_pagination.core.executor import CursorPaginator
from deep_pagination.core.mapping import project_hit
from deep_pagination.core.query import FilterPredicate
from deep_pagination.core.sorting import compose_sort
from deep_pagination.models import Page, SearchHit
from deep_pagination.schemas import CursorSearchInput, CursorSearchResult, SearchResult

T = TypeVar("T")


def build_predicate(request: CursorSearchInput) -> FilterPredicate:
    return FilterPredicate(
        term=request.term,
        facet_value_ids=tuple(request.facet_value_ids),
        facet_value_operator=request.facet_value_operator,
        collection_id=request.collection_id,
        collection_slug=request.collection_slug,
    )


async def search_page(
    paginator: CursorPaginator,
    request: CursorSearchInput,
    mapper: Callable[[SearchHit], T],
) -> Page[T]:
    """Run one cursor search request and project its hits with ``mapper``."""
    cursor = decode_cursor(request.cursor) if request.cursor else None
    sort_spec = compose_sort((s.field, s.direction) for s in request.sort)
    if cursor is not None:
        ensure_compatible(cursor, sort_spec)

    await paginator.ensure_ready()
    try:
        page = await paginator.fetch_page(build_predicate(request), sort_spec, cursor, request.take)
    except SearchRejected as exc:
        if cursor is None:
            raise
        raise MalformedCursor(request.cursor or "", "sort values do not fit the sort fields") from exc
    return Page(
        items=[mapper(hit) for hit in page.items],
        total_count=page.total_count,
        has_more=page.has_more,
        next_cursor=page.next_cursor,
        total_relation=page.total_relation,
        size=page.size,
        took_ms=page.took_ms,
    )


async def cursor_search(paginator: CursorPaginator, request: CursorSearchInput) -> CursorSearchResult:
    page: Page[SearchResult] = await search_page(paginator, request, project_hit)
    return CursorSearchResult(
        items=page.items,
        total_items=page.total_count,
        has_more=page.has_more,
        next_cursor=page.next_cursor,
    )


async def iterate_pages(
    paginator: CursorPaginator,
    request: CursorSearchInput,
    mapper: Callable[[SearchHit], T],
    max_pages: int | None = None,
) -> AsyncIterator[Page[T]]:
    """Yield pages by following ``next_cursor`` until the results run out."""
    current = request
    fetched = 0
    while True:
        page = await search_page(paginator, current, mapper)
        yield page
        fetched += 1
        if not page.has_more or (max_pages is not None and fetched >= max_pages):
            return
        current = current.model_copy(update={"cursor": page.next_cursor})
