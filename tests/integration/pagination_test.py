"""Integration tests for cursor-based pagination against a real Elasticsearch node."""

from __future__ import annotations

import pytest
import pytest_asyncio

from deep_pagination.config import SearchSettings
from deep_pagination.core.cursor import decode_cursor, encode_cursor
from deep_pagination.core.errors import IncompatibleCursor, MalformedCursor
from deep_pagination.core.executor import CursorPaginator
from deep_pagination.core.mapping import project_hit
from deep_pagination.core.query import FilterPredicate
from deep_pagination.core.search import cursor_search, iterate_pages
from deep_pagination.core.sorting import compose_sort
from deep_pagination.engine import ElasticsearchSearchEngine
from deep_pagination.schemas import CursorSearchInput
from tests.conftest import INDEX_NAME, make_variant

# Prices repeat every five variants so most pages end inside a run of ties.
DOC_COUNT = 60


@pytest_asyncio.fixture
async def paginator(engine: ElasticsearchSearchEngine, es_settings: SearchSettings) -> CursorPaginator:
    documents = [
        make_variant(
            n,
            priceWithTax=100 * (n % 5),
            collectionIds=["even" if n % 2 == 0 else "odd"],
            **({"productName": "Walnut Lamp"} if n == 42 else {}),
        )
        for n in range(1, DOC_COUNT + 1)
    ]
    await engine.index_documents(INDEX_NAME, documents)
    return CursorPaginator(engine, es_settings)


@pytest.mark.asyncio
@pytest.mark.parametrize("size", [1, 7, 20, 60])
async def test_full_pagination_sees_every_document_once(paginator: CursorPaginator, size: int) -> None:
    """Walk all pages by cursor and verify no duplicates and no gaps."""
    spec = compose_sort([("price", "desc")])
    seen: list[str] = []
    cursor = None
    for _ in range(100):  # safety limit
        page = await paginator.fetch_page(None, spec, cursor, size)
        seen.extend(h.id for h in page.items)
        assert page.total_count == DOC_COUNT
        if not page.has_more:
            assert page.next_cursor is None
            break
        assert page.next_cursor is not None
        cursor = decode_cursor(page.next_cursor, spec)

    assert len(seen) == DOC_COUNT
    assert len(set(seen)) == DOC_COUNT


@pytest.mark.asyncio
async def test_ties_are_ordered_by_variant_id(paginator: CursorPaginator) -> None:
    request = CursorSearchInput(take=5, sort=[{"field": "price", "direction": "ASC"}])  # type: ignore[list-item]
    result = await cursor_search(paginator, request)
    # n % 5 == 0 gives price 0: variants 5, 10, 15 ... sorted as keywords.
    assert [i.product_variant_id for i in result.items] == ["v005", "v010", "v015", "v020", "v025"]


@pytest.mark.asyncio
async def test_iterate_pages_walks_every_page(paginator: CursorPaginator) -> None:
    pages = [p async for p in iterate_pages(paginator, CursorSearchInput(take=11), project_hit)]
    assert sum(len(p.items) for p in pages) == DOC_COUNT
    assert pages[-1].has_more is False


@pytest.mark.asyncio
async def test_filtered_pagination(paginator: CursorPaginator) -> None:
    spec = compose_sort([("name", "asc")])
    predicate = FilterPredicate(collection_id="even")
    first = await paginator.fetch_page(predicate, spec, None, 20)
    assert first.total_count == DOC_COUNT // 2
    assert first.next_cursor is not None
    second = await paginator.fetch_page(predicate, spec, decode_cursor(first.next_cursor, spec), 20)
    ids = [h.id for h in first.items + second.items]
    assert len(set(ids)) == DOC_COUNT // 2
    assert second.has_more is False


@pytest.mark.asyncio
async def test_term_search(paginator: CursorPaginator) -> None:
    result = await cursor_search(paginator, CursorSearchInput(term="walnut", take=5))
    assert [i.product_variant_id for i in result.items] == ["v042"]
    assert result.has_more is False


@pytest.mark.asyncio
async def test_cursor_rejected_after_sort_change(paginator: CursorPaginator) -> None:
    first = await cursor_search(paginator, CursorSearchInput(take=5))
    with pytest.raises(IncompatibleCursor):
        await cursor_search(
            paginator,
            CursorSearchInput(take=5, cursor=first.next_cursor, sort=[{"field": "name"}]),  # type: ignore[list-item]
        )


@pytest.mark.asyncio
async def test_cursor_with_wrong_typed_value_is_malformed(paginator: CursorPaginator) -> None:
    token = encode_cursor(["cheap", "v005"], ["priceWithTax", "productVariantId"])
    with pytest.raises(MalformedCursor):
        await cursor_search(
            paginator,
            CursorSearchInput(take=5, cursor=token, sort=[{"field": "price"}]),  # type: ignore[list-item]
        )
