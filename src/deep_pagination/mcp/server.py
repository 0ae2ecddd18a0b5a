"""FastMCP server exposing cursor search as a tool."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Literal

from fastmcp import FastMCP

from deep_pagination.core.errors import CursorError, InvalidFilterPredicate
from deep_pagination.core.executor import CursorPaginator
from deep_pagination.core.search import cursor_search as _cursor_search
from deep_pagination.schemas import CursorSearchInput, SortInput


def cursor_search_tool(paginator: CursorPaginator) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Build the ``cursor_search`` tool body bound to ``paginator``."""

    async def cursor_search(
        term: str | None = None,
        facet_value_ids: list[str] | None = None,
        facet_value_operator: Literal["AND", "OR"] = "OR",
        collection_id: str | None = None,
        collection_slug: str | None = None,
        take: int | None = None,
        cursor: str | None = None,
        sort: list[dict[str, str]] | None = None,
    ) -> dict[str, Any]:
        """Search products one page at a time. Pass nextCursor back as cursor to continue."""
        request = CursorSearchInput(
            term=term,
            facet_value_ids=facet_value_ids or [],
            facet_value_operator=facet_value_operator,
            collection_id=collection_id,
            collection_slug=collection_slug,
            take=take,
            cursor=cursor,
            sort=[SortInput.model_validate(s) for s in sort or []],
        )
        try:
            result = await _cursor_search(paginator, request)
        except (CursorError, InvalidFilterPredicate) as exc:
            return {"error": type(exc).__name__, "detail": str(exc)}
        return result.model_dump(by_alias=True)

    return cursor_search


def create_mcp_server(paginator: CursorPaginator) -> FastMCP:
    """Create a FastMCP server wired to the given paginator."""

    mcp = FastMCP("deep-pagination", instructions="Cursor-based product search over Elasticsearch.")
    mcp.tool(name="cursor_search")(cursor_search_tool(paginator))
    return mcp
