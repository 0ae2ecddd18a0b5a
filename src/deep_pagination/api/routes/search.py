from __future__ import annotations

from fastapi import APIRouter, Depends

from deep_pagination.api.dependencies import get_paginator
from deep_pagination.core.executor import CursorPaginator
from deep_pagination.core.search import cursor_search as _cursor_search
from deep_pagination.schemas import CursorSearchInput, CursorSearchResult, ErrorResponse

router = APIRouter(prefix="/search", tags=["search"])


@router.post(
    "/cursor",
    response_model=CursorSearchResult,
    responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def cursor_search(
    body: CursorSearchInput,
    paginator: CursorPaginator = Depends(get_paginator),
) -> CursorSearchResult:
    """Forward-only search that scales past the 10k offset window.

    First page: ``{"take": 100}``. Next page: ``{"take": 100, "cursor": "<nextCursor>"}``.
    Repeat until ``hasMore`` is false. Keep the filters and sort unchanged
    between pages; a cursor replayed under a different sort is rejected.
    """
    return await _cursor_search(paginator, body)
