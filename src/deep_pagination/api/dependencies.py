from __future__ import annotations

from collections.abc import AsyncIterator
from functools import lru_cache

from fastapi import Depends

from deep_pagination.config import SearchSettings
from deep_pagination.core.executor import CursorPaginator
from deep_pagination.core.ports.search_engine import SearchEngine
from deep_pagination.engine.client import get_client
from deep_pagination.engine.elastic import ElasticsearchSearchEngine

_engine: ElasticsearchSearchEngine | None = None
_paginator: CursorPaginator | None = None


@lru_cache(maxsize=1)
def get_settings() -> SearchSettings:
    return SearchSettings.from_env()


async def get_engine(settings: SearchSettings = Depends(get_settings)) -> AsyncIterator[SearchEngine]:
    """Yield the process-wide ``SearchEngine``, creating it lazily on first call."""
    global _engine  # noqa: PLW0603
    if _engine is None:
        _engine = ElasticsearchSearchEngine(get_client(settings))
    yield _engine


async def get_paginator(
    engine: SearchEngine = Depends(get_engine),
    settings: SearchSettings = Depends(get_settings),
) -> CursorPaginator:
    """Return the paginator bound to ``engine``; index resolution runs once per paginator."""
    global _paginator  # noqa: PLW0603
    if _paginator is None or _paginator.engine is not engine or _paginator.settings is not settings:
        _paginator = CursorPaginator(engine, settings)
    return _paginator


async def shutdown_engine() -> None:
    global _engine, _paginator  # noqa: PLW0603
    _paginator = None
    if _engine is not None:
        await _engine.dispose()
        _engine = None
