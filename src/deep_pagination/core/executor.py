"""Forward-only page fetches over ``search_after``.

Each fetch asks the engine for ``size + 1`` documents. The extra document
only proves that more results exist; it is never returned, and the next
cursor is taken from the last document that is.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from deep_pagination.config import SearchSettings
from deep_pagination.core.cursor import Cursor, encode_cursor_for
from deep_pagination.core.errors import SearchUnavailable
from deep_pagination.core.ports.search_engine import SearchEngine
from deep_pagination.core.query import FilterPredicate, translate_filter
from deep_pagination.core.sorting import SortSpec
from deep_pagination.models import Page, SearchHit

logger = logging.getLogger(__name__)


def clamp_page_size(size: int | None, settings: SearchSettings) -> int:
    if size is None:
        return settings.default_page_size
    return max(1, min(size, settings.max_page_size))


def _parse_total(hits: dict[str, Any]) -> tuple[int, str]:
    total = hits.get("total")
    if isinstance(total, int):
        return total, "eq"
    if isinstance(total, dict):
        return int(total.get("value", 0)), str(total.get("relation", "eq"))
    return 0, "eq"


class CursorPaginator:
    def __init__(self, engine: SearchEngine, settings: SearchSettings) -> None:
        self.engine = engine
        self.settings = settings
        self._indices: list[str] | None = None

    async def ensure_ready(self) -> list[str]:
        """Check the engine and resolve the index pattern, once per paginator.

        Raises ``SearchUnavailable`` when the pattern matches no index. Several
        matches (a reindex in progress) are allowed but logged, since sort
        values are only known to be comparable within one index.
        """
        if self._indices is not None:
            return self._indices
        pattern = self.settings.index_pattern
        try:
            await self.engine.ensure_ready()
            names = await self.engine.resolve_indices(pattern)
        except SearchUnavailable:
            raise
        except Exception as exc:
            raise SearchUnavailable(f"Index resolution failed: {exc}", index=pattern) from exc

        if not names:
            raise SearchUnavailable("No index matches pattern", index=pattern)
        if len(names) > 1:
            logger.warning(
                "Index pattern %s matches %d indices (%s); cursors may span index versions",
                pattern,
                len(names),
                ", ".join(names),
            )
        else:
            logger.info("Index pattern %s resolved to %s", pattern, names[0])
        self._indices = names
        return names

    async def fetch_page(
        self,
        predicate: FilterPredicate | None,
        sort_spec: SortSpec,
        cursor: Cursor | None = None,
        size: int | None = None,
    ) -> Page[SearchHit]:
        """Fetch one page ordered by ``sort_spec``, resuming after ``cursor``.

        The cursor must already be checked against ``sort_spec``. Any engine
        failure surfaces as ``SearchUnavailable``; nothing is retried.
        """
        size = clamp_page_size(size, self.settings)
        index = self.settings.index_pattern
        query = translate_filter(predicate)

        t0 = time.perf_counter()
        try:
            response = await self.engine.search(
                index=index,
                query=query,
                sort=sort_spec.to_native(),
                size=size + 1,
                search_after=list(cursor.values) if cursor is not None else None,
                track_total_hits=True if self.settings.exact_total_count else None,
            )
        except SearchUnavailable:
            raise
        except Exception as exc:
            raise SearchUnavailable(f"Search failed: {exc}", index=index) from exc
        took_ms = (time.perf_counter() - t0) * 1000

        hits_section = response.get("hits") or {}
        hits = [SearchHit.from_native(raw) for raw in hits_section.get("hits") or []]
        total_count, total_relation = _parse_total(hits_section)

        has_more = len(hits) > size
        items = hits[:size]

        next_cursor: str | None = None
        if has_more:
            last = items[-1]
            if len(last.sort) != len(sort_spec):
                raise SearchUnavailable(
                    f"Document {last.id!r} came back with {len(last.sort)} sort values, "
                    f"expected {len(sort_spec)}",
                    index=index,
                )
            try:
                next_cursor = encode_cursor_for(last.sort, sort_spec)
            except ValueError as exc:
                raise SearchUnavailable(
                    f"Document {last.id!r} came back with unusable sort values: {exc}", index=index
                ) from exc

        logger.debug(
            "cursor page on %s: %d items, has_more=%s, total=%d (%s), %.1fms",
            index,
            len(items),
            has_more,
            total_count,
            total_relation,
            took_ms,
        )

        return Page(
            items=items,
            total_count=total_count,
            has_more=has_more,
            next_cursor=next_cursor,
            total_relation=total_relation,
            size=size,
            took_ms=took_ms,
        )
