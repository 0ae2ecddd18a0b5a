"""Keyset (cursor) pagination over an Elasticsearch product index."""

from deep_pagination.config import SearchSettings
from deep_pagination.core.cursor import Cursor, decode_cursor, encode_cursor
from deep_pagination.core.errors import (
    CursorError,
    DeepPaginationError,
    IncompatibleCursor,
    InvalidFilterPredicate,
    MalformedCursor,
    SearchUnavailable,
)
from deep_pagination.core.executor import CursorPaginator
from deep_pagination.core.query import FilterPredicate, translate_filter
from deep_pagination.core.search import cursor_search, iterate_pages, search_page
from deep_pagination.core.sorting import SortDirection, SortField, SortSpec, compose_sort
from deep_pagination.models import Page, SearchHit

__all__ = [
    "Cursor",
    "CursorError",
    "CursorPaginator",
    "DeepPaginationError",
    "FilterPredicate",
    "IncompatibleCursor",
    "InvalidFilterPredicate",
    "MalformedCursor",
    "Page",
    "SearchHit",
    "SearchSettings",
    "SearchUnavailable",
    "SortDirection",
    "SortField",
    "SortSpec",
    "compose_sort",
    "cursor_search",
    "decode_cursor",
    "encode_cursor",
    "iterate_pages",
    "search_page",
    "translate_filter",
]
