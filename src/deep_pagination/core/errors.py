"""Error taxonomy for cursor searches.

Client errors (``CursorError``, ``InvalidFilterPredicate``) mean the request
itself is wrong and must not be retried. ``SearchUnavailable`` means the
engine call failed; whether to retry is up to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence


class DeepPaginationError(Exception):
    """Base class for every error raised by deep_pagination."""


class CursorError(DeepPaginationError):
    """The supplied cursor cannot be used for this request."""


class MalformedCursor(CursorError):
    def __init__(self, cursor: str, reason: str) -> None:
        self.cursor = cursor
        self.reason = reason
        super().__init__(f"Malformed cursor: {reason}")


class IncompatibleCursor(CursorError):
    """The cursor was produced under a different sort order.

    ``position`` is the index of the first sort field that differs, or the
    shorter length when one field list is a prefix of the other. It is
    ``None`` when the field names agree and only the sort signature
    (directions or field mapping) changed.
    """

    def __init__(
        self,
        expected_fields: Sequence[str],
        actual_fields: Sequence[str],
        position: int | None = None,
    ) -> None:
        self.expected_fields = tuple(expected_fields)
        self.actual_fields = tuple(actual_fields)
        self.position = position
        if position is None:
            detail = "sort directions changed"
        else:
            detail = f"sort fields differ at position {position}"
        super().__init__(
            f"Cursor does not match the requested sort ({detail}): "
            f"expected {list(self.expected_fields)}, got {list(self.actual_fields)}. "
            "Restart from the first page."
        )


class InvalidFilterPredicate(DeepPaginationError):
    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid filter on '{field}': {reason}")


class SearchUnavailable(DeepPaginationError):
    """The search engine call failed, timed out, or broke its contract."""

    def __init__(self, message: str, index: str | None = None) -> None:
        self.index = index
        super().__init__(message if index is None else f"{message} (index: {index})")


class SearchRejected(SearchUnavailable):
    """The engine refused the request itself, e.g. ``search_after`` values of the wrong type."""
