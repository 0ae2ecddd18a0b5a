from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SearchHit:
    """One document as returned by the engine: source payload plus its sort values."""

    id: str
    source: dict[str, Any]
    sort: tuple[Any, ...] = ()
    score: float | None = None

    @classmethod
    def from_native(cls, raw: dict[str, Any]) -> SearchHit:
        return cls(
            id=str(raw.get("_id", "")),
            source=raw.get("_source") or {},
            sort=tuple(raw.get("sort") or ()),
            score=raw.get("_score"),
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    """One forward page of a cursor search.

    ``next_cursor`` is set exactly when ``has_more`` is true.
    """

    items: list[T]
    total_count: int
    has_more: bool
    next_cursor: str | None = None
    total_relation: str = "eq"
    size: int = 0
    took_ms: float = field(default=0.0, compare=False)
