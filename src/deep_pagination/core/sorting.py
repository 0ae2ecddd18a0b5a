"""Deterministic sort composition for ``search_after`` pagination.

``search_after`` only resumes correctly when the ordering is total, so every
sort ends with a field that is unique per document. ``productVariantId`` is a
keyword field and unique per variant; ``sku`` is analysed text and ``_id``
needs fielddata, so neither can serve as the tiebreaker.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

TIEBREAKER_FIELD = "productVariantId"

# Public sort name -> index field with an efficient, index-native ordering.
SORTABLE_FIELDS: Mapping[str, str] = {
    "name": "productName.keyword",
    "price": "priceWithTax",
    "productId": "productId",
    "productVariantId": TIEBREAKER_FIELD,
}


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def _missing_(cls, value: object) -> "SortDirection | None":
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


@dataclass(frozen=True)
class SortField:
    name: str
    direction: SortDirection = SortDirection.ASC

    def to_native(self) -> dict[str, dict[str, str]]:
        return {self.name: {"order": self.direction.value}}


@dataclass(frozen=True)
class SortSpec:
    fields: tuple[SortField, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def to_native(self) -> list[dict[str, dict[str, str]]]:
        return [f.to_native() for f in self.fields]

    def signature(self) -> str:
        return "|".join(f"{f.name}:{f.direction.value}" for f in self.fields)

    def fingerprint(self) -> str:
        return signature_fingerprint(self.signature())

    def __len__(self) -> int:
        return len(self.fields)


def signature_fingerprint(signature: str) -> str:
    return hashlib.sha256(signature.encode("utf-8")).hexdigest()[:16]


def _resolve_field(name: str, sortable: Mapping[str, str]) -> str | None:
    if name in sortable:
        return sortable[name]
    if name in sortable.values():
        return name
    return None


def compose_sort(
    requested: Iterable[tuple[str, SortDirection | str]] | None = None,
    sortable: Mapping[str, str] = SORTABLE_FIELDS,
    tiebreaker: str = TIEBREAKER_FIELD,
) -> SortSpec:
    """Build the final ordering for one request.

    Requested fields keep their order and direction. Fields without an
    index-native ordering are dropped without error, as are repeats of a
    field already in the sort. The tiebreaker is appended ascending unless
    the sort already ends with it.
    """
    fields: list[SortField] = []
    seen: set[str] = set()
    for name, direction in requested or ():
        index_field = _resolve_field(name, sortable)
        if index_field is None:
            logger.debug("Dropping unsortable field %r from sort", name)
            continue
        if index_field in seen:
            logger.debug("Dropping repeated sort field %r", name)
            continue
        seen.add(index_field)
        fields.append(SortField(index_field, SortDirection(direction)))

    if not fields or fields[-1].name != tiebreaker:
        fields.append(SortField(tiebreaker, SortDirection.ASC))

    return SortSpec(tuple(fields))


def parse_sort_expression(expression: str) -> list[tuple[str, Any]]:
    """Parse ``"-price,name"`` style sort strings used by the CLI.

    A leading ``-`` means descending; a ``field:dir`` suffix is accepted too.
    """
    requested: list[tuple[str, Any]] = []
    for part in expression.split(","):
        part = part.strip()
        if not part:
            continue
        if ":" in part:
            name, direction = part.split(":", 1)
            requested.append((name.strip(), SortDirection(direction)))
        elif part.startswith("-"):
            requested.append((part[1:], SortDirection.DESC))
        else:
            requested.append((part, SortDirection.ASC))
    return requested
