"""Opaque cursor tokens for ``search_after`` pagination.

A cursor is URL-safe base64 over compact JSON::

    {"v": 1, "f": ["priceWithTax", "productVariantId"], "s": [1299, "42"], "h": "9c1e..."}

``f`` holds the sort field names, ``s`` the sort values of the last returned
document and ``h`` a fingerprint of the sort signature that produced them.
The encoding is obfuscation, not a security boundary.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from deep_pagination.core.errors import IncompatibleCursor, MalformedCursor
from deep_pagination.core.sorting import SortDirection, SortSpec, signature_fingerprint

CURSOR_VERSION = 1

SortValue = int | float | str | bool | None


@dataclass(frozen=True)
class Cursor:
    values: tuple[SortValue, ...]
    field_names: tuple[str, ...]
    fingerprint: str
    version: int = CURSOR_VERSION


def _is_scalar(value: Any) -> bool:
    if value is None or isinstance(value, (bool, int, str)):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _names_fingerprint(field_names: Sequence[str]) -> str:
    return signature_fingerprint("|".join(field_names))


def _encode(values: Sequence[SortValue], field_names: Sequence[str], fingerprint: str) -> str:
    if len(values) != len(field_names):
        raise ValueError(f"Got {len(values)} sort values for {len(field_names)} sort fields")
    for value in values:
        if not _is_scalar(value):
            raise ValueError(f"Unsupported sort value {value!r}")
    payload = json.dumps(
        {"v": CURSOR_VERSION, "f": list(field_names), "s": list(values), "h": fingerprint},
        separators=(",", ":"),
        allow_nan=False,
    )
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")


def encode_cursor(values: Sequence[SortValue], field_names: Sequence[str]) -> str:
    """Encode sort values and the field names they belong to.

    The token carries no directions, so it only resumes a sort whose fields
    are all ascending. Use ``encode_cursor_for`` for anything else.
    """
    return _encode(values, field_names, _names_fingerprint(field_names))


def encode_cursor_for(values: Sequence[SortValue], sort_spec: SortSpec) -> str:
    """Encode sort values bound to the full signature (names and directions) of ``sort_spec``."""
    return _encode(values, sort_spec.field_names, sort_spec.fingerprint())


def _load_payload(token: str) -> Any:
    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        return json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise MalformedCursor(token, "not a valid cursor token") from exc


def ensure_compatible(cursor: Cursor, sort_spec: SortSpec) -> None:
    expected = sort_spec.field_names
    actual = cursor.field_names
    if expected != actual:
        position = next(
            (i for i, (e, a) in enumerate(zip(expected, actual)) if e != a),
            min(len(expected), len(actual)),
        )
        raise IncompatibleCursor(expected, actual, position)
    if cursor.fingerprint == sort_spec.fingerprint():
        return
    # A names-only token says nothing about direction; only an all-ascending sort can vouch for it.
    all_ascending = all(f.direction is SortDirection.ASC for f in sort_spec.fields)
    if not (all_ascending and cursor.fingerprint == _names_fingerprint(actual)):
        raise IncompatibleCursor(expected, actual)


def decode_cursor(token: str, sort_spec: SortSpec | None = None) -> Cursor:
    """Decode a cursor token.

    Raises ``MalformedCursor`` when the token is not a structurally valid
    cursor. When ``sort_spec`` is given, also raises ``IncompatibleCursor``
    if the cursor was produced under a different sort.
    """
    if not token:
        raise MalformedCursor(token, "empty cursor")
    payload = _load_payload(token)
    if not isinstance(payload, dict):
        raise MalformedCursor(token, "payload is not an object")

    version = payload.get("v")
    if version != CURSOR_VERSION or isinstance(version, bool):
        raise MalformedCursor(token, f"unsupported cursor version {version!r}")

    field_names = payload.get("f")
    values = payload.get("s")
    fingerprint = payload.get("h")
    if not isinstance(field_names, list) or not all(isinstance(n, str) for n in field_names):
        raise MalformedCursor(token, "sort fields must be a list of strings")
    if not isinstance(values, list) or not all(_is_scalar(v) for v in values):
        raise MalformedCursor(token, "sort values must be a list of scalars")
    if not field_names:
        raise MalformedCursor(token, "cursor has no sort fields")
    if len(values) != len(field_names):
        raise MalformedCursor(token, f"{len(values)} sort values for {len(field_names)} sort fields")
    if not isinstance(fingerprint, str):
        raise MalformedCursor(token, "missing sort fingerprint")

    cursor = Cursor(tuple(values), tuple(field_names), fingerprint, version)
    if sort_spec is not None:
        ensure_compatible(cursor, sort_spec)
    return cursor
