"""Dictionary-backed ``SearchEngine`` that mimics Elasticsearch semantics.

Only the query and sort features this project emits are supported:
``match_all``, ``term``, ``multi_match`` and ``bool`` queries; field sorts
with ``.keyword`` sub-fields, missing values last and ``search_after``.
"""

import fnmatch
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any

from deep_pagination.core.errors import SearchRejected, SearchUnavailable

_DEFAULT_TOTAL_HITS_CAP = 10_000

_MISSING = object()


@dataclass(frozen=True)
class InMemorySearchCall:
    index: str
    query: dict[str, Any]
    sort: list[dict[str, Any]]
    size: int
    search_after: list[Any] | None
    track_total_hits: bool | None


def _lookup(source: Mapping[str, Any], path: str) -> Any:
    if path in source:
        return source[path]
    node: Any = source
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            node = _MISSING
            break
        node = node[part]
    if node is _MISSING and path.endswith(".keyword"):
        return _lookup(source, path[: -len(".keyword")])
    return node


def _values(source: Mapping[str, Any], path: str) -> list[Any]:
    value = _lookup(source, path)
    if value is _MISSING or value is None:
        return []
    if isinstance(value, list):
        return [v for v in value if v is not None]
    return [value]


def _tokens(text: str) -> set[str]:
    return {t for t in "".join(ch.lower() if ch.isalnum() else " " for ch in text).split() if t}


def _matches(source: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    if "match_all" in query:
        return True

    if "term" in query:
        ((field_name, expected),) = query["term"].items()
        if isinstance(expected, Mapping):
            expected = expected.get("value")
        return any(v == expected or str(v) == str(expected) for v in _values(source, field_name))

    if "multi_match" in query:
        spec = query["multi_match"]
        wanted = _tokens(str(spec["query"]))
        for field_spec in spec.get("fields", []):
            field_name = field_spec.split("^", 1)[0]
            for value in _values(source, field_name):
                if wanted & _tokens(str(value)):
                    return True
        return False

    if "bool" in query:
        clause = query["bool"]
        must = list(clause.get("must", [])) + list(clause.get("filter", []))
        if not all(_matches(source, q) for q in must):
            return False
        if any(_matches(source, q) for q in clause.get("must_not", [])):
            return False
        should = clause.get("should", [])
        if should:
            minimum = clause.get("minimum_should_match", 0 if must else 1)
            if sum(1 for q in should if _matches(source, q)) < int(minimum):
                return False
        return True

    raise ValueError(f"Unsupported query clause: {sorted(query)}")


def _sort_value(source: Mapping[str, Any], field_name: str, order: str) -> Any:
    values = _values(source, field_name)
    if not values:
        return None
    return min(values) if order == "asc" else max(values)


def _compare_value(a: Any, b: Any, order: str) -> int:
    # Missing values sort last in both directions.
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    if a == b:
        return 0
    result = -1 if a < b else 1
    return result if order == "asc" else -result


def _normalise_sort(sort: list[dict[str, Any]]) -> list[tuple[str, str]]:
    fields: list[tuple[str, str]] = []
    for clause in sort:
        ((field_name, options),) = clause.items()
        order = options.get("order", "asc") if isinstance(options, Mapping) else str(options)
        fields.append((field_name, order.lower()))
    return fields


def _compare_keys(a: Sequence[Any], b: Sequence[Any], orders: Sequence[str]) -> int:
    for left, right, order in zip(a, b, orders):
        result = _compare_value(left, right, order)
        if result:
            return result
    return 0


@dataclass
class InMemorySearchEngine:
    """In-process engine used by tests and local demos.

    Set ``fail_with`` to make every search raise that exception; ``calls``
    records each search for assertions.
    """

    indices: dict[str, dict[str, dict[str, Any]]] = field(default_factory=dict)
    fail_with: BaseException | None = None
    calls: list[InMemorySearchCall] = field(default_factory=list)

    async def search(
        self,
        *,
        index: str,
        query: dict[str, Any],
        sort: list[dict[str, Any]],
        size: int,
        search_after: list[Any] | None = None,
        track_total_hits: bool | None = None,
    ) -> dict[str, Any]:
        self.calls.append(InMemorySearchCall(index, query, sort, size, search_after, track_total_hits))
        if self.fail_with is not None:
            raise self.fail_with

        names = await self.resolve_indices(index)
        if not names:
            raise SearchUnavailable("No index matches pattern", index=index)

        fields = _normalise_sort(sort)
        orders = [order for _, order in fields]
        rows: list[tuple[tuple[Any, ...], str, dict[str, Any]]] = []
        for name in names:
            for doc_id, source in self.indices[name].items():
                if _matches(source, query):
                    key = tuple(_sort_value(source, f, o) for f, o in fields)
                    rows.append((key, doc_id, source))

        rows.sort(key=cmp_to_key(lambda x, y: _compare_keys(x[0], y[0], orders)))
        total = len(rows)

        if search_after is not None:
            if len(search_after) != len(fields):
                raise SearchRejected(
                    f"search_after has {len(search_after)} values but sort has {len(fields)} fields", index=index
                )
            try:
                rows = [r for r in rows if _compare_keys(r[0], search_after, orders) > 0]
            except TypeError as exc:
                raise SearchRejected(f"search_after values do not fit the sort fields: {exc}", index=index) from exc

        hits = [
            {"_index": index, "_id": doc_id, "_score": None, "_source": dict(source), "sort": list(key)}
            for key, doc_id, source in rows[:size]
        ]

        hits_section: dict[str, Any] = {"hits": hits}
        if track_total_hits is True:
            hits_section["total"] = {"value": total, "relation": "eq"}
        elif track_total_hits is None:
            if total > _DEFAULT_TOTAL_HITS_CAP:
                hits_section["total"] = {"value": _DEFAULT_TOTAL_HITS_CAP, "relation": "gte"}
            else:
                hits_section["total"] = {"value": total, "relation": "eq"}
        return {"took": 0, "timed_out": False, "hits": hits_section}

    async def index_documents(
        self,
        index: str,
        documents: Sequence[Mapping[str, Any]],
        id_field: str = "productVariantId",
    ) -> int:
        return self.add(index, documents, id_field)

    def add(self, index: str, documents: Sequence[Mapping[str, Any]], id_field: str = "productVariantId") -> int:
        target = self.indices.setdefault(index, {})
        for document in documents:
            target[str(document[id_field])] = dict(document)
        return len(documents)

    async def resolve_indices(self, pattern: str) -> list[str]:
        names: set[str] = set()
        for part in pattern.split(","):
            names.update(n for n in self.indices if fnmatch.fnmatchcase(n, part.strip()))
        return sorted(names)

    async def ensure_ready(self) -> None:
        pass

    async def ping(self) -> bool:
        return self.fail_with is None

    async def dispose(self) -> None:
        pass
