from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from deep_pagination.core.errors import InvalidFilterPredicate

TEXT_SEARCH_FIELDS: tuple[str, ...] = ("productName^3", "description", "sku^2")

FacetOperator = Literal["AND", "OR"]


@dataclass(frozen=True)
class FilterPredicate:
    """Text, facet and collection constraints for one search.

    Built by the caller; the paginator passes it through untouched.
    """

    term: str | None = None
    facet_value_ids: tuple[str, ...] = ()
    facet_value_operator: FacetOperator = "OR"
    collection_id: str | None = None
    collection_slug: str | None = None


def _term_query(term: str) -> dict[str, Any]:
    return {
        "multi_match": {
            "query": term,
            "fields": list(TEXT_SEARCH_FIELDS),
            "type": "best_fields",
            "fuzziness": "AUTO",
        }
    }


def _facet_filter(facet_value_ids: tuple[str, ...], operator: str) -> dict[str, Any]:
    if operator not in ("AND", "OR"):
        raise InvalidFilterPredicate("facetValueOperator", f"expected AND or OR, got {operator!r}")
    for value_id in facet_value_ids:
        if not isinstance(value_id, str) or not value_id.strip():
            raise InvalidFilterPredicate("facetValueIds", f"invalid facet value id {value_id!r}")

    clauses = [{"term": {"facetValueIds": value_id}} for value_id in facet_value_ids]
    if operator == "AND":
        return {"bool": {"must": clauses}}
    return {"bool": {"should": clauses, "minimum_should_match": 1}}


def _scope_filter(field: str, index_field: str, value: str) -> dict[str, Any]:
    if not value.strip():
        raise InvalidFilterPredicate(field, "must not be blank")
    return {"term": {index_field: value}}


def translate_filter(predicate: FilterPredicate | None) -> dict[str, Any]:
    """Translate a filter predicate into an Elasticsearch ``bool`` query.

    Groups are combined with AND; a group that is not supplied is left out
    entirely. Without any constraint the query matches every document.
    """
    must: list[dict[str, Any]] = []
    filters: list[dict[str, Any]] = []

    if predicate is not None:
        if predicate.term is not None and predicate.term.strip():
            must.append(_term_query(predicate.term.strip()))

        if predicate.facet_value_ids:
            filters.append(_facet_filter(predicate.facet_value_ids, predicate.facet_value_operator))

        if predicate.collection_id is not None:
            filters.append(_scope_filter("collectionId", "collectionIds", predicate.collection_id))

        if predicate.collection_slug is not None:
            filters.append(_scope_filter("collectionSlug", "collectionSlugs", predicate.collection_slug))

    if not must:
        must.append({"match_all": {}})

    return {"bool": {"must": must, "filter": filters}}
