"""Tests for deterministic sort composition."""

from __future__ import annotations

import pytest

from deep_pagination.core.sorting import (
    TIEBREAKER_FIELD,
    SortDirection,
    SortField,
    compose_sort,
    parse_sort_expression,
)


class TestComposeSort:
    def test_default_sort_is_tiebreaker_only(self) -> None:
        spec = compose_sort()
        assert spec.fields == (SortField(TIEBREAKER_FIELD, SortDirection.ASC),)

    def test_preserves_requested_order_and_directions(self) -> None:
        spec = compose_sort([("price", "desc"), ("name", "asc")])
        assert spec.field_names == ("priceWithTax", "productName.keyword", TIEBREAKER_FIELD)
        assert [f.direction for f in spec.fields] == [SortDirection.DESC, SortDirection.ASC, SortDirection.ASC]

    def test_tiebreaker_is_ascending_even_when_everything_else_descends(self) -> None:
        spec = compose_sort([("price", SortDirection.DESC), ("name", SortDirection.DESC)])
        assert spec.fields[-1] == SortField(TIEBREAKER_FIELD, SortDirection.ASC)

    def test_no_second_tiebreaker_when_already_last(self) -> None:
        spec = compose_sort([("price", "asc"), ("productVariantId", "desc")])
        assert spec.field_names == ("priceWithTax", TIEBREAKER_FIELD)
        assert spec.fields[-1].direction is SortDirection.DESC

    def test_tiebreaker_appended_after_other_unique_looking_field(self) -> None:
        spec = compose_sort([("productId", "asc")])
        assert spec.field_names == ("productId", TIEBREAKER_FIELD)

    def test_unsortable_fields_are_dropped(self) -> None:
        spec = compose_sort([("createdAt", "desc"), ("sku", "asc"), ("price", "asc")])
        assert spec.field_names == ("priceWithTax", TIEBREAKER_FIELD)

    def test_repeated_fields_keep_first_occurrence(self) -> None:
        spec = compose_sort([("price", "desc"), ("priceWithTax", "asc")])
        assert spec.fields[0] == SortField("priceWithTax", SortDirection.DESC)
        assert spec.field_names == ("priceWithTax", TIEBREAKER_FIELD)

    def test_accepts_index_field_names(self) -> None:
        spec = compose_sort([("productName.keyword", "asc")])
        assert spec.field_names == ("productName.keyword", TIEBREAKER_FIELD)

    def test_directions_are_case_insensitive(self) -> None:
        spec = compose_sort([("price", "DESC"), ("name", "Asc")])
        assert [f.direction for f in spec.fields[:2]] == [SortDirection.DESC, SortDirection.ASC]

    def test_invalid_direction_raises(self) -> None:
        with pytest.raises(ValueError):
            compose_sort([("price", "sideways")])

    def test_is_deterministic(self) -> None:
        requested = [("name", "desc"), ("price", "asc")]
        assert compose_sort(requested) == compose_sort(requested)
        assert compose_sort(requested).fingerprint() == compose_sort(requested).fingerprint()

    def test_custom_registry(self) -> None:
        spec = compose_sort([("rating", "desc")], sortable={"rating": "avgRating"}, tiebreaker="docId")
        assert spec.field_names == ("avgRating", "docId")


class TestSortSpec:
    def test_to_native(self) -> None:
        spec = compose_sort([("price", "desc")])
        assert spec.to_native() == [
            {"priceWithTax": {"order": "desc"}},
            {"productVariantId": {"order": "asc"}},
        ]

    def test_signature_includes_directions(self) -> None:
        asc = compose_sort([("price", "asc")])
        desc = compose_sort([("price", "desc")])
        assert asc.signature() == "priceWithTax:asc|productVariantId:asc"
        assert asc.fingerprint() != desc.fingerprint()

    def test_len(self) -> None:
        assert len(compose_sort([("price", "asc"), ("name", "asc")])) == 3


class TestParseSortExpression:
    def test_prefix_minus_means_descending(self) -> None:
        assert parse_sort_expression("-price,name") == [
            ("price", SortDirection.DESC),
            ("name", SortDirection.ASC),
        ]

    def test_colon_direction(self) -> None:
        assert parse_sort_expression("price:DESC") == [("price", SortDirection.DESC)]

    def test_empty_expression(self) -> None:
        assert parse_sort_expression("") == []
        assert parse_sort_expression(" , ") == []

    def test_bad_direction_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_sort_expression("price:up")
