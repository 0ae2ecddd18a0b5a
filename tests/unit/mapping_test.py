"""Tests for projecting engine hits onto search results."""

from __future__ import annotations

import pytest

from deep_pagination.core.mapping import project_hit
from deep_pagination.models import SearchHit
from deep_pagination.schemas import PriceRange, SinglePrice
from tests.conftest import make_variant


def _hit(**overrides: object) -> SearchHit:
    return SearchHit(id="v001", source=make_variant(1, **overrides), sort=(1001, "v001"), score=1.5)


class TestProjectHit:
    def test_basic_fields(self) -> None:
        result = project_hit(_hit(facetValueIds=[1, "2"], collectionIds=["c1"]))
        assert result.product_id == "p001"
        assert result.product_variant_id == "v001"
        assert result.product_name == "Product 001"
        assert result.slug == "product-001"
        assert result.currency_code == "USD"
        assert result.facet_value_ids == ["1", "2"]
        assert result.collection_ids == ["c1"]
        assert result.score == 1.5

    def test_single_price_from_variant_price(self) -> None:
        price = project_hit(_hit()).price_with_tax
        assert isinstance(price, SinglePrice)
        assert price.value == 1001

    def test_price_range_from_product_bounds(self) -> None:
        price = project_hit(_hit(productPriceWithTaxMin=900, productPriceWithTaxMax=1500)).price_with_tax
        assert isinstance(price, PriceRange)
        assert (price.min, price.max) == (900, 1500)

    def test_equal_bounds_collapse_to_single_price(self) -> None:
        price = project_hit(_hit(productPriceWithTaxMin=700, productPriceWithTaxMax=700)).price_with_tax
        assert isinstance(price, SinglePrice)
        assert price.value == 700

    def test_zero_price_is_kept(self) -> None:
        price = project_hit(_hit(priceWithTax=5, productPriceWithTaxMin=0, productPriceWithTaxMax=5)).price_with_tax
        assert isinstance(price, PriceRange)
        assert price.min == 0

    def test_asset(self) -> None:
        result = project_hit(_hit(productAssetId=7, productPreview="https://cdn/p.jpg"))
        assert result.product_asset is not None
        assert result.product_asset.id == "7"
        assert result.product_asset.preview == "https://cdn/p.jpg"

    def test_no_asset(self) -> None:
        assert project_hit(_hit()).product_asset is None

    def test_numeric_ids_become_strings(self) -> None:
        result = project_hit(_hit(productId=12, productVariantId=34))
        assert result.product_id == "12"
        assert result.product_variant_id == "34"

    def test_missing_description_is_empty(self) -> None:
        assert project_hit(_hit(description=None)).description == ""

    def test_missing_required_key_raises(self) -> None:
        source = make_variant(1)
        del source["productName"]
        with pytest.raises(KeyError):
            project_hit(SearchHit(id="v001", source=source))

    def test_alias_dump(self) -> None:
        body = project_hit(_hit(productPriceWithTaxMin=1, productPriceWithTaxMax=2)).model_dump(by_alias=True)
        assert body["priceWithTax"] == {"__typename": "PriceRange", "min": 1, "max": 2}
        assert "productVariantId" in body
