from typing import Any

from deep_pagination.models import SearchHit
from deep_pagination.schemas import PriceRange, ProductAsset, SearchResult, SinglePrice


def _bound(source: dict[str, Any], key: str) -> Any:
    value = source.get(key)
    return source["priceWithTax"] if value is None else value


def _price(source: dict[str, Any]) -> SinglePrice | PriceRange:
    price_min = _bound(source, "productPriceWithTaxMin")
    price_max = _bound(source, "productPriceWithTaxMax")
    if price_min == price_max:
        return SinglePrice(value=price_min)
    return PriceRange(min=price_min, max=price_max)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def project_hit(hit: SearchHit) -> SearchResult:
    """Project a variant document onto the storefront search result shape.

    The index schema is a contract with the indexer; a missing required key
    raises ``KeyError``.
    """
    source = hit.source
    asset_id = source.get("productAssetId")
    return SearchResult(
        product_id=str(source["productId"]),
        product_variant_id=_optional_str(source.get("productVariantId")),
        product_name=source["productName"],
        slug=source["slug"],
        description=source.get("description") or "",
        product_asset=ProductAsset(id=str(asset_id), preview=source.get("productPreview")) if asset_id else None,
        price_with_tax=_price(source),
        currency_code=source["currencyCode"],
        facet_value_ids=[str(v) for v in source.get("facetValueIds") or []],
        collection_ids=[str(v) for v in source.get("collectionIds") or []],
        score=hit.score,
    )
