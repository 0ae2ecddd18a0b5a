from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from deep_pagination.core.sorting import SortDirection


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Request ---


class SortInput(_CamelModel):
    field: str
    direction: SortDirection = SortDirection.ASC


class CursorSearchInput(_CamelModel):
    """Request body of a cursor search. Omit ``cursor`` for the first page."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    term: str | None = None
    facet_value_ids: list[str] = Field(default_factory=list)
    facet_value_operator: Literal["AND", "OR"] = "OR"
    collection_id: str | None = None
    collection_slug: str | None = None
    take: int | None = None
    cursor: str | None = None
    sort: list[SortInput] = Field(default_factory=list)


# --- Results ---


class ProductAsset(_CamelModel):
    id: str
    preview: str | None = None


class SinglePrice(_CamelModel):
    kind: Literal["SinglePrice"] = Field(default="SinglePrice", alias="__typename")
    value: float


class PriceRange(_CamelModel):
    kind: Literal["PriceRange"] = Field(default="PriceRange", alias="__typename")
    min: float
    max: float


Price = Annotated[SinglePrice | PriceRange, Field(discriminator="kind")]


class SearchResult(_CamelModel):
    product_id: str
    product_variant_id: str | None = None
    product_name: str
    slug: str
    description: str = ""
    product_asset: ProductAsset | None = None
    price_with_tax: Price
    currency_code: str
    facet_value_ids: list[str] = Field(default_factory=list)
    collection_ids: list[str] = Field(default_factory=list)
    score: float | None = None


class CursorSearchResult(_CamelModel):
    items: list[SearchResult]
    total_items: int
    has_more: bool
    next_cursor: str | None = None
    prev_cursor: None = None


class ErrorResponse(BaseModel):
    error: str
    detail: str


class HealthResponse(BaseModel):
    status: str = "ok"


class ReadinessResponse(BaseModel):
    status: str = "ok"
    engine: str = "up"
