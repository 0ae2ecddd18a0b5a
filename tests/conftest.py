"""Shared fixtures and helpers for tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from testcontainers.elasticsearch import ElasticSearchContainer

from deep_pagination.config import SearchSettings
from deep_pagination.core.executor import CursorPaginator
from deep_pagination.engine.memory import InMemorySearchEngine

_REPO_ROOT = Path(__file__).parent.parent

INDEX_NAME = "testvariants1759542014230"


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Document factory
# ---------------------------------------------------------------------------


def make_variant(n: int, **overrides: Any) -> dict[str, Any]:
    """Build a variant document shaped like the storefront variant index."""
    doc: dict[str, Any] = {
        "productId": f"p{n:03d}",
        "productVariantId": f"v{n:03d}",
        "productName": f"Product {n:03d}",
        "slug": f"product-{n:03d}",
        "description": f"Description of product {n}",
        "sku": f"SKU-{n:03d}",
        "priceWithTax": 1000 + n,
        "currencyCode": "USD",
        "facetValueIds": [],
        "collectionIds": [],
        "collectionSlugs": [],
    }
    doc.update(overrides)
    return doc


# ---------------------------------------------------------------------------
# ElasticsearchTestBase: helpers for integration tests that need a real cluster
# ---------------------------------------------------------------------------


class ElasticsearchTestBase:
    IMAGE = "docker.elastic.co/elasticsearch/elasticsearch:8.15.3"

    @staticmethod
    def create_container() -> ElasticSearchContainer:
        return ElasticSearchContainer(ElasticsearchTestBase.IMAGE, mem_limit="1G")

    @staticmethod
    def index_mapping() -> dict[str, Any]:
        return {
            "properties": {
                "productId": {"type": "keyword"},
                "productVariantId": {"type": "keyword"},
                "productName": {"type": "text", "fields": {"keyword": {"type": "keyword"}}},
                "slug": {"type": "keyword"},
                "description": {"type": "text"},
                "sku": {"type": "text"},
                "priceWithTax": {"type": "long"},
                "currencyCode": {"type": "keyword"},
                "facetValueIds": {"type": "keyword"},
                "collectionIds": {"type": "keyword"},
                "collectionSlugs": {"type": "keyword"},
            }
        }


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> SearchSettings:
    return SearchSettings(index_prefix="test", max_page_size=50, default_page_size=10)


@pytest.fixture
def in_memory_engine() -> InMemorySearchEngine:
    return InMemorySearchEngine()


@pytest.fixture
def seeded_engine(in_memory_engine: InMemorySearchEngine) -> InMemorySearchEngine:
    """Engine holding 25 variants with prices 1001..1025."""
    documents = [make_variant(n) for n in range(1, 26)]
    in_memory_engine.add(INDEX_NAME, documents)
    return in_memory_engine


@pytest.fixture
def paginator(seeded_engine: InMemorySearchEngine, settings: SearchSettings) -> CursorPaginator:
    return CursorPaginator(seeded_engine, settings)
