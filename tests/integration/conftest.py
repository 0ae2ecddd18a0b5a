"""Session-scoped fixtures for integration tests."""

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from elasticsearch import AsyncElasticsearch
from testcontainers.elasticsearch import ElasticSearchContainer

from deep_pagination.config import SearchSettings
from deep_pagination.engine import ElasticsearchSearchEngine
from tests.conftest import INDEX_NAME, ElasticsearchTestBase


@pytest.fixture(scope="session")
def es_container() -> Generator[ElasticSearchContainer, None, None]:
    """Start a single-node Elasticsearch container for the session."""
    container = ElasticsearchTestBase.create_container()
    container.start()
    yield container
    container.stop()


@pytest.fixture(scope="session")
def es_url(es_container: ElasticSearchContainer) -> str:
    return es_container.get_url()


@pytest.fixture
def es_settings(es_url: str) -> SearchSettings:
    return SearchSettings(engine_endpoint=es_url, index_prefix="test", default_page_size=10, max_page_size=50)


@pytest_asyncio.fixture
async def es_client(es_url: str) -> AsyncGenerator[AsyncElasticsearch, None]:
    """Per-test client with a freshly created, empty variant index."""
    client = AsyncElasticsearch(hosts=[es_url])
    await client.indices.delete(index=INDEX_NAME, ignore_unavailable=True)
    await client.indices.create(index=INDEX_NAME, mappings=ElasticsearchTestBase.index_mapping())
    yield client
    await client.close()


@pytest_asyncio.fixture
async def engine(
    es_client: AsyncElasticsearch, es_settings: SearchSettings
) -> AsyncGenerator[ElasticsearchSearchEngine, None]:
    """Per-test ElasticsearchSearchEngine over the fresh index."""
    instance = ElasticsearchSearchEngine(es_client)
    await instance.ensure_ready()
    yield instance
