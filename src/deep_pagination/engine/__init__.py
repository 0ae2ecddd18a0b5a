from deep_pagination.engine.client import get_client
from deep_pagination.engine.elastic import ElasticsearchSearchEngine
from deep_pagination.engine.memory import InMemorySearchCall, InMemorySearchEngine

__all__ = [
    "ElasticsearchSearchEngine",
    "InMemorySearchCall",
    "InMemorySearchEngine",
    "get_client",
]
