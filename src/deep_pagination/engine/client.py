import logging

from elasticsearch import AsyncElasticsearch

from deep_pagination.config import SearchSettings

logger = logging.getLogger(__name__)


def get_client(settings: SearchSettings) -> AsyncElasticsearch:
    logger.info("Creating Elasticsearch client for %s", settings.engine_endpoint)
    return AsyncElasticsearch(
        hosts=[settings.engine_endpoint],
        request_timeout=settings.request_timeout,
        retry_on_timeout=False,
        max_retries=0,
    )
