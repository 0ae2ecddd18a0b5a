from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from elasticsearch import ApiError, AsyncElasticsearch, BadRequestError, NotFoundError, TransportError
from elasticsearch.helpers import async_bulk

from deep_pagination.core.errors import SearchRejected, SearchUnavailable

logger = logging.getLogger(__name__)

_ENGINE_ERRORS = (ApiError, TransportError, asyncio.TimeoutError)


class ElasticsearchSearchEngine:
    """``SearchEngine`` backed by an ``AsyncElasticsearch`` client.

    The client transport does no retries of its own; callers own retry policy.
    """

    def __init__(self, client: AsyncElasticsearch) -> None:
        self._client = client

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
        kwargs: dict[str, Any] = {"index": index, "query": query, "sort": sort, "size": size}
        if search_after is not None:
            kwargs["search_after"] = search_after
        if track_total_hits is not None:
            kwargs["track_total_hits"] = track_total_hits
        try:
            response = await self._client.search(**kwargs)
        except BadRequestError as exc:
            raise SearchRejected(f"Search rejected: {exc}", index=index) from exc
        except _ENGINE_ERRORS as exc:
            raise SearchUnavailable(f"Search failed: {exc}", index=index) from exc
        body: dict[str, Any] = response.body
        if body.get("timed_out"):
            raise SearchUnavailable("Search timed out on the engine", index=index)
        return body

    async def index_documents(
        self,
        index: str,
        documents: Sequence[Mapping[str, Any]],
        id_field: str = "productVariantId",
    ) -> int:
        actions = [{"_index": index, "_id": str(doc[id_field]), "_source": dict(doc)} for doc in documents]
        try:
            indexed, _ = await async_bulk(self._client, actions, refresh="wait_for")
        except _ENGINE_ERRORS as exc:
            raise SearchUnavailable(f"Bulk indexing failed: {exc}", index=index) from exc
        logger.info("Indexed %d document(s) into %s", indexed, index)
        return int(indexed)

    async def resolve_indices(self, pattern: str) -> list[str]:
        try:
            response = await self._client.indices.get(index=pattern, allow_no_indices=True)
        except NotFoundError:
            return []
        except _ENGINE_ERRORS as exc:
            raise SearchUnavailable(f"Index resolution failed: {exc}", index=pattern) from exc
        return sorted(response.body)

    async def ensure_ready(self) -> None:
        try:
            info = await self._client.info()
        except _ENGINE_ERRORS as exc:
            raise SearchUnavailable(f"Elasticsearch is not reachable: {exc}") from exc
        logger.info("Connected to Elasticsearch %s", info.body.get("version", {}).get("number", "?"))

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except _ENGINE_ERRORS:
            return False

    async def dispose(self) -> None:
        await self._client.close()
        logger.info("Closed Elasticsearch client")
