from collections.abc import Mapping, Sequence
from typing import Any, Protocol


class SearchEngine(Protocol):
    async def search(
        self,
        *,
        index: str,
        query: dict[str, Any],
        sort: list[dict[str, Any]],
        size: int,
        search_after: list[Any] | None = None,
        track_total_hits: bool | None = None,
    ) -> dict[str, Any]: ...

    async def index_documents(
        self,
        index: str,
        documents: Sequence[Mapping[str, Any]],
        id_field: str = "productVariantId",
    ) -> int: ...

    async def resolve_indices(self, pattern: str) -> list[str]: ...

    async def ensure_ready(self) -> None: ...

    async def ping(self) -> bool: ...

    async def dispose(self) -> None: ...
