import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from deep_pagination.config import SearchSettings
from deep_pagination.core.errors import SearchUnavailable
from deep_pagination.core.ports.search_engine import SearchEngine
from deep_pagination.engine.client import get_client
from deep_pagination.engine.elastic import ElasticsearchSearchEngine

console = Console()


def load_documents(path: Path) -> list[dict[str, Any]]:
    """Read documents from a JSON array file or a JSON Lines file."""
    text = path.read_text(encoding="utf-8")
    if text.lstrip().startswith("["):
        documents = json.loads(text)
    else:
        documents = [json.loads(line) for line in text.splitlines() if line.strip()]
    if not all(isinstance(d, dict) for d in documents):
        raise ValueError(f"{path} must contain JSON objects only")
    return documents


def _get_engine(settings: SearchSettings) -> SearchEngine:
    return ElasticsearchSearchEngine(get_client(settings))


def ingest(
    path: Annotated[Path, typer.Argument(help="JSON or JSON Lines file of variant documents.", exists=True)],
    index: Annotated[str | None, typer.Option(help="Target index (default: <prefix>variants).")] = None,
    id_field: Annotated[str, typer.Option(help="Document field used as the index _id.")] = "productVariantId",
) -> None:
    """Bulk-index documents into Elasticsearch."""
    settings = SearchSettings.from_env()
    target = index or f"{settings.index_prefix}variants"
    try:
        documents = load_documents(path)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(2) from exc

    engine = _get_engine(settings)

    async def _run() -> int:
        try:
            return await engine.index_documents(target, documents, id_field=id_field)
        finally:
            await engine.dispose()

    try:
        count = asyncio.run(_run())
    except SearchUnavailable as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    console.print(f"[green]Indexed[/green] {count} document(s) into {target}")
