import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console()


@serve_app.command("api")
def api(
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Start the FastAPI REST API server."""
    import uvicorn

    from deep_pagination.api.app import create_app

    app = create_app()
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port)


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
) -> None:
    """Start the MCP server."""
    from deep_pagination.config import SearchSettings
    from deep_pagination.core.executor import CursorPaginator
    from deep_pagination.engine.client import get_client
    from deep_pagination.engine.elastic import ElasticsearchSearchEngine
    from deep_pagination.mcp.server import create_mcp_server

    settings = SearchSettings.from_env()
    paginator = CursorPaginator(ElasticsearchSearchEngine(get_client(settings)), settings)
    server = create_mcp_server(paginator)
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]
