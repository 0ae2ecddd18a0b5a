import typer

from deep_pagination.cli.cursor import cursor_app
from deep_pagination.cli.engine import engine_app
from deep_pagination.cli.ingest import ingest
from deep_pagination.cli.search import search
from deep_pagination.cli.serve import serve_app

app = typer.Typer(
    name="deep-pagination",
    help="Deep Pagination CLI: cursor-based search over Elasticsearch.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("search")(search)
app.command("ingest")(ingest)
app.add_typer(cursor_app, name="cursor")
app.add_typer(engine_app, name="engine")
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
