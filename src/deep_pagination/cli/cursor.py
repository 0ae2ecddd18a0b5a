"""Cursor debugging commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from deep_pagination.core.cursor import decode_cursor
from deep_pagination.core.errors import MalformedCursor

cursor_app = typer.Typer(help="Inspect cursor tokens.")
console = Console()


@cursor_app.command("inspect")
def inspect(
    token: Annotated[str, typer.Argument(help="Cursor token as returned in nextCursor.")],
) -> None:
    """Decode a cursor and show the sort position it resumes after."""
    try:
        cursor = decode_cursor(token)
    except MalformedCursor as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(2) from exc

    table = Table(show_lines=False)
    table.add_column("#")
    table.add_column("field")
    table.add_column("value")
    for i, (name, value) in enumerate(zip(cursor.field_names, cursor.values)):
        table.add_row(str(i), name, repr(value))
    console.print(table)
    console.print(f"version {cursor.version}, fingerprint {cursor.fingerprint}")
