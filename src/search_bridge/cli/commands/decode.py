"""Decode a saved embeddings response body."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from search_bridge.cli.app import app
from search_bridge.errors import SearchBridgeError
from search_bridge.response.embeddings import DEFAULT_PROVIDER, parse_embeddings_response

console = Console()


@app.command()
def decode(
    path: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, readable=True, help="Response body (JSON)"),
    ],
    provider: Annotated[str, typer.Option(help="Provider name used in error messages")] = DEFAULT_PROVIDER,
    preview: Annotated[int, typer.Option(min=0, help="Leading values shown per vector")] = 3,
    as_json: Annotated[bool, typer.Option("--json", help="Print vectors as JSON")] = False,
):
    """Decode a list-of-embeddings response and summarize its vectors."""
    try:
        # The decoder owns the file handle and closes it on every exit path
        results = parse_embeddings_response(path.open("rb"), provider)
    except SearchBridgeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        print(json.dumps(results.as_vectors()))
        return

    table = Table(title=f"{len(results)} embeddings from {path.name}")
    table.add_column("Index", justify="right")
    table.add_column("Dimensions", justify="right")
    table.add_column("Values")

    for index, embedding in enumerate(results):
        head = ", ".join(f"{value:.6g}" for value in embedding.values[:preview])
        if len(embedding) > preview:
            head += ", ..."
        table.add_row(str(index), str(len(embedding)), escape(f"[{head}]"))

    console.print(table)
