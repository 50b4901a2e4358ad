"""Match query CLI commands for search-bridge.

`search-bridge query FIELD TEXT -o key=value` prints the match query JSON;
`search-bridge options` lists the recognized option names.
"""

import json
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from search_bridge.cli.app import app
from search_bridge.errors import SearchBridgeError
from search_bridge.query import Fuzziness, build_match_query, describe_options

console = Console()


def parse_option_pairs(pairs: list[str]) -> dict[str, str]:
    """Turn ``key=value`` strings into an option mapping.

    Raises:
        ValueError: If a pair has no ``=`` or a key is repeated
    """
    options: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Options must be given as key=value, got: {pair}")
        if key in options:
            raise ValueError(f"Option given more than once: {key}")
        options[key] = value
    return options


@app.command()
def query(
    field: Annotated[str, typer.Argument(help="Field to match against")],
    text: Annotated[str, typer.Argument(help="Query text")],
    option: Annotated[
        Optional[list[str]],
        typer.Option("--option", "-o", help="Match option as key=value. Repeatable."),
    ] = None,
    boost: Annotated[
        Optional[float],
        typer.Option(help="Relevance boost. Cannot be combined with --option."),
    ] = None,
    fuzziness: Annotated[
        Optional[str],
        typer.Option(help="Fuzziness (AUTO, AUTO:low,high, 0, 1 or 2). Cannot be combined with --option."),
    ] = None,
):
    """Build a match query and print it as JSON."""
    try:
        options = parse_option_pairs(option or [])
        fuzz = Fuzziness.from_string(fuzziness) if fuzziness is not None else None
        builder = build_match_query(field, text, options, boost=boost, fuzziness=fuzz)
    except (SearchBridgeError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    print(json.dumps(builder.to_dict(), indent=2, ensure_ascii=True))


@app.command()
def options():
    """List the recognized match options."""
    table = Table(title="Match options")
    table.add_column("Option", style="cyan")
    table.add_column("Type")
    table.add_column("Description")

    for name, kind, description in describe_options():
        table.add_row(name, kind, description)

    console.print(table)
