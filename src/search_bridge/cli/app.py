from typing import Optional

import typer

from search_bridge.config import get_config
from search_bridge.utils import setup_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import search_bridge

        typer.echo(f"search-bridge version: {search_bridge.__version__}")
        raise typer.Exit()


app = typer.Typer(name="search-bridge")


@app.callback()
def app_callback(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override the configured log level (e.g. DEBUG, WARNING).",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """search-bridge - build match queries and decode embeddings responses."""

    # Configure logging for every command unless --version was specified
    if not version and ctx.invoked_subcommand is not None:
        config = get_config()
        setup_logging(log_level or config.log_level, config.log_file)
