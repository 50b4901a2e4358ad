"""Request embeddings from the configured endpoint."""

import asyncio
import json
from typing import Annotated

import httpx
import typer

from search_bridge.cli.app import app
from search_bridge.client.factory import create_embedding_provider
from search_bridge.config import get_config
from search_bridge.errors import SearchBridgeError


async def _run_embed(texts: list[str]) -> list[list[float]]:
    async with create_embedding_provider(get_config()) as provider:
        return await provider.embed_documents(texts)


@app.command()
def embed(
    texts: Annotated[list[str], typer.Argument(help="Texts to embed")],
):
    """Embed texts with the configured embeddings endpoint and print the vectors as JSON."""
    try:
        vectors = asyncio.run(_run_embed(texts))
    except (SearchBridgeError, httpx.HTTPError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    print(json.dumps(vectors))
