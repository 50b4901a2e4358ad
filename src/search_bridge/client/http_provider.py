"""HTTP embedding provider for OpenAI-compatible embeddings endpoints."""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx
from loguru import logger

from search_bridge.client.embedding_provider import EmbeddingProvider
from search_bridge.errors import EmbeddingRequestError, ResponseParseError
from search_bridge.response.embeddings import (
    DEFAULT_PROVIDER,
    TextEmbeddingFloatResults,
    parse_embeddings_response,
)

ERROR_DETAIL_LIMIT = 200


class HttpEmbeddingProvider(EmbeddingProvider):
    """Embedding provider that POSTs ``{"model", "input"}`` batches over HTTP.

    Each response body is read in full (embedding responses are bounded by
    ``batch_size``) and then decoded by the list-of-embeddings decoder, which
    skips every field other than the vectors without materializing it.
    """

    def __init__(
        self,
        url: str,
        model_name: str,
        *,
        provider_name: str = DEFAULT_PROVIDER,
        batch_size: int = 64,
        dimensions: Optional[int] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.url = url
        self.model_name = model_name
        self.provider_name = provider_name
        self.batch_size = batch_size
        self.dimensions = dimensions
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client

        async with self._client_lock:
            if self._client is not None:
                return self._client

            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
            return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client, if one was created."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpEmbeddingProvider":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        client = await self._get_client()
        all_vectors: list[list[float]] = []

        for start in range(0, len(texts), self.batch_size):
            batch = texts[start : start + self.batch_size]
            results = await self._embed_batch(client, batch)
            if len(results) != len(batch):
                raise ResponseParseError(
                    f"{self.provider_name} returned {len(results)} embeddings "
                    f"for {len(batch)} inputs"
                )
            all_vectors.extend(results.as_vectors())

        if self.dimensions is not None and len(all_vectors[0]) != self.dimensions:
            raise ResponseParseError(
                f"Embedding model returned {len(all_vectors[0])}-dimensional vectors "
                f"but provider was configured for {self.dimensions} dimensions."
            )
        return all_vectors

    async def embed_query(self, text: str) -> list[float]:
        vectors = await self.embed_documents([text])
        return vectors[0]

    async def _embed_batch(
        self, client: httpx.AsyncClient, batch: list[str]
    ) -> TextEmbeddingFloatResults:
        payload = {"model": self.model_name, "input": batch}
        logger.debug(f"Requesting {len(batch)} embeddings from {self.url}")

        response = await client.post(self.url, json=payload)
        if response.is_error:
            detail = response.text[:ERROR_DETAIL_LIMIT]
            logger.warning(
                f"Embeddings request to {self.url} failed with status {response.status_code}"
            )
            raise EmbeddingRequestError(response.status_code, self.url, detail)

        return parse_embeddings_response(response.content, self.provider_name)
