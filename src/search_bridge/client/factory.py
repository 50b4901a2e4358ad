"""Factory for creating configured embedding providers."""

from typing import Optional

import httpx

from search_bridge.client.http_provider import HttpEmbeddingProvider
from search_bridge.config import SearchBridgeConfig


def create_embedding_provider(
    app_config: SearchBridgeConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> HttpEmbeddingProvider:
    """Create an embedding provider from config.

    When embeddings_dimensions is set, every response is checked against it.
    """
    return HttpEmbeddingProvider(
        url=app_config.embeddings_url,
        model_name=app_config.embeddings_model,
        provider_name=app_config.embeddings_provider_name,
        batch_size=app_config.embeddings_batch_size,
        dimensions=app_config.embeddings_dimensions,
        timeout=app_config.request_timeout,
        transport=transport,
    )
