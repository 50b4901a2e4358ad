"""
HTTP clients for third-party embedding APIs.
"""

from search_bridge.client.embedding_provider import EmbeddingProvider
from search_bridge.client.factory import create_embedding_provider
from search_bridge.client.http_provider import HttpEmbeddingProvider

__all__ = [
    "EmbeddingProvider",
    "HttpEmbeddingProvider",
    "create_embedding_provider",
]
