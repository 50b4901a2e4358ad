"""
Decoders for third-party inference API responses.
"""

from search_bridge.response.embeddings import (
    DEFAULT_PROVIDER,
    FloatEmbedding,
    TextEmbeddingFloatResults,
    parse_embeddings_response,
    to_float32,
)

__all__ = [
    "DEFAULT_PROVIDER",
    "FloatEmbedding",
    "TextEmbeddingFloatResults",
    "parse_embeddings_response",
    "to_float32",
]
