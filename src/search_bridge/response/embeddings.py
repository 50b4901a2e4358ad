"""
Decoder for list-of-embeddings responses.

Handles the response shape shared by OpenAI-compatible embedding APIs
(OpenAI, JinaAI, Mistral and others):

    {
      "object": "list",
      "data": [
        {"object": "embedding", "embedding": [-0.0093, -0.0028], "index": 0},
        {"object": "embedding", "embedding": [0.0121, 0.0307], "index": 1}
      ],
      "model": "jina-embeddings-v3",
      "usage": {"prompt_tokens": 8, "total_tokens": 8}
    }

Only ``data`` and each element's ``embedding`` are required. Every other
field, at any level, is skipped without being materialized. Vectors are
returned in the order the elements appear; ``index`` is not used.
"""

import math
import struct
from dataclasses import dataclass
from functools import partial
from typing import Any, Iterator, Optional

from loguru import logger

from search_bridge.errors import ValueMalformedError
from search_bridge.jsonstream.cursor import JsonTokenCursor
from search_bridge.jsonstream.lexer import TokenType

DEFAULT_PROVIDER = "OpenAI-compatible"
DATA_FIELD = "data"
EMBEDDING_FIELD = "embedding"

_FLOAT32 = struct.Struct("<f")


def to_float32(value: float) -> float:
    """Round ``value`` to the nearest 32-bit float.

    Raises:
        OverflowError: If the value is outside the 32-bit float range
    """
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


@dataclass(frozen=True)
class FloatEmbedding:
    """One embedding vector of 32-bit float components."""

    values: tuple[float, ...]

    @classmethod
    def of(cls, values: list[float]) -> "FloatEmbedding":
        return cls(tuple(values))

    def __len__(self) -> int:
        return len(self.values)

    def to_list(self) -> list[float]:
        return list(self.values)


@dataclass(frozen=True)
class TextEmbeddingFloatResults:
    """Embedding vectors in response order."""

    embeddings: tuple[FloatEmbedding, ...] = ()

    def __len__(self) -> int:
        return len(self.embeddings)

    def __iter__(self) -> Iterator[FloatEmbedding]:
        return iter(self.embeddings)

    @property
    def dimensions(self) -> Optional[int]:
        """Dimension count of the first vector, or None when there are no vectors."""
        if not self.embeddings:
            return None
        return len(self.embeddings[0])

    def as_vectors(self) -> list[list[float]]:
        return [embedding.to_list() for embedding in self.embeddings]


def parse_embeddings_response(source: Any, provider: str = DEFAULT_PROVIDER) -> TextEmbeddingFloatResults:
    """Decode a list-of-embeddings response body.

    Args:
        source: Response body as str, bytes, a file object, or an iterable of
            byte/str chunks. The source is closed before this function returns,
            whether decoding succeeds or fails.
        provider: Provider name used in error messages

    Returns:
        One FloatEmbedding per element of ``data``, in order

    Raises:
        DocumentMalformedError: If the root or a ``data`` element is not an object,
            or ``data``/``embedding`` is not an array
        RequiredFieldMissingError: If ``data`` or an element's ``embedding`` is absent
        ValueMalformedError: If an embedding component is not a 32-bit float
    """
    with JsonTokenCursor(source) as cursor:
        cursor.move_to_first_token()
        cursor.expect(TokenType.START_OBJECT)

        cursor.position_after_field(DATA_FIELD, provider)
        embeddings = cursor.parse_list(partial(_parse_embedding_object, provider=provider))

    # Trailing siblings of "data" (model, usage, ...) are never read
    results = TextEmbeddingFloatResults(tuple(embeddings))
    logger.debug(f"Decoded {len(results)} embeddings from {provider} response")
    return results


def _parse_embedding_object(cursor: JsonTokenCursor, provider: str) -> FloatEmbedding:
    cursor.expect(TokenType.START_OBJECT)

    cursor.position_after_field(EMBEDDING_FIELD, provider)
    values = cursor.parse_list(_parse_float)

    # parse and discard the rest of the object
    cursor.consume_until_object_end()

    return FloatEmbedding.of(values)


def _parse_float(cursor: JsonTokenCursor) -> float:
    token = cursor.current_token
    if token is None or token.type != TokenType.NUMBER:
        raise ValueMalformedError(
            token.value if token and token.value else (token.type.name if token else "nothing"),
            token.location if token else None,
        )
    value = float(token.value)
    # Literals like 1e400 parse to inf before narrowing
    if not math.isfinite(value):
        raise ValueMalformedError(token.value, token.location)
    try:
        return to_float32(value)
    except OverflowError:
        raise ValueMalformedError(token.value, token.location) from None
