"""Protocol for clients of third-party embeddings APIs."""

from typing import Protocol


class EmbeddingProvider(Protocol):
    """Turns texts into float vectors through an external embeddings API.

    Attributes:
        model_name: Model requested from the API
        dimensions: Expected vector length, or None to accept whatever the API returns
    """

    model_name: str
    dimensions: int | None

    async def embed_query(self, text: str) -> list[float]:
        """Embed one text and return its vector."""
        ...

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed texts and return one vector per text, in input order.

        Raises:
            EmbeddingRequestError: If the API answers with a non-success status
            ResponseParseError: If a response body cannot be decoded, holds the
                wrong number of vectors, or vectors of the wrong dimension
        """
        ...
