"""Tests for HttpEmbeddingProvider and the embedding provider factory."""

import json

import httpx
import pytest

from embedding_bodies import make_embeddings_body
from search_bridge.client import EmbeddingProvider, HttpEmbeddingProvider, create_embedding_provider
from search_bridge.config import SearchBridgeConfig
from search_bridge.errors import (
    EmbeddingRequestError,
    RequiredFieldMissingError,
    ResponseParseError,
)

URL = "http://embeddings.test/v1/embeddings"


class _RecordingHandler:
    """MockTransport handler returning one 3-dimensional vector per input."""

    def __init__(self):
        self.payloads: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.payloads.append(payload)
        vectors = [[float(len(text)), 1.0, 2.0] for text in payload["input"]]
        return httpx.Response(200, text=make_embeddings_body(vectors, model=payload["model"]))


def _provider(handler, **kwargs) -> HttpEmbeddingProvider:
    return HttpEmbeddingProvider(
        URL,
        "jina-embeddings-v3",
        provider_name="JinaAI",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_http_provider_lazy_loads_and_reuses_client():
    """Provider should create the HTTP client lazily and reuse it."""
    handler = _RecordingHandler()
    provider = _provider(handler, dimensions=3)
    assert provider._client is None

    first = await provider.embed_query("auth query")
    client = provider._client
    second = await provider.embed_documents(["queue task", "relation sync"])

    assert client is not None
    assert provider._client is client
    assert first == [10.0, 1.0, 2.0]
    assert len(second) == 2
    assert second[1][0] == 13.0

    await provider.aclose()
    assert provider._client is None


@pytest.mark.asyncio
async def test_http_provider_batches_requests():
    """Inputs are sent in batches of at most batch_size and returned in order."""
    handler = _RecordingHandler()
    async with _provider(handler, batch_size=2) as provider:
        vectors = await provider.embed_documents(["a", "bb", "ccc", "dddd", "eeeee"])

    assert [payload["input"] for payload in handler.payloads] == [
        ["a", "bb"],
        ["ccc", "dddd"],
        ["eeeee"],
    ]
    assert all(payload["model"] == "jina-embeddings-v3" for payload in handler.payloads)
    assert [vector[0] for vector in vectors] == [1.0, 2.0, 3.0, 4.0, 5.0]


@pytest.mark.asyncio
async def test_http_provider_empty_input_makes_no_request():
    handler = _RecordingHandler()
    provider = _provider(handler)
    assert await provider.embed_documents([]) == []
    assert handler.payloads == []
    assert provider._client is None


@pytest.mark.asyncio
async def test_http_provider_dimension_mismatch_raises_error():
    """Provider should fail fast when response dimensions differ from configured dimensions."""
    async with _provider(_RecordingHandler(), dimensions=2) as provider:
        with pytest.raises(ResponseParseError, match="3-dimensional vectors"):
            await provider.embed_documents(["semantic note"])


@pytest.mark.asyncio
async def test_http_provider_error_status_raises_request_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text='{"detail": "rate limited"}')

    async with _provider(handler) as provider:
        with pytest.raises(EmbeddingRequestError) as exc_info:
            await provider.embed_query("hello")

    assert exc_info.value.status_code == 429
    assert exc_info.value.url == URL
    assert "rate limited" in exc_info.value.detail


@pytest.mark.asyncio
async def test_http_provider_truncates_error_detail():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="x" * 1000)

    async with _provider(handler) as provider:
        with pytest.raises(EmbeddingRequestError) as exc_info:
            await provider.embed_query("hello")

    assert len(exc_info.value.detail) == 200


@pytest.mark.asyncio
async def test_http_provider_count_mismatch_raises_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=make_embeddings_body([[1.0]]))

    async with _provider(handler) as provider:
        with pytest.raises(ResponseParseError, match="1 embeddings for 2 inputs"):
            await provider.embed_documents(["one", "two"])


@pytest.mark.asyncio
async def test_http_provider_decode_errors_name_provider():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text='{"object": "list", "model": "m"}')

    async with _provider(handler) as provider:
        with pytest.raises(RequiredFieldMissingError, match="JinaAI"):
            await provider.embed_query("hello")


def test_http_provider_rejects_non_positive_batch_size():
    with pytest.raises(ValueError):
        HttpEmbeddingProvider(URL, "model", batch_size=0)


def test_embedding_provider_factory_uses_config(app_config, monkeypatch):
    """Factory should carry every embeddings setting onto the provider."""
    monkeypatch.setenv("SEARCH_BRIDGE_EMBEDDINGS_MODEL", "text-embedding-3-small")
    monkeypatch.setenv("SEARCH_BRIDGE_EMBEDDINGS_PROVIDER_NAME", "OpenAI")
    monkeypatch.setenv("SEARCH_BRIDGE_EMBEDDINGS_BATCH_SIZE", "16")
    monkeypatch.setenv("SEARCH_BRIDGE_EMBEDDINGS_DIMENSIONS", "1536")

    provider = create_embedding_provider(SearchBridgeConfig())

    assert isinstance(provider, HttpEmbeddingProvider)
    assert provider.url == "http://embeddings.test/v1/embeddings"
    assert provider.model_name == "text-embedding-3-small"
    assert provider.provider_name == "OpenAI"
    assert provider.batch_size == 16
    assert provider.dimensions == 1536


@pytest.mark.asyncio
async def test_embedding_provider_factory_passes_transport(app_config):
    handler = _RecordingHandler()
    async with create_embedding_provider(app_config, transport=httpx.MockTransport(handler)) as provider:
        assert await provider.embed_query("abc") == [3.0, 1.0, 2.0]
    assert handler.payloads[0]["model"] == app_config.embeddings_model


@pytest.mark.asyncio
async def test_http_provider_posts_json_and_decodes_buffered_body():
    """Each batch is a JSON POST; the full response body is handed to the decoder."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        body = make_embeddings_body([[0.5, 0.25]], usage={"prompt_tokens": 2}).encode("utf-8")
        return httpx.Response(200, content=b"\xef\xbb\xbf" + body)

    async with _provider(handler) as provider:
        assert await provider.embed_query("hi") == [0.5, 0.25]

    assert requests[0].method == "POST"
    assert requests[0].headers["content-type"] == "application/json"
    assert json.loads(requests[0].content) == {"model": "jina-embeddings-v3", "input": ["hi"]}


def test_http_provider_implements_embedding_provider():
    provider = HttpEmbeddingProvider(URL, "jina-embeddings-v3", dimensions=768)
    assert EmbeddingProvider in type(provider).__mro__
    assert provider.model_name == "jina-embeddings-v3"
    assert provider.dimensions == 768
