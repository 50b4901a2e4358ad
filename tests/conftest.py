"""Common test fixtures for search-bridge."""

from textwrap import dedent

import pytest

from search_bridge.config import get_config


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Each test loads configuration from its own environment."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def app_config(monkeypatch):
    """Test configuration with quiet logging."""
    monkeypatch.setenv("SEARCH_BRIDGE_ENV", "test")
    monkeypatch.setenv("SEARCH_BRIDGE_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("SEARCH_BRIDGE_EMBEDDINGS_URL", "http://embeddings.test/v1/embeddings")
    return get_config()


@pytest.fixture
def embeddings_body() -> str:
    """JinaAI-style response with two embeddings and trailing metadata."""
    return dedent(
        """
        {
          "object": "list",
          "data": [
            {"object": "embedding", "embedding": [0.1, -0.2], "index": 0},
            {"object": "embedding", "embedding": [0.3, 0.4], "index": 1}
          ],
          "model": "jina-embeddings-v3",
          "usage": {"prompt_tokens": 8, "total_tokens": 8}
        }
        """
    )
