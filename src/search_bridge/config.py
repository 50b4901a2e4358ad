"""Configuration management for search-bridge."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["test", "dev", "user"]


class SearchBridgeConfig(BaseSettings):
    """Settings loaded from ``SEARCH_BRIDGE_*`` environment variables (or a .env file)."""

    env: Environment = Field(default="dev", description="Environment name")

    log_level: str = Field(default="INFO", description="Log level for the loguru stderr sink")
    log_file: Optional[Path] = Field(
        default=None, description="Optional file to write logs to in addition to stderr"
    )

    embeddings_url: str = Field(
        default="http://localhost:8080/v1/embeddings",
        description="Endpoint of the OpenAI-compatible embeddings API",
    )
    embeddings_model: str = Field(
        default="jina-embeddings-v3", description="Model name sent with each embeddings request"
    )
    embeddings_provider_name: str = Field(
        default="JinaAI", description="Provider name used in error messages"
    )
    embeddings_batch_size: int = Field(
        default=64, gt=0, description="Maximum number of texts sent per request"
    )
    embeddings_dimensions: Optional[int] = Field(
        default=None,
        gt=0,
        description="Expected vector dimensions. When unset, whatever the API returns is accepted.",
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="Timeout in seconds for embeddings requests"
    )

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_BRIDGE_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def is_test_env(self) -> bool:
        return self.env == "test"


@lru_cache
def get_config() -> SearchBridgeConfig:
    """Load configuration once per process."""
    return SearchBridgeConfig()
