"""CLI commands for search-bridge."""

from . import decode, embed, query

__all__ = [
    "decode",
    "embed",
    "query",
]
