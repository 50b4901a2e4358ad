"""Main CLI entry point for search-bridge."""  # pragma: no cover

from search_bridge.cli.app import app  # pragma: no cover

# Register commands
from search_bridge.cli.commands import decode, embed, query  # noqa: F401  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
