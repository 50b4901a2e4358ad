"""CLI tools for search-bridge."""
