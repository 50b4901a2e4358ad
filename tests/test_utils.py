"""Tests for logging setup."""

import sys

from loguru import logger

from search_bridge.utils import setup_logging


def test_setup_logging_writes_log_file(tmp_path):
    log_file = tmp_path / "logs" / "search-bridge.log"
    try:
        setup_logging("DEBUG", log_file=log_file, console=False)
        logger.debug("decoded 2 embeddings")
        logger.trace("not written")
    finally:
        # Removing the enqueued sink flushes it
        logger.remove()
        logger.add(sys.stderr)

    content = log_file.read_text()
    assert "decoded 2 embeddings" in content
    assert "not written" not in content


def test_setup_logging_respects_level(tmp_path):
    log_file = tmp_path / "search-bridge.log"
    try:
        setup_logging("WARNING", log_file=log_file, console=False)
        logger.info("hidden")
        logger.warning("shown")
    finally:
        logger.remove()
        logger.add(sys.stderr)

    content = log_file.read_text()
    assert "shown" in content
    assert "hidden" not in content
