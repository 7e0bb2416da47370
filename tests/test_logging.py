"""Tests for logging utilities."""

import logging
from unittest.mock import patch

import pytest
from rich.logging import RichHandler

from lock_diff.utils.logging import get_logger, setup_logging


@pytest.fixture
def parser_logger_level():
    """Restore the parser logger level after a test changes it."""
    logger = logging.getLogger("LockfileDiffParser")
    level = logger.level
    yield
    logger.setLevel(level)


class TestLockDiffLogger:
    """Test the rich stderr logger."""

    def test_single_rich_handler(self):
        """Test that repeated lookups do not stack handlers."""
        get_logger("lock-diff-test")
        log = get_logger("lock-diff-test")

        assert len(log.logger.handlers) == 1
        assert isinstance(log.logger.handlers[0], RichHandler)
        assert log.logger.propagate is False

    def test_messages_are_forwarded(self):
        """Test that each level method forwards just the message."""
        log = get_logger("lock-diff-test")

        with patch.object(log.logger, "warning") as warning:
            log.warning("lockfile looks truncated")

        warning.assert_called_once_with("lockfile looks truncated")

    def test_keyword_arguments_are_rejected(self):
        """Test that level methods take a message only."""
        log = get_logger("lock-diff-test")

        with pytest.raises(TypeError):
            log.info("parsed", line_count=3)

    def test_level_from_setup_is_kept(self, parser_logger_level):
        """Test that creating a logger keeps the level chosen by setup_logging."""
        setup_logging(verbose=True)

        log = get_logger("LockfileDiffParser")

        assert log.logger.level == logging.DEBUG
