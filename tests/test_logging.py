"""Tests for pltest logging setup."""

import logging

import pytest

from pltest.core.logging import DEFAULT_LEVEL, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging()


class TestConfigureLogging:
    """Test the pltest logger configuration."""

    def test_logs_to_stderr_only(self, capsys):
        configure_logging(logging.INFO)

        get_logger("pltest.parsing.parser").info("loaded file")

        captured = capsys.readouterr()
        assert "pltest.parsing.parser - INFO - loaded file" in captured.err
        assert captured.out == ""

    def test_default_level_hides_info(self, capsys):
        configure_logging()

        get_logger("pltest.execution.executor").info("quiet")

        assert logging.getLogger("pltest").level == DEFAULT_LEVEL
        assert "quiet" not in capsys.readouterr().err

    def test_reconfigure_replaces_handler(self):
        configure_logging(logging.DEBUG)
        configure_logging(logging.ERROR)

        logger = logging.getLogger("pltest")
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.ERROR
        assert logger.propagate is False
