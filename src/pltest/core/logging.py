"""Logging setup for the pltest namespace.

Standard output carries the test report, so log records go to stderr.
"""

import logging
import sys

DEFAULT_LEVEL = logging.WARNING

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = DEFAULT_LEVEL) -> None:
    """Send pltest log records at or above level to stderr.

    Calling it again replaces the previous handler, so the CLI can raise the
    level after configuration has been loaded.

    Example:
        configure_logging(level=logging.DEBUG)
    """
    logger = logging.getLogger("pltest")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    # Records stop here rather than reaching the root logger
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


configure_logging()
