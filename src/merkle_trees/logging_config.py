"""Centralized logging configuration for the merkle_trees package."""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "merkle_trees"
DEFAULT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler_type: str = "stream",
    log_path: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger once.

    Args:
        level: Logging level (default: INFO)
        format_string: Custom format string (optional)
        handler_type: "stream", "file" or "both"
        log_path: Target file, required when a file handler is requested

    Returns:
        The ``merkle_trees`` logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    # Already configured by an earlier caller
    if logger.hasHandlers():
        return logger

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    if handler_type in ("stream", "both"):
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if handler_type in ("file", "both"):
        if log_path is None:
            raise ValueError(f"handler_type={handler_type!r} requires a log_path")
        file_handler = logging.FileHandler(log_path, mode="w")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a child of the package logger, configuring the package on first use.

    ``name`` is usually ``__name__``; module names already under the
    package are used as-is.
    """
    if not logging.getLogger(PACKAGE_LOGGER).hasHandlers():
        setup_logging()

    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def get_test_logger(name: str) -> logging.Logger:
    """Logger for test modules, kept separate from the package logger."""
    logger = logging.getLogger(f"Tests.{name}")

    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(message)s'))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

    return logger
