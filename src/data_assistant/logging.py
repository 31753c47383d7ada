"""Logging configuration for the data assistant.

This module provides centralized logging setup with support for both
CLI flags and environment variables.
"""

import logging
import os
import sys


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure logging for the data assistant.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR).
               If not provided, checks DATA_ASSISTANT_LOG_LEVEL env var.
               Defaults to WARNING if neither is set.

    Returns:
        The configured root logger for the data_assistant package.
    """
    # resolve log level: CLI flag > env var > default
    resolved_level = (
        level
        or os.environ.get("DATA_ASSISTANT_LOG_LEVEL")
        or "WARNING"
    ).upper()

    numeric_level = getattr(logging, resolved_level, None)
    if not isinstance(numeric_level, int):
        print(f"Warning: Invalid log level '{resolved_level}', using WARNING", file=sys.stderr)
        numeric_level = logging.WARNING

    logger = logging.getLogger("data_assistant")
    logger.setLevel(numeric_level)

    # avoid adding multiple handlers if called multiple times
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(numeric_level)

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    else:
        for handler in logger.handlers:
            handler.setLevel(numeric_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Args:
        name: Module name (typically __name__).

    Returns:
        Logger instance for the module.
    """
    return logging.getLogger(name)
