"""Logging configuration for syllabusgen."""

from __future__ import annotations

import logging
from typing import Optional

LOGGER_NAME = "syllabusgen"


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """
    Enable log output for the package.

    By default the package logger only has a NullHandler (no output).
    The CLI calls this with DEBUG when --verbose is given.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for existing in list(logger.handlers):
        if not isinstance(existing, logging.NullHandler):
            logger.removeHandler(existing)

    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string or "[%(levelname)s] %(name)s - %(message)s"))
    logger.addHandler(handler)


logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())
