"""
This module provides the shared logger configuration for Quality Scribe.

Every module obtains its logger through `get_logger(__name__)`, so the output
format and destination are controlled from this one place. The level defaults
to INFO and can be raised or lowered with the `QUALITY_SCRIBE_LOG_LEVEL`
environment variable (e.g. `DEBUG` when diagnosing catalog queries).
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger for `name`, attaching a stdout handler on first use.

    Loggers that already carry a handler are returned untouched, so importing
    a module twice never duplicates log lines.

    Args:
        name: The logger name, normally the calling module's `__name__`.

    Returns:
        A configured `logging.Logger` instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        level_name = os.getenv("QUALITY_SCRIBE_LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, level_name, logging.INFO))

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
