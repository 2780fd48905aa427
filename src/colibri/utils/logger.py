"""Minimal logging utilities for Colibri.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from colibri.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "colibri." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("cursor")
        >>> logger.name
        'colibri.cursor'
    """
    if not (name == "colibri" or name.startswith("colibri.")):
        name = f"colibri.{name}"
    return logging.getLogger(name)
