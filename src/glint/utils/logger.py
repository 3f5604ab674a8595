"""Minimal logging utilities for Glint.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from glint.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Resolved grammar")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "glint." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'glint.mymodule'
    """
    if not (name == "glint" or name.startswith("glint.")):
        name = f"glint.{name}"
    return logging.getLogger(name)
