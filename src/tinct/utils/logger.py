"""Minimal logging utilities for Tinct.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from tinct.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Tokenizing source")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "tinct." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'tinct.mymodule'
    """
    # Ensure tinct prefix for consistent namespacing
    if not (name == "tinct" or name.startswith("tinct.")):
        name = f"tinct.{name}"
    return logging.getLogger(name)
