"""Minimal logging utilities for internable.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from internable.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Scavenged intern table")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "internable." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'internable.mymodule'
    """
    if not (name == "internable" or name.startswith("internable.")):
        name = f"internable.{name}"
    return logging.getLogger(name)
