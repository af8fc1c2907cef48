"""Minimal logging utilities for Jadeite.

Provides a simple get_logger function that wraps the standard library logging.
Jadeite never installs handlers; applications configure logging themselves.

Example:
    >>> from jadeite.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("resolving include %s", "partials/nav.jade")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "jadeite." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("mymodule").name
        'jadeite.mymodule'
    """
    if not (name == "jadeite" or name.startswith("jadeite.")):
        name = f"jadeite.{name}"
    return logging.getLogger(name)
