"""Utility modules for Jadeite.

Provides:
- text: quote stripping, newline normalisation, literal quoting
- logger: get_logger for logging
"""

from jadeite.utils.logger import get_logger
from jadeite.utils.text import normalize_newlines, quote_literal, strip_quotes

__all__ = [
    "get_logger",
    "normalize_newlines",
    "quote_literal",
    "strip_quotes",
]
