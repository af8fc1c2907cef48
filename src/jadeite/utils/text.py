"""Text helpers shared by the lexer, parser and nodes.

Example:
    >>> from jadeite.utils.text import strip_quotes
    >>> strip_quotes("'text/javascript'")
    'text/javascript'
"""

from __future__ import annotations

import re

_EDGE_QUOTES = re.compile(r"""^['"]|['"]$""")
_NEWLINES = re.compile(r"\r\n|\r")


def strip_quotes(text: str) -> str:
    """Remove one leading and one trailing quote character, if present.

    Quotes are stripped independently, so an unbalanced ``"abc`` becomes
    ``abc`` too.

    Examples:
        >>> strip_quotes('"data-x"')
        'data-x'
        >>> strip_quotes("plain")
        'plain'
    """
    return _EDGE_QUOTES.sub("", text)


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    return _NEWLINES.sub("\n", text)


def quote_literal(text: str) -> str:
    """Escape text for embedding in a single-quoted host string literal.

    Backslashes are doubled, newlines become ``\\n`` and single quotes are
    backslash-escaped.

    Examples:
        >>> quote_literal("it's")
        "it\\\\'s"
    """
    text = text.replace("\\", "\\\\")
    text = normalize_newlines(text).replace("\n", "\\n")
    return text.replace("'", "\\'")
