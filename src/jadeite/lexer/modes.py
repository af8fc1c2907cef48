"""Lexer operating modes and tag-name constants.

This module defines the modes the lexer switches between and the fixed tag
sets the parser and nodes consult.
"""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Lexer operating modes.

    - NORMAL: full dispatch over every construct
    - PIPELESS: each line is captured verbatim as text (filter bodies and
      text-only tag bodies); only blank lines, end of input and indentation
      are still recognised

    """

    NORMAL = auto()
    PIPELESS = auto()


# Tags whose body is raw text rather than nested markup
TEXT_ONLY_TAGS = frozenset({"script", "style"})

# Tags that may be rendered on a single line together with text
INLINE_TAGS = frozenset(
    {
        "a",
        "abbr",
        "acronym",
        "b",
        "br",
        "code",
        "em",
        "font",
        "i",
        "img",
        "ins",
        "kbd",
        "map",
        "samp",
        "small",
        "span",
        "strong",
        "sub",
        "sup",
    }
)
