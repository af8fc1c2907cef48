"""Indentation-aware lexer for Jadeite templates.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode
├── core.py              # Lexer class (buffers, lookahead, dispatch order)
├── modes.py             # LexerMode enum, tag-name constants
├── attributes.py        # Attribute-list state machine
└── scanners/            # One mixin per construct family
    ├── base.py          # Cursor helpers shared by all scanners
    ├── structure.py     # Blank lines, EOS, pipeless text, indentation
    ├── keywords.py      # yield, doctype, case/when/default, extends, block, ...
    ├── code.py          # Conditionals, each, while, assignment, code lines
    └── markup.py        # Tags, #id, .class, (attrs), comments, text

Usage:
    >>> from jadeite.lexer import Lexer
    >>> for token in Lexer("p Hello").tokenize():
    ...     print(token)
    Token(TAG, 'p', 1)
    Token(TEXT, 'Hello', 1)
    Token(EOS, '', 1)

"""

from jadeite.lexer.core import Lexer
from jadeite.lexer.modes import INLINE_TAGS, TEXT_ONLY_TAGS, LexerMode

__all__ = ["INLINE_TAGS", "TEXT_ONLY_TAGS", "Lexer", "LexerMode"]
