"""Token navigation utilities for the Jadeite parser.

Provides mixin for token stream navigation and basic parsing operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jadeite.errors import TemplateSyntaxError
from jadeite.tokens import Token, TokenType

if TYPE_CHECKING:
    from jadeite.lexer import Lexer


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _lexer: Lexer
        - _filename: str | None

    """

    _lexer: Lexer
    _filename: str | None

    def _peek(self) -> Token:
        """Single token lookahead."""
        return self._lexer.lookahead(1)

    def _lookahead(self, n: int) -> Token:
        return self._lexer.lookahead(n)

    def _advance(self) -> Token:
        """Consume and return the next token."""
        return self._lexer.advance()

    def _skip(self, n: int) -> None:
        for _ in range(n):
            self._lexer.advance()

    def _skip_newlines(self) -> None:
        while self._peek().type is TokenType.NEWLINE:
            self._advance()

    @property
    def _line(self) -> int:
        """Current lexer line."""
        return self._lexer.lineno

    def _at(self, token_type: TokenType) -> bool:
        return self._peek().type is token_type

    def _expect(self, token_type: TokenType) -> Token:
        """Consume a token of ``token_type`` or raise TemplateSyntaxError."""
        tok = self._peek()
        if tok.type is token_type:
            return self._advance()
        raise TemplateSyntaxError.mismatch(
            token_type.name.lower(), tok.type.name.lower(), tok.lineno, self._filename
        )

    def _accept(self, token_type: TokenType) -> Token | None:
        """Consume and return the next token if it has ``token_type``."""
        if self._peek().type is token_type:
            return self._advance()
        return None
