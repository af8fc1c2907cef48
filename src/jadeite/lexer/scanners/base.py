"""Shared state and helpers for the scanner mixins."""

from __future__ import annotations

import re
from collections import deque

from jadeite.lexer.modes import LexerMode
from jadeite.tokens import Token, TokenType


class ScannerBase:
    """Input cursor helpers used by every scanner.

    Required Host Attributes:
        - _input: remaining unconsumed source
        - _lineno: current line (1-indexed)
        - _mode: LexerMode
        - _pending: tokens produced by the current scan beyond the one returned

    """

    _input: str
    _lineno: int
    _mode: LexerMode
    _filename: str | None
    _pending: deque[Token]

    def _tok(self, token_type: TokenType, value: str = "") -> Token:
        """Create a plain token on the current line."""
        return Token(token_type, self._lineno, value)

    def _consume(self, length: int) -> None:
        self._input = self._input[length:]

    def _match(self, regex: re.Pattern[str]) -> re.Match[str] | None:
        """Match ``regex`` at the cursor and consume the match on success."""
        match = regex.match(self._input)
        if match is not None:
            self._consume(match.end())
        return match

    def _scan(self, regex: re.Pattern[str], token_type: TokenType) -> Token | None:
        """Scan for ``token_type``; the value is the first group, if any."""
        match = self._match(regex)
        if match is None:
            return None
        value = match.group(1) if regex.groups else ""
        return self._tok(token_type, value or "")

    def _queue(self, token: Token) -> None:
        """Emit ``token`` right after the token being returned."""
        self._pending.append(token)
