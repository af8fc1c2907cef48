"""Markup scanners: tags, shorthand, attribute lists, comments and text."""

from __future__ import annotations

import re

from jadeite.errors import LexicalError
from jadeite.lexer.attributes import parse_attributes
from jadeite.lexer.scanners.base import ScannerBase
from jadeite.tokens import AttrsToken, CommentToken, TagToken, Token, TokenType, freeze

_INTERPOLATION = re.compile(r"#\{(.*?)\}")
_TAG = re.compile(r"(\w[-:\w]*)(/?)")
_FILTER = re.compile(r":(\w+)")
_ID = re.compile(r"#([\w-]+)")
_CLASS = re.compile(r"\.([\w-]+)")
_COMMENT = re.compile(r" *//(-)?([^\n]*)")
_TEXT = re.compile(r"(?:\| ?| ?)?([^\n]+)")


class MarkupScannerMixin(ScannerBase):
    """Mixin scanning markup constructs."""

    _colons: bool

    def _scan_interpolation(self) -> Token | None:
        return self._scan(_INTERPOLATION, TokenType.INTERPOLATION)

    def _scan_tag(self) -> Token | None:
        match = self._match(_TAG)
        if match is None:
            return None
        name = match.group(1)
        if name.endswith(":"):
            # `tag: child` shorthand; the colon becomes its own token
            tok = TagToken(TokenType.TAG, self._lineno, name[:-1])
            self._queue(self._tok(TokenType.COLON))
            self._input = self._input.lstrip(" ")
            return tok
        return TagToken(TokenType.TAG, self._lineno, name, self_closing=bool(match.group(2)))

    def _scan_filter(self) -> Token | None:
        return self._scan(_FILTER, TokenType.FILTER)

    def _scan_id(self) -> Token | None:
        return self._scan(_ID, TokenType.ID)

    def _scan_class(self) -> Token | None:
        return self._scan(_CLASS, TokenType.CLASS)

    def _scan_attrs(self) -> Token | None:
        if not self._input.startswith("("):
            return None
        index = self._index_of_delimiters("(", ")")
        if index < 0:
            raise LexicalError("unterminated attribute list", self._lineno, self._filename)

        lineno = self._lineno
        body = self._input[1:index]
        self._consume(index + 1)
        self._lineno += body.count("\n")
        attrs, escaped = parse_attributes(body, colons=self._colons)

        self_closing = False
        if self._input.startswith("/"):
            self._consume(1)
            self_closing = True

        return AttrsToken(
            TokenType.ATTRS,
            lineno,
            attrs=freeze(attrs),
            escaped=freeze(escaped),
            self_closing=self_closing,
        )

    def _index_of_delimiters(self, start: str, end: str) -> int:
        """Index of the ``end`` that balances the ``start`` at the cursor, or -1."""
        opened = closed = 0
        for i, char in enumerate(self._input):
            if char == start:
                opened += 1
            elif char == end:
                closed += 1
                if closed == opened:
                    return i
        return -1

    def _scan_comment(self) -> Token | None:
        match = self._match(_COMMENT)
        if match is None:
            return None
        return CommentToken(
            TokenType.COMMENT,
            self._lineno,
            match.group(2),
            buffer=match.group(1) != "-",
        )

    def _scan_text(self) -> Token | None:
        return self._scan(_TEXT, TokenType.TEXT)
