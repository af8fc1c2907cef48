"""Keyword scanners: composition and switch constructs.

These run before the generic tag and text scanners so that ``case``,
``block``, ``include`` and friends are never read as tag names.
"""

from __future__ import annotations

import re

from jadeite.lexer.scanners.base import ScannerBase
from jadeite.tokens import BlockMode, BlockToken, MixinToken, Token, TokenType

_YIELD = re.compile(r"yield\b *")
_DOCTYPE = re.compile(r"(?:!!!|doctype\b) *([^\n]+)?")
_CASE = re.compile(r"case +([^\n]+)")
_WHEN = re.compile(r"when +([^:\n]+)(?:(:) *)?")
_DEFAULT = re.compile(r"default\b *(?:(:) *)?")
_EXTENDS = re.compile(r"extends? +([^\n]+)")
_APPEND = re.compile(r"append +([^\n]+)")
_PREPEND = re.compile(r"prepend +([^\n]+)")
_BLOCK = re.compile(r"block\b *(?:(prepend|append) +)?([^\n]*)")
_INCLUDE = re.compile(r"include +([^\n]+)")
_MIXIN = re.compile(r"mixin +([-\w]+)(?: *\((.*)\))?")
_CALL = re.compile(r"\+([-\w]+)")
_CALL_ARGS = re.compile(r" *\((.*?)\)")
# Parenthesised text that reads like `name=` is an attribute list, not arguments
_ATTRIBUTE_LIKE = re.compile(r" *[-\w]+ *=")


class KeywordScannerMixin(ScannerBase):
    """Mixin scanning keyword-led lines."""

    def _scan_yield(self) -> Token | None:
        return self._scan(_YIELD, TokenType.YIELD)

    def _scan_doctype(self) -> Token | None:
        return self._scan(_DOCTYPE, TokenType.DOCTYPE)

    def _scan_case(self) -> Token | None:
        return self._scan(_CASE, TokenType.CASE)

    def _scan_when(self) -> Token | None:
        match = self._match(_WHEN)
        if match is None:
            return None
        tok = self._tok(TokenType.WHEN, match.group(1).rstrip())
        if match.group(2):
            self._queue(self._tok(TokenType.COLON))
        return tok

    def _scan_default(self) -> Token | None:
        match = self._match(_DEFAULT)
        if match is None:
            return None
        tok = self._tok(TokenType.DEFAULT)
        if match.group(1):
            self._queue(self._tok(TokenType.COLON))
        return tok

    def _scan_extends(self) -> Token | None:
        return self._scan(_EXTENDS, TokenType.EXTENDS)

    def _scan_append(self) -> Token | None:
        return self._block_token(_APPEND, BlockMode.APPEND)

    def _scan_prepend(self) -> Token | None:
        return self._block_token(_PREPEND, BlockMode.PREPEND)

    def _block_token(self, regex: re.Pattern[str], mode: BlockMode) -> Token | None:
        match = self._match(regex)
        if match is None:
            return None
        return BlockToken(TokenType.BLOCK, self._lineno, match.group(1), mode=mode)

    def _scan_block(self) -> Token | None:
        match = self._match(_BLOCK)
        if match is None:
            return None
        mode = BlockMode(match.group(1)) if match.group(1) else BlockMode.REPLACE
        return BlockToken(TokenType.BLOCK, self._lineno, match.group(2), mode=mode)

    def _scan_include(self) -> Token | None:
        return self._scan(_INCLUDE, TokenType.INCLUDE)

    def _scan_mixin(self) -> Token | None:
        match = self._match(_MIXIN)
        if match is None:
            return None
        return MixinToken(TokenType.MIXIN, self._lineno, match.group(1), args=match.group(2))

    def _scan_call(self) -> Token | None:
        match = self._match(_CALL)
        if match is None:
            return None
        args = None
        arg_match = _CALL_ARGS.match(self._input)
        if arg_match is not None and _ATTRIBUTE_LIKE.match(arg_match.group(1)) is None:
            self._consume(arg_match.end())
            args = arg_match.group(1)
        return MixinToken(TokenType.CALL, self._lineno, match.group(1), args=args)
