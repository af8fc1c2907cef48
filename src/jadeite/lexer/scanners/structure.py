"""Structure scanners: blank lines, end of input, pipeless text, indentation."""

from __future__ import annotations

import re

from jadeite.errors import LexicalError
from jadeite.lexer.modes import LexerMode
from jadeite.lexer.scanners.base import ScannerBase
from jadeite.tokens import IndentToken, Token, TokenType
from jadeite.utils.logger import get_logger

logger = get_logger(__name__)

_BLANK = re.compile(r"\n *\n")
_INDENT_TABS = re.compile(r"\n(\t*) *")
_INDENT_SPACES = re.compile(r"\n( *)")


class StructureScannerMixin(ScannerBase):
    """Mixin tracking line structure.

    Owns the indentation stack (outermost width first) and the indentation
    pattern once it has been locked in to tabs or spaces.

    """

    _indent_stack: list[int]
    _indent_re: re.Pattern[str] | None

    def _scan_blank(self) -> Token | None:
        """Skip blank lines.

        In pipeless mode a blank line is significant and comes back as an
        empty text token. Otherwise every consecutive blank line is dropped
        and dispatch carries on with the next scanner.
        """
        if _BLANK.match(self._input) is None:
            return None
        if self._mode is LexerMode.PIPELESS:
            self._consume_blank()
            return self._tok(TokenType.TEXT, "")
        while _BLANK.match(self._input) is not None:
            self._consume_blank()
        return None

    def _consume_blank(self) -> None:
        # Keep the trailing newline so the next line still sees its indentation
        match = _BLANK.match(self._input)
        assert match is not None
        self._consume(match.end() - 1)
        self._lineno += 1

    def _scan_eos(self) -> Token | None:
        """End of input: one outdent per open level, then EOS."""
        if self._input:
            return None
        if self._indent_stack:
            self._indent_stack.pop()
            return self._tok(TokenType.OUTDENT)
        return self._tok(TokenType.EOS)

    def _scan_pipeless_text(self) -> Token | None:
        if self._mode is not LexerMode.PIPELESS or self._input.startswith("\n"):
            return None
        end = self._input.find("\n")
        if end == -1:
            end = len(self._input)
        line = self._input[:end]
        self._consume(end)
        return self._tok(TokenType.TEXT, line)

    def _scan_indent(self) -> Token | None:
        """Indent | Outdent | Newline."""
        if not self._input.startswith("\n"):
            return None

        if self._indent_re is not None:
            match = self._indent_re.match(self._input)
        else:
            regex = _INDENT_TABS
            match = regex.match(self._input)
            if match is not None and not match.group(1):
                regex = _INDENT_SPACES
                match = regex.match(self._input)
            if match is not None and match.group(1):
                self._indent_re = regex
                logger.debug(
                    "indentation locked to %s on line %d",
                    "tabs" if regex is _INDENT_TABS else "spaces",
                    self._lineno + 1,
                )

        if match is None:
            return None

        indents = len(match.group(1))
        self._lineno += 1
        self._consume(indents + 1)

        if not self._input:
            return self._tok(TokenType.NEWLINE)
        if self._input[0] in " \t":
            raise LexicalError(
                "Invalid indentation, you can use tabs or spaces but not both",
                self._lineno,
                self._filename,
            )

        # blank line
        if self._input[0] == "\n":
            return self._tok(TokenType.NEWLINE)

        stack = self._indent_stack
        # outdent: one token per level closed
        if stack and indents < stack[-1]:
            outdents: list[Token] = []
            while stack and stack[-1] > indents:
                stack.pop()
                outdents.append(self._tok(TokenType.OUTDENT))
            for extra in outdents[1:]:
                self._queue(extra)
            return outdents[0]

        # indent
        if indents and (not stack or indents != stack[-1]):
            stack.append(indents)
            return IndentToken(TokenType.INDENT, self._lineno, str(indents), width=indents)

        return self._tok(TokenType.NEWLINE)
