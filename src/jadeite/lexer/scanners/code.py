"""Code scanners: conditionals, loops, assignments and raw code lines.

Host-language expressions are never interpreted. Conditionals and
``while`` are rewritten into the control text the code generator emits
(``if (x)``, ``while (x)``), everything else passes through verbatim.
"""

from __future__ import annotations

import re

from jadeite.lexer.scanners.base import ScannerBase
from jadeite.tokens import CodeToken, EachToken, Token, TokenType

_CONDITIONAL = re.compile(r"(if|unless|else if|else)\b([^\n]*)")
_EACH = re.compile(r"(?:- *)?(?:each|for) +(\w+)(?: *, *(\w+))? * in *([^\n]+)")
_WHILE = re.compile(r"while +([^\n]+)")
_ASSIGNMENT = re.compile(r"(\w+) += *([^;\n]+)( *;? *)")
_CODE = re.compile(r"(!?=|-)([^\n]+)")

DEFAULT_EACH_KEY = "$index"


class CodeScannerMixin(ScannerBase):
    """Mixin scanning lines that carry host-language code."""

    def _code(self, value: str, *, buffer: bool = False, escape: bool = False) -> CodeToken:
        return CodeToken(TokenType.CODE, self._lineno, value, buffer=buffer, escape=escape)

    def _scan_conditional(self) -> Token | None:
        found = self._match(_CONDITIONAL)
        if found is None:
            return None
        keyword, expr = found.group(1), found.group(2).strip()
        match keyword:
            case "if":
                code = f"if ({expr})"
            case "unless":
                code = f"if (!({expr}))"
            case "else if":
                code = f"else if ({expr})"
            case _:
                code = "else"
        return self._code(code)

    def _scan_each(self) -> Token | None:
        match = self._match(_EACH)
        if match is None:
            return None
        return EachToken(
            TokenType.EACH,
            self._lineno,
            match.group(1),
            key=match.group(2) or DEFAULT_EACH_KEY,
            code=match.group(3),
        )

    def _scan_while(self) -> Token | None:
        match = self._match(_WHILE)
        if match is None:
            return None
        return self._code(f"while ({match.group(1)})")

    def _scan_assignment(self) -> Token | None:
        match = self._match(_ASSIGNMENT)
        if match is None:
            return None
        name, value = match.group(1), match.group(2).rstrip()
        return self._code(f"var {name} = ({value});")

    def _scan_code(self) -> Token | None:
        match = self._match(_CODE)
        if match is None:
            return None
        flags = match.group(1)
        return self._code(
            match.group(2).strip(),
            buffer="=" in flags,
            escape=flags.startswith("="),
        )
