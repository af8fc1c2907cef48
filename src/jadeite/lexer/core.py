"""Pull-based lexer with lookahead and token deferral.

The parser pulls one token at a time. Three FIFO buffers sit in front of
the scanners, drained in this order:

1. ``deferred``: tokens the parser injected with :meth:`Lexer.defer`
2. ``stash``: tokens already lexed by :meth:`Lexer.lookahead` but not consumed
3. ``pending``: follow-up tokens a single scan produced (extra outdents when
   several levels close at once, the colon of ``tag:``)

Every scan consumes at least one character or emits a terminal token, so
tokenization always finishes in time bounded by the input length.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Callable, Iterator

from jadeite.errors import LexicalError
from jadeite.lexer.modes import LexerMode
from jadeite.lexer.scanners import (
    CodeScannerMixin,
    KeywordScannerMixin,
    MarkupScannerMixin,
    StructureScannerMixin,
)
from jadeite.tokens import Token, TokenType
from jadeite.utils.text import normalize_newlines


class Lexer(
    StructureScannerMixin,
    KeywordScannerMixin,
    CodeScannerMixin,
    MarkupScannerMixin,
):
    """Tokenizer for indentation-sensitive templates.

    Usage:
        >>> lexer = Lexer("ul\\n  li one")
        >>> [t.type.name for t in lexer.tokenize()]
        ['TAG', 'INDENT', 'TAG', 'TEXT', 'OUTDENT', 'EOS']

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_input",
        "_lineno",
        "_mode",
        "_colons",
        "_filename",
        "_indent_stack",
        "_indent_re",
        "_stash",
        "_deferred",
        "_pending",
    )

    def __init__(
        self,
        source: str,
        filename: str | None = None,
        *,
        colons: bool = False,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Template source text
            filename: Optional template path for error messages
            colons: Treat ``:`` as ``=`` inside attribute lists
        """
        self._input = normalize_newlines(source)
        self._lineno = 1
        self._mode = LexerMode.NORMAL
        self._colons = colons
        self._filename = filename

        # Indentation widths, outermost first
        self._indent_stack: list[int] = []
        self._indent_re: re.Pattern[str] | None = None

        self._stash: deque[Token] = deque()
        self._deferred: deque[Token] = deque()
        self._pending: deque[Token] = deque()

    @property
    def lineno(self) -> int:
        """Current source line (1-indexed)."""
        return self._lineno

    @property
    def pipeless(self) -> bool:
        """Whether lines are captured verbatim instead of tokenized."""
        return self._mode is LexerMode.PIPELESS

    @pipeless.setter
    def pipeless(self, value: bool) -> None:
        self._mode = LexerMode.PIPELESS if value else LexerMode.NORMAL

    @property
    def mode(self) -> LexerMode:
        return self._mode

    def tokenize(self) -> Iterator[Token]:
        """Yield every remaining token, ending with exactly one EOS."""
        while True:
            tok = self.advance()
            yield tok
            if tok.type is TokenType.EOS:
                return

    def make_token(self, token_type: TokenType, value: str = "") -> Token:
        """Create a synthetic token on the current line (for :meth:`defer`)."""
        return self._tok(token_type, value)

    def defer(self, token: Token) -> None:
        """Queue ``token`` ahead of everything not yet consumed.

        Deferred tokens come out in the order they were deferred and take
        priority over stashed lookahead and over newly lexed input.
        """
        self._deferred.append(token)

    def lookahead(self, n: int) -> Token:
        """Return the ``n``-th unconsumed token (1-based) without consuming it."""
        if n < 1:
            raise ValueError(f"lookahead distance must be >= 1, got {n}")
        deferred = len(self._deferred)
        while deferred + len(self._stash) < n:
            self._stash.append(self._next())
        if n <= deferred:
            return self._deferred[n - 1]
        return self._stash[n - deferred - 1]

    def peek(self) -> Token:
        return self.lookahead(1)

    def advance(self) -> Token:
        """Consume and return the next token."""
        if self._deferred:
            return self._deferred.popleft()
        if self._stash:
            return self._stash.popleft()
        return self._next()

    def _next(self) -> Token:
        """Lex one token from the input."""
        if self._pending:
            return self._pending.popleft()
        for scanner in self._scanners():
            tok = scanner()
            if tok is not None:
                return tok
        # Text matches any non-empty line, so this is only reachable on a bug
        raise LexicalError(
            f"unexpected input {self._input[:20]!r}", self._lineno, self._filename
        )

    def _scanners(self) -> tuple[Callable[[], Token | None], ...]:
        """Scanners in dispatch order; the first match wins."""
        return (
            self._scan_blank,
            self._scan_eos,
            self._scan_pipeless_text,
            self._scan_yield,
            self._scan_doctype,
            self._scan_interpolation,
            self._scan_case,
            self._scan_when,
            self._scan_default,
            self._scan_extends,
            self._scan_append,
            self._scan_prepend,
            self._scan_block,
            self._scan_include,
            self._scan_mixin,
            self._scan_call,
            self._scan_conditional,
            self._scan_each,
            self._scan_while,
            self._scan_assignment,
            self._scan_tag,
            self._scan_filter,
            self._scan_code,
            self._scan_id,
            self._scan_class,
            self._scan_attrs,
            self._scan_indent,
            self._scan_comment,
            self._scan_text,
        )
