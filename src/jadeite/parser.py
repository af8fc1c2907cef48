"""Recursive descent parser producing the template AST.

Pulls tokens from a Lexer on demand and builds AST nodes. Template
composition (extends, include, named blocks, mixin hoisting) happens during
the parse by spawning further parsers for the referenced templates.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream access, lookahead, expect
- `StatementParsingMixin`: Text, code, each, case/when, comments, filters
- `TagParsingMixin`: Tags, interpolated tags, mixin calls
- `CompositionMixin`: extends, include, block, mixin definitions

Thread Safety:
- Parser instances are single-use and not thread-safe
- Configuration is read from ContextVar (thread-local), so parsers spawned
  for extends/include see the same configuration as their parent

"""

from __future__ import annotations

import itertools
import os

from jadeite.config import get_parse_config
from jadeite.errors import TemplateSyntaxError
from jadeite.lexer import Lexer
from jadeite.nodes import Block, Mixin, Node
from jadeite.parsing import (
    BlockRegistry,
    CompositionMixin,
    TagParsingMixin,
)
from jadeite.tokens import TagToken, TokenType
from jadeite.utils.logger import get_logger
from jadeite.visitor import walk

logger = get_logger(__name__)

_serials = itertools.count(1)


class Parser(
    TagParsingMixin,
    CompositionMixin,
):
    """Recursive descent parser for Jadeite templates.

    Usage:
        >>> root = Parser("ul\\n  li one").parse()
        >>> root.nodes[0].name
        'ul'

    Composition:
        ``blocks`` and ``mixins`` are normally left alone. The parser passes
        them to the parsers it spawns: the same block registry for an
        ``extends`` target, a snapshot of it for an ``include`` target.

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation.

    """

    __slots__ = (
        "_source",
        "_filename",
        "_lexer",
        "_blocks",
        "_mixins",
        "_extending",
        "_spaces",
        "_serial",
        "_ancestors",
    )

    def __init__(
        self,
        source: str,
        filename: str | None = None,
        *,
        blocks: BlockRegistry | None = None,
        mixins: dict[str, Mixin] | None = None,
        ancestors: frozenset[str] = frozenset(),
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.

        Args:
            source: Template source text
            filename: Path of the template; required for extends/include
            blocks: Block registry shared with the rest of the parse chain
            mixins: Mixin table shared with the rest of the parse chain
            ancestors: Resolved paths of the templates above this one

        """
        self._source = source
        self._filename = filename
        self._lexer = Lexer(source, filename, colons=get_parse_config().colons)
        self._blocks = blocks if blocks is not None else BlockRegistry()
        self._mixins: dict[str, Mixin] = mixins if mixins is not None else {}
        self._extending: Parser | None = None
        self._spaces: int | None = None
        self._serial = next(_serials)
        if filename is not None:
            ancestors = ancestors | {os.path.normpath(filename)}
        self._ancestors = ancestors

    @property
    def filename(self) -> str | None:
        return self._filename

    @property
    def blocks(self) -> BlockRegistry:
        return self._blocks

    @property
    def mixins(self) -> dict[str, Mixin]:
        return self._mixins

    @property
    def extending(self) -> Parser | None:
        """Parser of the template this one extends, once ``extends`` is seen."""
        return self._extending

    def parse(self) -> Block:
        """Parse the whole template and return the root Block.

        A template that extends another returns the other template's tree,
        with this template's mixin definitions moved to the front. Mixins
        defined inside an overriding block are already in that tree and
        stay where they are.
        """
        block = Block(lineno=self._line, filename=self._filename)
        while not self._at(TokenType.EOS):
            if self._at(TokenType.NEWLINE):
                self._advance()
            else:
                block.push(self._parse_expr())

        parent = self._extending
        if parent is None:
            return block

        ast = parent.parse()
        placed = {id(node) for node in walk(ast)}
        hoisted = [mixin for mixin in self._mixins.values() if id(mixin) not in placed]
        if hoisted:
            logger.debug(
                "hoisting %d mixin(s) from %s into %s",
                len(hoisted),
                self._filename,
                parent.filename,
            )
            ast.nodes[:0] = hoisted
        return ast

    def _parse_expr(self) -> Node:
        """Parse one statement.

        tag | mixin | block | case | when | default | extends | include
        | doctype | filter | comment | text | each | code | call
        | interpolation | yield | id | class
        """
        tok = self._peek()
        match tok.type:
            case TokenType.TAG:
                return self._parse_tag()
            case TokenType.MIXIN:
                return self._parse_mixin()
            case TokenType.BLOCK:
                return self._parse_block()
            case TokenType.CASE:
                return self._parse_case()
            case TokenType.WHEN:
                return self._parse_when()
            case TokenType.DEFAULT:
                return self._parse_default()
            case TokenType.EXTENDS:
                return self._parse_extends()
            case TokenType.INCLUDE:
                return self._parse_include()
            case TokenType.DOCTYPE:
                return self._parse_doctype()
            case TokenType.FILTER:
                return self._parse_filter()
            case TokenType.COMMENT:
                return self._parse_comment()
            case TokenType.TEXT:
                return self._parse_text()
            case TokenType.EACH:
                return self._parse_each()
            case TokenType.CODE:
                return self._parse_code()
            case TokenType.CALL:
                return self._parse_call()
            case TokenType.INTERPOLATION:
                return self._parse_interpolation()
            case TokenType.YIELD:
                self._advance()
                return Block(is_yield=True, lineno=tok.lineno)
            case TokenType.ID | TokenType.CLASS:
                # `#main` / `.note` shorthand for a div
                self._advance()
                self._lexer.defer(TagToken(TokenType.TAG, tok.lineno, "div"))
                self._lexer.defer(tok)
                return self._parse_expr()
        raise TemplateSyntaxError(
            f'unexpected token "{tok.type.name.lower()}"',
            tok.lineno,
            self._filename,
            actual=tok.type.name.lower(),
        )

    def _spawn(
        self,
        source: str,
        path: str,
        *,
        blocks: BlockRegistry,
        mixins: dict[str, Mixin],
    ) -> Parser:
        return Parser(source, path, blocks=blocks, mixins=mixins, ancestors=self._ancestors)


__all__ = ["Parser"]
