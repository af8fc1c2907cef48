"""Statement parsing: text, code, loops, switches, comments, doctype, filters.

Also owns the two body productions every other construct reuses:
``_block`` (indent expr* outdent) and ``_parse_text_block`` (the pipeless
raw-text body of filters and text-only tags).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from jadeite.nodes import (
    Block,
    BlockComment,
    Case,
    Code,
    Comment,
    Doctype,
    Each,
    Filter,
    Node,
    Text,
    When,
)
from jadeite.parsing.token_nav import TokenNavigationMixin
from jadeite.tokens import AttrsToken, CodeToken, CommentToken, EachToken, IndentToken, TokenType

if TYPE_CHECKING:
    from jadeite.lexer import Lexer


class StatementParsingMixin(TokenNavigationMixin):
    """Mixin for statement-level productions.

    Required Host Attributes:
        - _lexer: Lexer
        - _spaces: int | None (indentation of the outermost open text block)

    Required Host Methods:
        - _parse_expr() -> Node

    """

    _lexer: Lexer
    _spaces: int | None

    def _parse_expr(self) -> Node:
        raise NotImplementedError

    def _parse_text(self) -> Text:
        tok = self._expect(TokenType.TEXT)
        return Text(tok.value, lineno=tok.lineno)

    def _parse_block_expansion(self) -> Block:
        """':' expr | block"""
        tok = self._accept(TokenType.COLON)
        if tok is not None:
            return Block([self._parse_expr()], lineno=tok.lineno)
        return self._block()

    def _parse_case(self) -> Case:
        tok = self._expect(TokenType.CASE)
        return Case(tok.value, self._block(), lineno=tok.lineno)

    def _parse_when(self) -> When:
        tok = self._expect(TokenType.WHEN)
        return When(tok.value, self._parse_block_expansion(), lineno=tok.lineno)

    def _parse_default(self) -> When:
        tok = self._expect(TokenType.DEFAULT)
        return When("default", self._parse_block_expansion(), lineno=tok.lineno)

    def _parse_code(self) -> Code:
        """Code line with an optional body.

        Blank lines may separate the code from its body, so the body is
        only taken when the first token after them is an indent.
        """
        tok = cast(CodeToken, self._expect(TokenType.CODE))
        node = Code(tok.value, buffer=tok.buffer, escape=tok.escape, lineno=tok.lineno)
        i = 1
        while self._lookahead(i).type is TokenType.NEWLINE:
            i += 1
        if self._lookahead(i).type is TokenType.INDENT:
            self._skip(i - 1)
            node.block = self._block()
        return node

    def _parse_comment(self) -> Comment | BlockComment:
        tok = cast(CommentToken, self._expect(TokenType.COMMENT))
        if self._at(TokenType.INDENT):
            return BlockComment(tok.value, self._block(), buffer=tok.buffer, lineno=tok.lineno)
        return Comment(tok.value, buffer=tok.buffer, lineno=tok.lineno)

    def _parse_doctype(self) -> Doctype:
        tok = self._expect(TokenType.DOCTYPE)
        return Doctype(tok.value or None, lineno=tok.lineno)

    def _parse_filter(self) -> Filter:
        """filter attrs? text-block"""
        tok = self._expect(TokenType.FILTER)
        attrs = self._accept(TokenType.ATTRS)
        block = self._parse_pipeless_block()
        node = Filter(tok.value, block, lineno=tok.lineno)
        if isinstance(attrs, AttrsToken):
            node.attrs = dict(attrs.attrs)
        return node

    def _parse_each(self) -> Each:
        tok = cast(EachToken, self._expect(TokenType.EACH))
        node = Each(tok.code, tok.value, tok.key, self._block(), lineno=tok.lineno)
        nxt = self._peek()
        if nxt.type is TokenType.CODE and nxt.value == "else":
            self._advance()
            node.alternative = self._block()
        return node

    def _block(self) -> Block:
        """indent expr* outdent"""
        tok = self._expect(TokenType.INDENT)
        block = Block(lineno=tok.lineno)
        while not self._at(TokenType.OUTDENT):
            if self._at(TokenType.NEWLINE):
                self._advance()
            else:
                block.push(self._parse_expr())
        self._expect(TokenType.OUTDENT)
        return block

    def _parse_pipeless_block(self) -> Block:
        """Parse a raw text body with the lexer in pipeless mode."""
        self._lexer.pipeless = True
        try:
            return self._parse_text_block()
        finally:
            self._lexer.pipeless = False

    def _parse_text_block(self) -> Block:
        """indent (text | newline | text-block)* outdent

        Each line becomes a Text node re-indented relative to the first
        line of the outermost text block, so nested lines keep their
        extra indentation.
        """
        tok = cast(IndentToken, self._expect(TokenType.INDENT))
        block = Block(lineno=tok.lineno)
        spaces = tok.width
        if self._spaces is None:
            self._spaces = spaces
        indent = " " * (spaces - self._spaces)

        while not self._at(TokenType.OUTDENT):
            match self._peek().type:
                case TokenType.NEWLINE:
                    self._advance()
                case TokenType.INDENT:
                    block.nodes.extend(self._parse_text_block().nodes)
                case _:
                    line = self._advance()
                    block.push(Text(indent + line.value, lineno=line.lineno))

        if spaces == self._spaces:
            self._spaces = None
        self._expect(TokenType.OUTDENT)
        return block
