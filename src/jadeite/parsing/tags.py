"""Tag parsing: elements, interpolated tags and mixin calls.

All three share one production for what follows the name::

    (attrs | class | id)* '.'? (text | code | ':' expr)? newline* block?

"""

from __future__ import annotations

from typing import TypeVar, cast

from jadeite.lexer.modes import TEXT_ONLY_TAGS
from jadeite.nodes import AttributedNode, Block, Mixin, Tag
from jadeite.parsing.statements import StatementParsingMixin
from jadeite.tokens import AttrsToken, MixinToken, TagToken, TokenType
from jadeite.utils.text import strip_quotes

T = TypeVar("T", bound=AttributedNode)


class TagParsingMixin(StatementParsingMixin):
    """Mixin for tag-like productions."""

    def _parse_tag(self) -> Tag:
        tok = cast(TagToken, self._expect(TokenType.TAG))
        tag = Tag(tok.value, self_closing=tok.self_closing, lineno=tok.lineno)
        return self._parse_attributed(tag)

    def _parse_interpolation(self) -> Tag:
        tok = self._expect(TokenType.INTERPOLATION)
        return self._parse_attributed(Tag(tok.value, buffer=True, lineno=tok.lineno))

    def _parse_call(self) -> Mixin:
        """call attrs? (text | code | ':' expr)? block?"""
        tok = cast(MixinToken, self._expect(TokenType.CALL))
        mixin = Mixin(tok.value, args=tok.args, call=True, block=Block(), lineno=tok.lineno)
        self._parse_attributed(mixin)
        if mixin.block is not None and mixin.block.is_empty:
            mixin.block = None
        return mixin

    def _parse_attributed(self, node: T) -> T:
        self._apply_attributes(node)

        # immediate '.' forces a raw text body
        dot = False
        nxt = self._peek()
        if nxt.type is TokenType.TEXT and nxt.value == ".":
            self._advance()
            dot = node.text_only = True

        match self._peek().type:
            case TokenType.TEXT:
                self._body(node).push(self._parse_text())
            case TokenType.CODE:
                node.code = self._parse_code()
            case TokenType.COLON:
                colon = self._advance()
                node.block = Block([self._parse_expr()], lineno=colon.lineno)

        self._skip_newlines()

        node.text_only = node.text_only or node.name in TEXT_ONLY_TAGS
        if node.name == "script" and not dot:
            script_type = node.get_attribute("type")
            if isinstance(script_type, str) and strip_quotes(script_type) != "text/javascript":
                node.text_only = False

        if self._at(TokenType.INDENT):
            if node.text_only:
                body = self._parse_pipeless_block()
                body.text_only = True
            else:
                body = self._block()
            if node.block is None or node.block.is_empty:
                node.block = body
            else:
                node.block.nodes.extend(body.nodes)
                node.block.text_only |= body.text_only

        return node

    def _apply_attributes(self, node: AttributedNode) -> None:
        """Apply id, class and attribute-list tokens in source order.

        ``.a.b`` shorthand accumulates into one class value; a later
        attribute list sets or overrides any name it mentions.
        """
        classes: list[str] = []
        while True:
            tok = self._peek()
            match tok.type:
                case TokenType.ID:
                    self._advance()
                    node.set_attribute("id", f"'{tok.value}'")
                case TokenType.CLASS:
                    self._advance()
                    classes.append(tok.value)
                    node.set_attribute("class", "'" + " ".join(classes) + "'")
                case TokenType.ATTRS:
                    attrs = cast(AttrsToken, self._advance())
                    if attrs.self_closing:
                        node.self_closing = True
                    for name, value in attrs.attrs.items():
                        node.set_attribute(name, value, attrs.escaped.get(name, True))
                case _:
                    return

    @staticmethod
    def _body(node: AttributedNode) -> Block:
        if node.block is None:
            node.block = Block(lineno=node.lineno)
        return node.block
