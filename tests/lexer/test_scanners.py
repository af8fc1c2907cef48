"""Tests for individual scanners and the dispatch order between them."""

from __future__ import annotations

import pytest

from jadeite.lexer import Lexer
from jadeite.tokens import (
    BlockMode,
    BlockToken,
    CodeToken,
    CommentToken,
    EachToken,
    MixinToken,
    TagToken,
    Token,
    TokenType,
)


def first(source: str) -> Token:
    return Lexer(source).advance()


def pairs(source: str) -> list[tuple[TokenType, str]]:
    return [(t.type, t.value) for t in Lexer(source).tokenize()][:-1]


class TestCompositionKeywords:
    """extends, block, include, yield."""

    def test_extends(self) -> None:
        assert pairs("extends layout") == [(TokenType.EXTENDS, "layout")]

    @pytest.mark.parametrize(
        ("source", "name", "mode"),
        [
            ("block content", "content", BlockMode.REPLACE),
            ("block append content", "content", BlockMode.APPEND),
            ("block prepend content", "content", BlockMode.PREPEND),
            ("append scripts", "scripts", BlockMode.APPEND),
            ("prepend scripts", "scripts", BlockMode.PREPEND),
        ],
    )
    def test_block_modes(self, source: str, name: str, mode: BlockMode) -> None:
        tok = first(source)
        assert isinstance(tok, BlockToken)
        assert tok.type is TokenType.BLOCK
        assert tok.value == name
        assert tok.mode is mode

    def test_include(self) -> None:
        assert pairs("include partials/nav") == [(TokenType.INCLUDE, "partials/nav")]

    def test_yield(self) -> None:
        assert first("yield").type is TokenType.YIELD

    def test_keyword_prefix_is_a_tag(self) -> None:
        """Only whole keywords count: ``blockquote`` is a tag."""
        assert pairs("blockquote") == [(TokenType.TAG, "blockquote")]


class TestDoctype:
    @pytest.mark.parametrize(
        ("source", "value"),
        [("doctype html", "html"), ("!!! 5", "5"), ("doctype", ""), ("!!!", "")],
    )
    def test_doctype(self, source: str, value: str) -> None:
        tok = first(source)
        assert tok.type is TokenType.DOCTYPE
        assert tok.value == value


class TestSwitch:
    """case / when / default, with colon block expansion."""

    def test_case(self) -> None:
        assert pairs("case user.role") == [(TokenType.CASE, "user.role")]

    def test_when_with_colon(self) -> None:
        assert pairs("when 'admin': p hi") == [
            (TokenType.WHEN, "'admin'"),
            (TokenType.COLON, ""),
            (TokenType.TAG, "p"),
            (TokenType.TEXT, "hi"),
        ]

    def test_default_with_colon(self) -> None:
        assert pairs("default: p none") == [
            (TokenType.DEFAULT, ""),
            (TokenType.COLON, ""),
            (TokenType.TAG, "p"),
            (TokenType.TEXT, "none"),
        ]

    def test_when_without_colon(self) -> None:
        assert pairs("when 1") == [(TokenType.WHEN, "1")]


class TestMixins:
    def test_definition_with_params(self) -> None:
        tok = first("mixin item(name, url)")
        assert isinstance(tok, MixinToken)
        assert tok.type is TokenType.MIXIN
        assert tok.value == "item"
        assert tok.args == "name, url"

    def test_definition_without_params(self) -> None:
        tok = first("mixin footer")
        assert isinstance(tok, MixinToken)
        assert tok.args is None

    def test_call_with_args(self) -> None:
        tok = first("+item('a', '/a')")
        assert isinstance(tok, MixinToken)
        assert tok.type is TokenType.CALL
        assert tok.args == "'a', '/a'"

    def test_call_with_attribute_list(self) -> None:
        """Parenthesised ``name=`` text is left for the attribute scanner."""
        tokens = list(Lexer("+button(class='big')").tokenize())
        call = tokens[0]
        assert isinstance(call, MixinToken)
        assert call.args is None
        assert tokens[1].type is TokenType.ATTRS

    def test_call_args_then_attributes(self) -> None:
        tokens = list(Lexer("+link('/x')(target='_blank')").tokenize())
        assert isinstance(tokens[0], MixinToken)
        assert tokens[0].args == "'/x'"
        assert tokens[1].type is TokenType.ATTRS


class TestCode:
    """Conditionals, loops, assignments and code lines."""

    @pytest.mark.parametrize(
        ("source", "code"),
        [
            ("if user", "if (user)"),
            ("unless user", "if (!(user))"),
            ("else if admin", "else if (admin)"),
            ("else", "else"),
            ("while n < 3", "while (n < 3)"),
            ("total = a + b", "var total = (a + b);"),
        ],
    )
    def test_control_rewrites(self, source: str, code: str) -> None:
        tok = first(source)
        assert isinstance(tok, CodeToken)
        assert tok.value == code
        assert tok.buffer is False

    @pytest.mark.parametrize(
        ("source", "value", "buffer", "escape"),
        [
            ("= user.name", "user.name", True, True),
            ("!= user.bio", "user.bio", True, False),
            ("- var a = 1", "var a = 1", False, False),
        ],
    )
    def test_code_lines(self, source: str, value: str, buffer: bool, escape: bool) -> None:
        tok = first(source)
        assert isinstance(tok, CodeToken)
        assert (tok.value, tok.buffer, tok.escape) == (value, buffer, escape)

    def test_inline_code_after_tag(self) -> None:
        tokens = list(Lexer("p= name").tokenize())
        assert tokens[0].value == "p"
        assert isinstance(tokens[1], CodeToken)
        assert tokens[1].value == "name"

    def test_each(self) -> None:
        tok = first("each item in items")
        assert isinstance(tok, EachToken)
        assert (tok.value, tok.key, tok.code) == ("item", "$index", "items")

    def test_each_with_key(self) -> None:
        tok = first("each val, key in obj")
        assert isinstance(tok, EachToken)
        assert (tok.value, tok.key, tok.code) == ("val", "key", "obj")

    def test_for_alias(self) -> None:
        tok = first("for x in [1, 2]")
        assert isinstance(tok, EachToken)
        assert tok.code == "[1, 2]"

    def test_keyword_prefix_is_a_tag(self) -> None:
        assert first("iframe").type is TokenType.TAG


class TestMarkup:
    """Tags, shorthand, interpolation, filters, comments and text."""

    def test_tag_with_text(self) -> None:
        assert pairs("p Hello world") == [(TokenType.TAG, "p"), (TokenType.TEXT, "Hello world")]

    def test_self_closing_tag(self) -> None:
        tok = first("br/")
        assert isinstance(tok, TagToken)
        assert tok.self_closing is True

    def test_namespaced_tag(self) -> None:
        assert first("fb:login").value == "fb:login"

    def test_id_and_classes(self) -> None:
        assert pairs("div#main.a.b") == [
            (TokenType.TAG, "div"),
            (TokenType.ID, "main"),
            (TokenType.CLASS, "a"),
            (TokenType.CLASS, "b"),
        ]

    def test_bare_shorthand(self) -> None:
        assert pairs(".note") == [(TokenType.CLASS, "note")]

    def test_interpolation(self) -> None:
        assert pairs("#{name} hi") == [(TokenType.INTERPOLATION, "name"), (TokenType.TEXT, "hi")]

    def test_filter(self) -> None:
        assert pairs(":markdown") == [(TokenType.FILTER, "markdown")]

    def test_comment(self) -> None:
        tok = first("// note")
        assert isinstance(tok, CommentToken)
        assert tok.value == " note"
        assert tok.buffer is True

    def test_unbuffered_comment(self) -> None:
        tok = first("//- hidden")
        assert isinstance(tok, CommentToken)
        assert tok.buffer is False

    def test_pipe_text(self) -> None:
        assert pairs("| plain text") == [(TokenType.TEXT, "plain text")]

    def test_dot_marker_is_text(self) -> None:
        assert pairs("script.") == [(TokenType.TAG, "script"), (TokenType.TEXT, ".")]
