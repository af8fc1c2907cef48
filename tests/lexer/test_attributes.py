"""Tests for attribute lists: the state machine and the attrs token."""

from __future__ import annotations

import pytest

from jadeite.errors import LexicalError
from jadeite.lexer import Lexer
from jadeite.lexer.attributes import AttributeListParser, AttrState, parse_attributes
from jadeite.tokens import AttrsToken, TokenType


class TestParseAttributes:
    """Values are opaque expression text; only an empty value is boolean."""

    def test_mixed_list(self) -> None:
        attrs, escaped = parse_attributes('href="/x", data-x=1, disabled')
        assert attrs == {"href": '"/x"', "data-x": "1", "disabled": True}
        assert escaped == {"href": True, "data-x": True, "disabled": True}

    def test_source_order_kept(self) -> None:
        attrs, _ = parse_attributes("b=2, a=1, c=3")
        assert list(attrs) == ["b", "a", "c"]

    def test_newline_separates(self) -> None:
        attrs, _ = parse_attributes("a=1\nb=2")
        assert attrs == {"a": "1", "b": "2"}

    def test_whitespace_trimmed(self) -> None:
        attrs, _ = parse_attributes("  a  =  'x'  ,  b  ")
        assert attrs == {"a": "'x'", "b": True}

    def test_empty_list(self) -> None:
        assert parse_attributes("") == ({}, {})

    def test_quoted_key(self) -> None:
        attrs, _ = parse_attributes("'data-x'=\"1\"")
        assert attrs == {"data-x": '"1"'}

    def test_falsy_looking_value_is_opaque(self) -> None:
        attrs, _ = parse_attributes("checked=false, n=0")
        assert attrs == {"checked": "false", "n": "0"}


class TestNesting:
    """Separators inside nested expressions do not end the attribute."""

    def test_call_arguments(self) -> None:
        attrs, _ = parse_attributes("onclick=fn(a, b), title='t'")
        assert attrs == {"onclick": "fn(a, b)", "title": "'t'"}

    def test_array_and_object(self) -> None:
        attrs, _ = parse_attributes("list=[1, 2], data={a: 1, b: 2}")
        assert attrs == {"list": "[1, 2]", "data": "{a: 1, b: 2}"}

    def test_comma_inside_string(self) -> None:
        attrs, _ = parse_attributes('title="a, b", alt=\'c, d\'')
        assert attrs == {"title": '"a, b"', "alt": "'c, d'"}

    def test_equals_inside_string(self) -> None:
        attrs, _ = parse_attributes('href="/q?a=1"')
        assert attrs == {"href": '"/q?a=1"'}

    def test_nested_parentheses(self) -> None:
        attrs, _ = parse_attributes("x=f(g(1, 2), 3)")
        assert attrs == {"x": "f(g(1, 2), 3)"}


class TestEscaping:
    """Attributes are escaped unless marked with ``!``."""

    def test_bang_before_equals(self) -> None:
        attrs, escaped = parse_attributes("html!=raw, safe=x")
        assert attrs == {"html": "raw", "safe": "x"}
        assert escaped == {"html": False, "safe": True}

    def test_bang_prefix(self) -> None:
        attrs, escaped = parse_attributes("!html=raw")
        assert attrs == {"html": "raw"}
        assert escaped == {"html": False}


class TestInterpolation:
    """``#{expr}`` inside values becomes string concatenation."""

    def test_double_quoted(self) -> None:
        attrs, _ = parse_attributes('href="/u/#{id}"')
        assert attrs == {"href": '"/u/" + (id) + ""'}

    def test_single_quoted(self) -> None:
        attrs, _ = parse_attributes("class='item-#{n}'")
        assert attrs == {"class": "'item-' + (n) + ''"}

    def test_escaped_interpolation_kept(self) -> None:
        attrs, _ = parse_attributes('title="\\#{raw}"')
        assert attrs == {"title": '"\\#{raw}"'}

    def test_unquoted_value_untouched(self) -> None:
        attrs, _ = parse_attributes("x='y', href=url#{id}")
        assert attrs == {"x": "'y'", "href": "url#{id}"}

    def test_each_literal_uses_its_own_quote(self) -> None:
        attrs, _ = parse_attributes("title='a' + \"b#{c}\"")
        assert attrs == {"title": "'a' + \"b\" + (c) + \"\""}

    def test_quote_does_not_leak_between_attributes(self) -> None:
        attrs, _ = parse_attributes("x='y', href=\"/#{id}\"")
        assert attrs["href"] == '"/" + (id) + ""'


class TestColons:
    """With colons enabled ``:`` separates name and value."""

    def test_colon_as_equals(self) -> None:
        attrs, _ = parse_attributes("a: 1, b: 'x'", colons=True)
        assert attrs == {"a": "1", "b": "'x'"}

    def test_colon_inside_string_kept(self) -> None:
        attrs, _ = parse_attributes("href: 'http://x'", colons=True)
        assert attrs == {"href": "'http://x'"}

    def test_colon_disabled_by_default(self) -> None:
        attrs, _ = parse_attributes("a:b")
        assert attrs == {"a:b": True}


class TestStateMachine:
    """State transitions observed through the incremental parser."""

    def test_states(self) -> None:
        parser = AttributeListParser()
        assert parser.state is AttrState.KEY
        parser.feed("a=")
        assert parser.state is AttrState.VAL
        parser.feed("f(")
        assert parser.state is AttrState.EXPR
        parser.feed("'")
        assert parser.state is AttrState.STRING
        parser.feed("')")
        assert parser.state is AttrState.VAL
        parser.feed(",")
        assert parser.state is AttrState.KEY
        assert parser.close() == ({"a": "f('')"}, {"a": True})

    def test_quoted_key_state(self) -> None:
        parser = AttributeListParser()
        parser.feed("'")
        assert parser.state is AttrState.KEY_CHAR


class TestAttrsToken:
    """The lexer locates the balanced parenthesis and builds the token."""

    def test_token_maps(self) -> None:
        tokens = list(Lexer("a(href='/x', target)").tokenize())
        attrs = tokens[1]
        assert isinstance(attrs, AttrsToken)
        assert dict(attrs.attrs) == {"href": "'/x'", "target": True}
        assert dict(attrs.escaped) == {"href": True, "target": True}

    def test_token_maps_are_read_only(self) -> None:
        attrs = list(Lexer("a(x=1)").tokenize())[1]
        assert isinstance(attrs, AttrsToken)
        with pytest.raises(TypeError):
            attrs.attrs["y"] = "2"  # type: ignore[index]

    def test_self_closing_after_list(self) -> None:
        attrs = list(Lexer("img(src='a.png')/").tokenize())[1]
        assert isinstance(attrs, AttrsToken)
        assert attrs.self_closing is True

    def test_balanced_parentheses(self) -> None:
        tokens = list(Lexer("a(onclick=go(1)) text").tokenize())
        assert [t.type for t in tokens] == [
            TokenType.TAG,
            TokenType.ATTRS,
            TokenType.TEXT,
            TokenType.EOS,
        ]
        assert tokens[2].value == "text"

    def test_multiline_list_advances_line(self) -> None:
        lexer = Lexer("a(href='x',\n  title='y') text")
        tokens = list(lexer.tokenize())
        assert tokens[1].lineno == 1
        assert tokens[2].lineno == 2
        assert tokens[2].value == "text"

    def test_colons_option(self) -> None:
        attrs = list(Lexer("a(href: '/x')", colons=True).tokenize())[1]
        assert isinstance(attrs, AttrsToken)
        assert dict(attrs.attrs) == {"href": "'/x'"}

    def test_unterminated_list(self) -> None:
        with pytest.raises(LexicalError, match="unterminated attribute list"):
            list(Lexer("a(href='x'\np").tokenize())
