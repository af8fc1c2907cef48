"""Attribute-list state machine.

Scans the text between the parentheses of ``tag(...)`` one character at a
time. A stack of named states keeps commas, quotes and ``=`` inside nested
expressions (``fn(a, b)``, ``[1, 2]``, ``{a: 1}``, ``"x, y"``) from ending
the attribute early.

Example:
    >>> attrs, escaped = parse_attributes('href="/x", data-x=1, disabled')
    >>> attrs
    {'href': '"/x"', 'data-x': '1', 'disabled': True}
    >>> escaped
    {'href': True, 'data-x': True, 'disabled': True}

"""

from __future__ import annotations

import re
from enum import Enum

from jadeite.utils.text import strip_quotes


class AttrState(Enum):
    """States of the attribute-list scanner."""

    KEY = "key"
    KEY_CHAR = "key-quoted-char"
    VAL = "val"
    EXPR = "expr"
    ARRAY = "array"
    OBJECT = "object"
    STRING = "string"


# States in which separators and '=' are part of the value text
_NESTED_STATES = frozenset({AttrState.EXPR, AttrState.ARRAY, AttrState.OBJECT, AttrState.STRING})
_VALUE_STATES = _NESTED_STATES | {AttrState.VAL}
_KEY_STATES = frozenset({AttrState.KEY, AttrState.KEY_CHAR})

_INTERPOLATION = re.compile(r"(\\)?#\{([^}]+)\}")
_STRING_LITERAL = re.compile(r"""(["'])(?:\\.|(?!\1)[^\\])*\1""")


class AttributeListParser:
    """Incremental scanner for one attribute list.

    Feed characters with :meth:`feed`, then call :meth:`close` to flush the
    last attribute and get the ``(attrs, escaped)`` maps.

    """

    __slots__ = (
        "_colons",
        "_states",
        "_key",
        "_val",
        "_quote",
        "_prev",
        "_unescaped",
        "attrs",
        "escaped",
    )

    def __init__(self, *, colons: bool = False) -> None:
        self._colons = colons
        self._states: list[AttrState] = [AttrState.KEY]
        self._key = ""
        self._val = ""
        self._quote = '"'
        self._prev = ""
        self._unescaped = False
        self.attrs: dict[str, str | bool] = {}
        self.escaped: dict[str, bool] = {}

    @property
    def state(self) -> AttrState:
        return self._states[-1]

    def feed(self, text: str) -> None:
        for char in text:
            self._step(char)

    def close(self) -> tuple[dict[str, str | bool], dict[str, bool]]:
        self._flush()
        return self.attrs, self.escaped

    def _step(self, real: str) -> None:
        char = "=" if self._colons and real == ":" else real
        state = self._states[-1]

        if char in (",", "\n"):
            if state in _NESTED_STATES:
                self._val += char
            else:
                self._flush()
        elif char == "=":
            if state is AttrState.KEY_CHAR:
                self._key += real
            elif state in _VALUE_STATES:
                self._val += real
            else:
                self._unescaped = self._prev == "!"
                self._states.append(AttrState.VAL)
        elif char in "([{":
            if char == "(" and state in (AttrState.VAL, AttrState.EXPR):
                self._states.append(AttrState.EXPR)
            elif char == "[" and state is AttrState.VAL:
                self._states.append(AttrState.ARRAY)
            elif char == "{" and state is AttrState.VAL:
                self._states.append(AttrState.OBJECT)
            self._append(state, char)
        elif char in ")]}":
            if (
                (char == ")" and state is AttrState.EXPR)
                or (char == "]" and state is AttrState.ARRAY)
                or (char == "}" and state is AttrState.OBJECT)
            ):
                self._states.pop()
            self._append(state, char)
        elif char in "\"'":
            if state is AttrState.KEY:
                self._states.append(AttrState.KEY_CHAR)
            elif state is AttrState.KEY_CHAR:
                self._states.pop()
            elif state is AttrState.STRING:
                if char == self._quote:
                    self._states.pop()
                self._val += char
            else:
                self._states.append(AttrState.STRING)
                self._quote = char
                self._val += char
        else:
            self._append(state, char)

        self._prev = char

    def _append(self, state: AttrState, char: str) -> None:
        if state in _KEY_STATES:
            self._key += char
        else:
            self._val += char

    def _flush(self) -> None:
        key = self._key.strip()
        val = self._val.strip()
        unescaped = self._unescaped or key.startswith("!")
        self._states = [AttrState.KEY]
        self._key = ""
        self._val = ""
        self._unescaped = False
        self._quote = '"'
        if not key:
            return

        key = strip_quotes(key).strip("!")
        self.escaped[key] = not unescaped
        self.attrs[key] = True if val == "" else self._interpolate(val)

    def _interpolate(self, val: str) -> str:
        """Rewrite ``#{expr}`` inside each string literal of ``val``."""

        def literal(string: re.Match[str]) -> str:
            quote = string.group(1)

            def replace(match: re.Match[str]) -> str:
                if match.group(1):
                    return match.group(0)
                return f"{quote} + ({match.group(2)}) + {quote}"

            return _INTERPOLATION.sub(replace, string.group(0))

        return _STRING_LITERAL.sub(literal, val)


def parse_attributes(
    text: str, *, colons: bool = False
) -> tuple[dict[str, str | bool], dict[str, bool]]:
    """Parse the inside of an attribute list.

    Args:
        text: Characters between the opening and matching closing parenthesis
        colons: Treat ``:`` as ``=``

    Returns:
        ``(attrs, escaped)``: name -> value (``True`` for a bare attribute)
        and name -> escape flag, both in source order.
    """
    parser = AttributeListParser(colons=colons)
    parser.feed(text)
    return parser.close()


__all__ = ["AttrState", "AttributeListParser", "parse_attributes"]
