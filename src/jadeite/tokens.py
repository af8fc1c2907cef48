"""Token and TokenType definitions for the Jadeite lexer.

The lexer produces a stream of Token objects that the parser consumes.
Every token has a type, an opaque string value and the source line it was
emitted on. Kinds that need more than that use a Token subclass carrying
only their own fields (``CodeToken.buffer``, ``BlockToken.mode`` and so on),
so the parser can match on the variant instead of probing optional fields.

Thread Safety:
Tokens are frozen (immutable) and safe to share across threads.
Attribute maps on AttrsToken are read-only mapping proxies.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType

_EMPTY: Mapping = MappingProxyType({})


class TokenType(Enum):
    """Token types produced by the lexer.

    Organized by category:
    - Stream structure (EOS, NEWLINE, INDENT, OUTDENT)
    - Template composition (EXTENDS, BLOCK, INCLUDE, YIELD, MIXIN, CALL)
    - Control flow (CODE, EACH, CASE, WHEN, DEFAULT)
    - Markup (TAG, ID, CLASS, ATTRS, TEXT, ...)

    """

    # Stream structure
    EOS = auto()
    NEWLINE = auto()
    INDENT = auto()
    OUTDENT = auto()

    # Composition
    EXTENDS = auto()  # extends layout
    BLOCK = auto()  # block name / append name / prepend name
    INCLUDE = auto()  # include path
    YIELD = auto()  # yield
    MIXIN = auto()  # mixin name(args)
    CALL = auto()  # +name(args)

    # Control flow
    CODE = auto()  # = expr, != expr, - stmt, if/unless/else/while, assignment
    EACH = auto()  # each v, k in expr
    CASE = auto()  # case expr
    WHEN = auto()  # when expr
    DEFAULT = auto()  # default

    # Markup
    DOCTYPE = auto()  # doctype html / !!!
    TAG = auto()  # div
    INTERPOLATION = auto()  # #{expr}
    ID = auto()  # #id
    CLASS = auto()  # .class
    ATTRS = auto()  # (key=val, ...)
    COLON = auto()  # tag: child shorthand
    FILTER = auto()  # :name
    COMMENT = auto()  # // text
    TEXT = auto()  # | text


class BlockMode(Enum):
    """How a named block combines with an earlier definition."""

    REPLACE = "replace"
    APPEND = "append"
    PREPEND = "prepend"


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        lineno: Source line the token was emitted on (1-indexed)
        value: Kind-specific opaque payload (tag name, raw code, text, ...)

    """

    type: TokenType
    lineno: int
    value: str = ""

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.lineno})"


@dataclass(frozen=True, slots=True, repr=False)
class IndentToken(Token):
    """Indentation increase; ``width`` is the new indentation width."""

    width: int = 0


@dataclass(frozen=True, slots=True, repr=False)
class TagToken(Token):
    """Tag name, optionally written self-closing (``img/``)."""

    self_closing: bool = False


@dataclass(frozen=True, slots=True, repr=False)
class CodeToken(Token):
    """Host-language code.

    ``buffer`` means the value is written to output at render time,
    ``escape`` means the buffered value must be output-escaped.
    """

    buffer: bool = False
    escape: bool = False


@dataclass(frozen=True, slots=True, repr=False)
class CommentToken(Token):
    """Comment text; unbuffered comments (``//-``) never reach output."""

    buffer: bool = True


@dataclass(frozen=True, slots=True, repr=False)
class BlockToken(Token):
    """Named block with its combination mode."""

    mode: BlockMode = BlockMode.REPLACE


@dataclass(frozen=True, slots=True, repr=False)
class EachToken(Token):
    """Loop header: ``value`` is the element variable."""

    key: str = "$index"
    code: str = ""


@dataclass(frozen=True, slots=True, repr=False)
class MixinToken(Token):
    """Mixin definition or call; ``args`` is the raw parameter text."""

    args: str | None = None


@dataclass(frozen=True, slots=True, repr=False)
class AttrsToken(Token):
    """Parsed attribute list.

    Attributes:
        attrs: Ordered name -> value map. A value is opaque expression text,
            or ``True`` for an attribute present without a value.
        escaped: Parallel name -> escape flag map.
        self_closing: A ``/`` followed the closing parenthesis.

    """

    attrs: Mapping[str, str | bool] = field(default_factory=lambda: _EMPTY)
    escaped: Mapping[str, bool] = field(default_factory=lambda: _EMPTY)
    self_closing: bool = False

    def __repr__(self) -> str:
        return f"Token(ATTRS, {dict(self.attrs)!r}, {self.lineno})"


def freeze(mapping: dict) -> Mapping:
    """Wrap a freshly built dict in a read-only view for a token."""
    return MappingProxyType(mapping)


__all__ = [
    "AttrsToken",
    "BlockMode",
    "BlockToken",
    "CodeToken",
    "CommentToken",
    "EachToken",
    "IndentToken",
    "MixinToken",
    "TagToken",
    "Token",
    "TokenType",
    "freeze",
]
