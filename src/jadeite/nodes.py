"""AST nodes for Jadeite.

Nodes are slotted dataclasses. Unlike tokens they are mutable: template
composition moves the contents of named blocks between definitions and
splices caller content into included trees, so a Block's ``nodes`` list is
relinked after construction. Relinking always moves nodes; a node never
ends up with two parents.

Node Hierarchy:
Node (base)
├── Block                  ordered children, yield marker, block mode
├── AttributedNode         name + attributes + optional body
│   ├── Tag
│   └── Mixin              definition (call=False) or call (call=True)
├── Text
├── Code                   control or output code, optional body
├── Each                   loop with optional empty-case alternative
├── Case / When            switch and its arms
├── Comment / BlockComment
├── Doctype
├── Filter                 filter name + raw text body
└── Literal                pre-escaped passthrough (non-template includes)

Thread Safety:
Nodes are not safe to mutate concurrently. A finished tree that nobody
mutates may be read from any thread.

"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from dataclasses import dataclass, field

from jadeite.lexer.modes import INLINE_TAGS
from jadeite.tokens import BlockMode
from jadeite.utils.text import quote_literal

# =============================================================================
# Base Node
# =============================================================================


@dataclass(slots=True)
class Node:
    """Base class for all AST nodes.

    Every node records the source line the parser was on when it built it.

    """

    lineno: int = field(default=0, kw_only=True)


# =============================================================================
# Containers
# =============================================================================


@dataclass(slots=True)
class Block(Node):
    """Ordered sequence of child nodes.

    Also represents a named template block (``block content``) and a
    ``yield`` marker, which is an empty Block with ``is_yield`` set.

    """

    nodes: list[Node] = field(default_factory=list)
    is_yield: bool = False
    text_only: bool = False
    mode: BlockMode = BlockMode.REPLACE
    filename: str | None = None

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def push(self, node: Node) -> None:
        self.nodes.append(node)

    def unshift(self, node: Node) -> None:
        self.nodes.insert(0, node)

    def replace(self, other: Block) -> None:
        """Move this block's nodes into ``other``, discarding its old content."""
        other.nodes = self.nodes
        self.nodes = []

    def include_block(self) -> Block:
        """Return the block that content following an ``include`` goes into.

        The first ``yield`` marker found in document order wins. Text-only
        subtrees are never searched. Without a yield marker the result is the
        deepest non-empty body reached through the last descendable child.
        """
        return _include_point(self, set())

    def clone(self) -> Block:
        """Deep copy of this block and everything below it."""
        return copy.deepcopy(self)


def _include_point(block: Block, visited: set[int]) -> Block:
    visited.add(id(block))
    found = block
    for node in block.nodes:
        if isinstance(node, Block) and node.is_yield:
            return node
        if _is_text_only(node):
            continue
        if isinstance(node, Block):
            child: Block | None = node
        else:
            child = body_of(node)
            if child is not None and child.is_empty:
                child = None
        if child is None or id(child) in visited:
            continue
        found = _include_point(child, visited)
        if found.is_yield:
            return found
    return found


def _is_text_only(node: Node) -> bool:
    match node:
        case AttributedNode(text_only=True) | Block(text_only=True) | Filter():
            return True
    return False


def body_of(node: Node) -> Block | None:
    """Return the child Block owned by ``node``, if it has one."""
    match node:
        case AttributedNode(block=block) | Code(block=block) | Each(block=block):
            return block
        case Case(block=block) | When(block=block) | BlockComment(block=block):
            return block
        case Filter(block=block):
            return block
    return None


# =============================================================================
# Tags and mixins
# =============================================================================


@dataclass(slots=True)
class AttributedNode(Node):
    """A node with a name, an attribute map and an optional body.

    ``attrs`` maps attribute name to opaque value expression text, or to
    ``True`` for an attribute present without a value. ``escaped`` holds
    the matching escape flag for every name in ``attrs``.

    """

    name: str
    attrs: dict[str, str | bool] = field(default_factory=dict)
    escaped: dict[str, bool] = field(default_factory=dict)
    self_closing: bool = False
    text_only: bool = False
    code: Code | None = None
    block: Block | None = None

    def set_attribute(self, name: str, value: str | bool, escaped: bool = True) -> None:
        self.attrs[name] = value
        self.escaped[name] = escaped

    def get_attribute(self, name: str) -> str | bool | None:
        return self.attrs.get(name)

    def remove_attribute(self, name: str) -> None:
        self.attrs.pop(name, None)
        self.escaped.pop(name, None)


@dataclass(slots=True)
class Tag(AttributedNode):
    """An element. ``buffer`` marks an interpolated name (``#{expr}``)."""

    block: Block | None = field(default_factory=Block)
    buffer: bool = False

    @property
    def is_inline(self) -> bool:
        return self.name in INLINE_TAGS

    def can_inline(self) -> bool:
        """Whether the body can be rendered on the same line as the tag.

        An empty body can. A single child can when it is inline-safe. Several
        children can when all are inline-safe and no two text nodes are
        adjacent, since they would run together on one line.
        """
        nodes = self.block.nodes if self.block is not None else []
        if not nodes:
            return True
        if len(nodes) == 1:
            return _is_inline_safe(nodes[0])
        if not all(_is_inline_safe(node) for node in nodes):
            return False
        return not any(
            isinstance(prev, Text) and isinstance(node, Text)
            for prev, node in zip(nodes, nodes[1:])
        )

    def clone(self) -> Tag:
        """Deep copy of this tag, its attributes and its body."""
        return copy.deepcopy(self)


def _is_inline_safe(node: Node) -> bool:
    match node:
        case Text():
            return True
        case Tag():
            if not node.is_inline:
                return False
            return node.block is None or all(_is_inline_safe(n) for n in node.block.nodes)
        case Block():
            return all(_is_inline_safe(n) for n in node.nodes)
    return False


@dataclass(slots=True)
class Mixin(AttributedNode):
    """Mixin definition or call.

    ``args`` is the raw parameter (definition) or argument (call) text.
    A call without an indented body has ``block`` set to None.

    """

    args: str | None = None
    call: bool = False


# =============================================================================
# Text and code
# =============================================================================


@dataclass(slots=True)
class Text(Node):
    """A line of literal text."""

    value: str = ""


@dataclass(slots=True)
class Literal(Node):
    """Raw text passed through to output untouched."""

    value: str = ""

    @property
    def escaped(self) -> str:
        """The text as the body of a single-quoted host string literal."""
        return quote_literal(self.value)


@dataclass(slots=True)
class Code(Node):
    """Host-language code.

    Attributes:
        value: Opaque code text (``if (x)``, ``user.name``, ``var a = (1);``)
        buffer: Write the value's result to output
        escape: Output-escape the buffered result
        block: Body for conditionals and loops

    """

    value: str
    buffer: bool = False
    escape: bool = False
    block: Block | None = None


@dataclass(slots=True)
class Each(Node):
    """``each value, key in obj`` loop.

    ``alternative`` is the ``else`` block rendered when ``obj`` is empty.
    """

    obj: str
    value: str
    key: str = "$index"
    block: Block = field(default_factory=Block)
    alternative: Block | None = None


@dataclass(slots=True)
class Case(Node):
    """``case expr`` switch; its block holds When arms."""

    expr: str
    block: Block = field(default_factory=Block)


@dataclass(slots=True)
class When(Node):
    """One arm of a Case. ``expr`` is ``"default"`` for the fallback arm."""

    expr: str
    block: Block = field(default_factory=Block)

    @property
    def is_default(self) -> bool:
        return self.expr == "default"


# =============================================================================
# Comments, doctype, filters
# =============================================================================


@dataclass(slots=True)
class Comment(Node):
    value: str
    buffer: bool = True


@dataclass(slots=True)
class BlockComment(Node):
    value: str
    block: Block = field(default_factory=Block)
    buffer: bool = True


@dataclass(slots=True)
class Doctype(Node):
    """Doctype; ``name`` is None for a bare ``doctype``."""

    name: str | None = None


@dataclass(slots=True)
class Filter(Node):
    """``:name`` filter applied to a raw text body."""

    name: str
    block: Block = field(default_factory=Block)
    attrs: dict[str, str | bool] = field(default_factory=dict)


__all__ = [
    "AttributedNode",
    "Block",
    "BlockComment",
    "Case",
    "Code",
    "Comment",
    "Doctype",
    "Each",
    "Filter",
    "Literal",
    "Mixin",
    "Node",
    "Tag",
    "Text",
    "When",
    "body_of",
]
