"""AST Visitor for Jadeite.

Provides a base visitor class with match-based dispatch and a ``walk``
generator, the two ways a later stage (code generation, linting, analysis)
consumes the tree the parser produces.

Example, collect every mixin call:

    class CallCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.calls: list[str] = []

        def visit_mixin(self, node: Mixin) -> None:
            if node.call:
                self.calls.append(node.name)

    collector = CallCollector()
    collector.visit(root)

Example, list tag names in document order:

    names = [node.name for node in walk(root) if isinstance(node, Tag)]

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread.

"""

from collections.abc import Iterator
from typing import Generic, TypeVar

from jadeite.nodes import (
    Block,
    BlockComment,
    Case,
    Code,
    Comment,
    Doctype,
    Each,
    Filter,
    Literal,
    Mixin,
    Node,
    Tag,
    Text,
    When,
)


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call, in document order: a
    tag's inline code before its body, a loop's body before its ``else``.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        for child in children(node):
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Override this for catch-all behavior. Default returns None
        (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Structure -------------------------------------------------------------

    def visit_block(self, node: Block) -> T:
        return self.visit_default(node)

    def visit_tag(self, node: Tag) -> T:
        return self.visit_default(node)

    def visit_mixin(self, node: Mixin) -> T:
        return self.visit_default(node)

    # -- Output ----------------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_literal(self, node: Literal) -> T:
        return self.visit_default(node)

    def visit_filter(self, node: Filter) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def visit_block_comment(self, node: BlockComment) -> T:
        return self.visit_default(node)

    def visit_doctype(self, node: Doctype) -> T:
        return self.visit_default(node)

    # -- Control ---------------------------------------------------------------

    def visit_code(self, node: Code) -> T:
        return self.visit_default(node)

    def visit_each(self, node: Each) -> T:
        return self.visit_default(node)

    def visit_case(self, node: Case) -> T:
        return self.visit_default(node)

    def visit_when(self, node: When) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Block():
                return self.visit_block(node)
            case Tag():
                return self.visit_tag(node)
            case Mixin():
                return self.visit_mixin(node)
            case Text():
                return self.visit_text(node)
            case Literal():
                return self.visit_literal(node)
            case Filter():
                return self.visit_filter(node)
            case Comment():
                return self.visit_comment(node)
            case BlockComment():
                return self.visit_block_comment(node)
            case Doctype():
                return self.visit_doctype(node)
            case Code():
                return self.visit_code(node)
            case Each():
                return self.visit_each(node)
            case Case():
                return self.visit_case(node)
            case When():
                return self.visit_when(node)
            case _:
                return self.visit_default(node)


def children(node: Node) -> list[Node]:
    """Direct children of ``node`` in document order."""
    match node:
        case Block(nodes=nodes):
            return list(nodes)
        case Tag(code=code, block=block) | Mixin(code=code, block=block):
            return [child for child in (code, block) if child is not None]
        case Each(block=block, alternative=alternative):
            return [block] if alternative is None else [block, alternative]
        case Code(block=block):
            return [block] if block is not None else []
        case Case(block=block) | When(block=block) | BlockComment(block=block):
            return [block]
        case Filter(block=block):
            return [block]
    return []


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and every node below it in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children(current)))


__all__ = ["BaseVisitor", "children", "walk"]
