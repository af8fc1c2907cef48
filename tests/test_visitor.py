"""Tests for the AST visitor and walk utilities."""

from jadeite import parse
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
from jadeite.visitor import BaseVisitor, children, walk

SAMPLE = """doctype html
html
  // header
  body
    h1.title= title
    each item in items
      li= item
    else
      li none
    case kind
      when 'a': p A
      default: p other
    :plain
      raw
    //
      p hidden
    mixin m
      span
"""


class Recorder(BaseVisitor[None]):
    def __init__(self) -> None:
        self.seen: list[str] = []

    def visit_default(self, node: Node) -> None:
        self.seen.append(type(node).__name__)


class TestDispatch:
    def test_every_node_type_reaches_default(self) -> None:
        recorder = Recorder()
        recorder.visit(parse(SAMPLE))
        assert set(recorder.seen) == {
            "Block",
            "Doctype",
            "Tag",
            "Comment",
            "Code",
            "Text",
            "Each",
            "Case",
            "When",
            "Filter",
            "BlockComment",
            "Mixin",
        }

    def test_specific_method_wins(self) -> None:
        class TagNames(BaseVisitor[None]):
            def __init__(self) -> None:
                self.names: list[str] = []

            def visit_tag(self, node: Tag) -> None:
                self.names.append(node.name)

        visitor = TagNames()
        visitor.visit(parse("ul\n  li: a x\n  li b"))
        assert visitor.names == ["ul", "li", "a", "li"]

    def test_return_value(self) -> None:
        class Counter(BaseVisitor[int]):
            def visit_default(self, node: Node) -> int:
                return 1

        assert Counter().visit(Text("x")) == 1

    def test_all_hooks_fall_through(self) -> None:
        nodes: list[Node] = [
            Block(),
            Tag("p"),
            Mixin("m"),
            Text("t"),
            Literal("l"),
            Filter("f"),
            Comment("c"),
            BlockComment("c"),
            Doctype(),
            Code("x"),
            Each("xs", "x"),
            Case("k"),
            When("1"),
        ]
        recorder = Recorder()
        for node in nodes:
            recorder._dispatch(node)
        assert recorder.seen == [type(node).__name__ for node in nodes]


class TestChildren:
    def test_tag_code_before_block(self) -> None:
        tag = Tag("p", code=Code("x"), block=Block([Text("y")]))
        assert children(tag) == [tag.code, tag.block]

    def test_each_body_then_alternative(self) -> None:
        each = parse("each x in xs\n  p\nelse\n  p").nodes[0]
        assert children(each) == [each.block, each.alternative]

    def test_leaves(self) -> None:
        assert children(Text("x")) == []
        assert children(Code("x")) == []


class TestWalk:
    def test_document_order(self) -> None:
        root = parse("div\n  p one\n  p two\nspan")
        order = [
            node.name if isinstance(node, Tag) else node.value
            for node in walk(root)
            if isinstance(node, (Tag, Text))
        ]
        assert order == ["div", "p", "one", "p", "two", "span"]

    def test_starts_with_root(self) -> None:
        root = parse("p")
        assert next(walk(root)) is root
