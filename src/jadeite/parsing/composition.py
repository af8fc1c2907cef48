"""Template composition: extends, include, named blocks and mixins.

Composition state lives in two tables shared between the parsers of one
parse chain:

- ``BlockRegistry`` maps block names to their winning definition. The
  parser of an ``extends`` target receives the very same registry, so a
  child's overrides reach its layout. An ``include`` target receives a
  snapshot, so nothing it defines leaks back to the includer.
- The mixin table (name -> Mixin) is shared by reference with includes,
  making mixin definitions visible in both directions.

Parse order along an ``extends`` chain is most-derived first: a child
registers its blocks before the layout it extends is parsed. A definition
from another parser is therefore an ancestor's, and the derived definition
decides how the two combine. Definitions within one template combine in
source order.
"""

from __future__ import annotations

import copy
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Self, cast

from jadeite.config import get_parse_config
from jadeite.errors import ConfigurationError, ResolutionError, TemplateSyntaxError
from jadeite.nodes import Block, Literal, Mixin, Node
from jadeite.parsing.statements import StatementParsingMixin
from jadeite.tokens import BlockMode, BlockToken, MixinToken, Token, TokenType
from jadeite.utils.logger import get_logger

if TYPE_CHECKING:
    from jadeite.parser import Parser

logger = get_logger(__name__)


@dataclass(slots=True)
class BlockDefinition:
    """The current state of one named block.

    ``block`` is what renders where the block appears. The remaining fields
    describe how the definition combines with one from an ancestor template:
    a REPLACE definition wins outright, otherwise the ancestor's content is
    wrapped as ``head + ancestor + tail``.

    """

    block: Block
    mode: BlockMode
    owner: int
    head: list[Node] = field(default_factory=list)
    tail: list[Node] = field(default_factory=list)


class BlockRegistry:
    """Named block table for one parse chain."""

    __slots__ = ("_definitions",)

    def __init__(self) -> None:
        self._definitions: dict[str, BlockDefinition] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def get(self, name: str) -> Block | None:
        definition = self._definitions.get(name)
        return definition.block if definition is not None else None

    def mode(self, name: str) -> BlockMode | None:
        definition = self._definitions.get(name)
        return definition.mode if definition is not None else None

    def snapshot(self) -> Self:
        """Independent deep copy, for an included sub-parse."""
        return copy.deepcopy(self)

    def define(self, name: str, block: Block, owner: int) -> Block:
        """Register a definition of ``name`` and return the block to render.

        Args:
            name: Block name
            block: Freshly parsed block; ``block.mode`` is its declared mode
            owner: Identity of the parser that parsed ``block``

        Returns:
            A block holding the merged content. Merging moves nodes: any
            block that does not hold the result is emptied. Against an
            ancestor's definition the derived block object is kept and
            filled in place, since it may sit inside another block the
            derived template overrides.
        """
        previous = self._definitions.get(name)
        if previous is None:
            self._definitions[name] = _initial(block, owner)
            return block

        if previous.owner == owner:
            definition = _sequential(previous, block, owner)
        else:
            definition = _inherited(previous, block, owner)

        if definition.block is not previous.block:
            previous.block.nodes = []
        if definition.block is not block:
            block.nodes = []
        self._definitions[name] = definition
        return definition.block

    def __repr__(self) -> str:
        return f"BlockRegistry({list(self._definitions)!r})"


def _initial(block: Block, owner: int) -> BlockDefinition:
    nodes = list(block.nodes)
    match block.mode:
        case BlockMode.APPEND:
            return BlockDefinition(block, BlockMode.APPEND, owner, tail=nodes)
        case BlockMode.PREPEND:
            return BlockDefinition(block, BlockMode.PREPEND, owner, head=nodes)
    return BlockDefinition(block, BlockMode.REPLACE, owner)


def _merged(nodes: list[Node], like: Block) -> Block:
    return Block(nodes, mode=like.mode, filename=like.filename, lineno=like.lineno)


def _sequential(previous: BlockDefinition, block: Block, owner: int) -> BlockDefinition:
    """A later definition in the same template."""
    existing = previous.block.nodes
    new = block.nodes
    match block.mode:
        case BlockMode.APPEND:
            merged = _merged(existing + new, block)
            head, tail = previous.head, previous.tail + new
        case BlockMode.PREPEND:
            merged = _merged(new + existing, block)
            head, tail = new + previous.head, previous.tail
        case _:
            return BlockDefinition(_merged(list(new), block), BlockMode.REPLACE, owner)
    if previous.mode is BlockMode.REPLACE:
        return BlockDefinition(merged, BlockMode.REPLACE, owner)
    return BlockDefinition(merged, previous.mode, owner, head=head, tail=tail)


def _inherited(previous: BlockDefinition, block: Block, owner: int) -> BlockDefinition:
    """A definition in a template that ``previous``'s template extends."""
    merged = previous.block
    if previous.mode is BlockMode.REPLACE:
        return BlockDefinition(merged, BlockMode.REPLACE, owner)

    new = block.nodes
    merged.nodes = previous.head + new + previous.tail
    match block.mode:
        case BlockMode.APPEND:
            return BlockDefinition(
                merged, BlockMode.APPEND, owner, head=previous.head, tail=new + previous.tail
            )
        case BlockMode.PREPEND:
            return BlockDefinition(
                merged, BlockMode.PREPEND, owner, head=previous.head + new, tail=previous.tail
            )
    return BlockDefinition(merged, BlockMode.REPLACE, owner)


class CompositionMixin(StatementParsingMixin):
    """Mixin for extends, include, block and mixin productions.

    Required Host Attributes:
        - _filename: str | None
        - _blocks: BlockRegistry
        - _mixins: dict[str, Mixin]
        - _extending: Parser | None
        - _serial: int (identity used as block owner)
        - _ancestors: frozenset[str] (resolved paths of the parse chain)

    Required Host Methods:
        - _spawn(source, path, *, blocks, mixins) -> Parser

    """

    _blocks: BlockRegistry
    _mixins: dict[str, Mixin]
    _extending: Parser | None
    _serial: int
    _ancestors: frozenset[str]

    def _spawn(
        self,
        source: str,
        path: str,
        *,
        blocks: BlockRegistry,
        mixins: dict[str, Mixin],
    ) -> Parser:
        raise NotImplementedError

    def _parse_extends(self) -> Literal:
        """'extends' path"""
        tok = self._expect(TokenType.EXTENDS)
        if self._filename is None:
            raise ConfigurationError(
                'the "filename" option is required to extend templates', tok.lineno
            )
        if self._extending is not None:
            raise ResolutionError(
                "duplicate extends: a template can only extend one other template",
                path=tok.value.strip(),
                lineno=tok.lineno,
                filename=self._filename,
            )

        path = self._resolve(tok.value)
        self._check_cycle(path, tok)
        logger.debug("%s extends %s", self._filename, path)
        source = self._load(path, tok)
        self._extending = self._spawn(source, path, blocks=self._blocks, mixins={})
        return Literal("", lineno=tok.lineno)

    def _parse_include(self) -> Node:
        """'include' path block?"""
        tok = self._expect(TokenType.INCLUDE)
        if self._filename is None:
            raise ConfigurationError('the "filename" option is required to use includes', tok.lineno)

        path = self._resolve(tok.value)
        if not path.endswith(get_parse_config().extension):
            logger.debug("%s includes %s as literal text", self._filename, path)
            literal = Literal(self._load(path, tok), lineno=tok.lineno)
            if self._at(TokenType.INDENT):
                raise TemplateSyntaxError(
                    f'non-template include "{path}" cannot take an indented block',
                    self._peek().lineno,
                    self._filename,
                    expected="newline",
                    actual="indent",
                )
            return literal

        self._check_cycle(path, tok)
        logger.debug("%s includes %s", self._filename, path)
        source = self._load(path, tok)
        parser = self._spawn(source, path, blocks=self._blocks.snapshot(), mixins=self._mixins)
        ast = parser.parse()
        ast.filename = path

        if self._at(TokenType.INDENT):
            ast.include_block().push(self._block())
        return ast

    def _parse_block(self) -> Block:
        """'block' name block?"""
        tok = cast(BlockToken, self._expect(TokenType.BLOCK))
        name = tok.value.strip()
        if self._at(TokenType.INDENT):
            block = self._block()
        else:
            block = Block([Literal("", lineno=tok.lineno)], lineno=tok.lineno)
        block.mode = tok.mode
        block.filename = self._filename
        return self._blocks.define(name, block, self._serial)

    def _parse_mixin(self) -> Mixin:
        """'mixin' name block?"""
        tok = cast(MixinToken, self._expect(TokenType.MIXIN))
        if self._at(TokenType.INDENT):
            mixin = Mixin(tok.value, args=tok.args, block=self._block(), lineno=tok.lineno)
            self._mixins[tok.value] = mixin
            return mixin
        return Mixin(tok.value, args=tok.args, call=True, lineno=tok.lineno)

    def _resolve(self, target: str) -> str:
        """Path of ``target`` relative to the current template's directory."""
        assert self._filename is not None
        target = target.strip()
        if not os.path.splitext(target)[1]:
            target += get_parse_config().extension
        return os.path.normpath(os.path.join(os.path.dirname(self._filename), target))

    def _check_cycle(self, path: str, tok: Token) -> None:
        if path in self._ancestors:
            raise ResolutionError(
                f"cyclic include/extends: {path}",
                path=path,
                lineno=tok.lineno,
                filename=self._filename,
            )

    def _load(self, path: str, tok: Token) -> str:
        try:
            return get_parse_config().get_loader().load(path)
        except ResolutionError as exc:
            raise ResolutionError(
                exc.message, path=path, lineno=tok.lineno, filename=self._filename
            ) from exc
