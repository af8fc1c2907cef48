"""Parsing subsystem for the Jadeite parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Token stream traversal
- `StatementParsingMixin`: Text, code, loops, switches, comments, filters
- `TagParsingMixin`: Tags, interpolated tags, mixin calls
- `CompositionMixin`: extends, include, named blocks, mixin definitions

Architecture:
The parser uses a mixin-based design for separation of concerns. Each
mixin handles one family of productions and reaches the others through
the host Parser.

Example:
    >>> from jadeite.parsing import CompositionMixin, TagParsingMixin
    >>> class Parser(TagParsingMixin, CompositionMixin):
    ...     pass

"""

from jadeite.parsing.composition import BlockDefinition, BlockRegistry, CompositionMixin
from jadeite.parsing.statements import StatementParsingMixin
from jadeite.parsing.tags import TagParsingMixin
from jadeite.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "BlockDefinition",
    "BlockRegistry",
    "CompositionMixin",
    "StatementParsingMixin",
    "TagParsingMixin",
    "TokenNavigationMixin",
]
