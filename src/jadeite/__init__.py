"""
Jadeite: Jade template front end for Python

Tokenizes and parses indentation-sensitive Jade/Pug-style templates into a
typed AST: tags with attribute lists, text, control code, loops, switches,
filters, comments, and template composition through extends, include,
named blocks and mixins. Embedded host-language expressions are carried
through as opaque text.

Quick Start:
    >>> from jadeite import parse
    >>> root = parse("ul\\n  li(class='first') one\\n  li two")
    >>> [li.attrs for li in root.nodes[0].block.nodes]
    [{'class': "'first'"}, {}]

    >>> # Templates that extend or include others need a filename
    >>> from jadeite import DictLoader
    >>> loader = DictLoader({
    ...     "views/layout.jade": "html\\n  body\\n    block content",
    ...     "views/page.jade": "extends layout\\nblock content\\n  p Hi",
    ... })
    >>> root = parse_file("views/page.jade", loader=loader)

Installation:
    pip install jadeite              # zero runtime dependencies
"""

from collections.abc import Iterator
from dataclasses import replace

from jadeite.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from jadeite.errors import (
    ConfigurationError,
    JadeiteError,
    LexicalError,
    ResolutionError,
    TemplateError,
    TemplateSyntaxError,
)
from jadeite.lexer import Lexer
from jadeite.loaders import DictLoader, FileSystemLoader, SourceLoader
from jadeite.nodes import (
    AttributedNode,
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
from jadeite.parser import Parser
from jadeite.tokens import BlockMode, Token, TokenType
from jadeite.visitor import BaseVisitor, walk

__version__ = "0.1.0"


def parse(
    source: str,
    filename: str | None = None,
    *,
    loader: SourceLoader | None = None,
    colons: bool = False,
) -> Block:
    """Parse template source into an AST.

    Args:
        source: Template source text
        filename: Path of the template; required when it uses extends or
            include, whose paths resolve relative to this file's directory
        loader: Source loader for extends/include (default: the active
            config's loader, else the filesystem)
        colons: Treat ``:`` as ``=`` inside attribute lists

    Returns:
        Root Block of the document

    Raises:
        LexicalError: Malformed indentation or attribute list
        TemplateSyntaxError: A token where the grammar expects another
        ConfigurationError: extends/include without a filename
        ResolutionError: A referenced template is missing, unreadable or
            part of a cycle

    Example:
        >>> parse("p Hello").nodes[0].block.nodes[0].value
        'Hello'
    """
    current = get_parse_config()
    config = replace(current, colons=colons, loader=loader or current.loader)
    with parse_config_context(config):
        return Parser(source, filename).parse()


def parse_file(path: str, *, loader: SourceLoader | None = None) -> Block:
    """Load the template at ``path`` and parse it.

    Example:
        >>> loader = DictLoader({"index.jade": "p hi"})
        >>> parse_file("index.jade", loader=loader).filename
        'index.jade'
    """
    current = get_parse_config()
    config = replace(current, loader=loader or current.loader)
    with parse_config_context(config):
        source = config.get_loader().load(path)
        return Parser(source, path).parse()


def tokenize(source: str, *, colons: bool = False) -> Iterator[Token]:
    """Lazily tokenize template source, ending with one EOS token.

    Example:
        >>> [t.type.name for t in tokenize("p hi")]
        ['TAG', 'TEXT', 'EOS']
    """
    return Lexer(source, colons=colons).tokenize()


__all__ = [
    # Main API
    "parse",
    "parse_file",
    "tokenize",
    "Parser",
    "Lexer",
    "__version__",
    # Config
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Loaders
    "SourceLoader",
    "FileSystemLoader",
    "DictLoader",
    # Tokens
    "Token",
    "TokenType",
    "BlockMode",
    # Nodes
    "Node",
    "Block",
    "AttributedNode",
    "Tag",
    "Mixin",
    "Text",
    "Literal",
    "Code",
    "Each",
    "Case",
    "When",
    "Comment",
    "BlockComment",
    "Doctype",
    "Filter",
    # Visitor
    "BaseVisitor",
    "walk",
    # Errors
    "JadeiteError",
    "TemplateError",
    "LexicalError",
    "TemplateSyntaxError",
    "ResolutionError",
    "ConfigurationError",
]
