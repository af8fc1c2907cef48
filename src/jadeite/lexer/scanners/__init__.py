"""Scanner mixins for the Jadeite lexer.

Each scanner tries to recognise one construct at the cursor. It either
consumes input and returns a token, or leaves the input untouched and
returns None so the lexer can try the next scanner in dispatch order.
"""

from jadeite.lexer.scanners.code import CodeScannerMixin
from jadeite.lexer.scanners.keywords import KeywordScannerMixin
from jadeite.lexer.scanners.markup import MarkupScannerMixin
from jadeite.lexer.scanners.structure import StructureScannerMixin

__all__ = [
    "CodeScannerMixin",
    "KeywordScannerMixin",
    "MarkupScannerMixin",
    "StructureScannerMixin",
]
