"""Literal parser module.

Exports the ``compile`` entry point, the composite parsers it builds, and
the duplicate-key policy for dictionary literals.
"""
from __future__ import annotations

from dtui.lexer.scanner import ParseResult, ValueParser
from dtui.parser.compiler import compile
from dtui.parser.composite import (
    ArrayParser,
    DictParser,
    DuplicateKeyPolicy,
    StructureParser,
    VariantParser,
)

__all__ = [
    "compile",
    "ValueParser",
    "ParseResult",
    "DuplicateKeyPolicy",
    "ArrayParser",
    "DictParser",
    "StructureParser",
    "VariantParser",
]
