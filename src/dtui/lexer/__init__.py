"""Leaf lexer module.

Exports the ``Scanner``, the ``ValueParser`` interface, ``ParseResult``
and the leaf lexers for every primitive signature kind.
"""
from __future__ import annotations

from dtui.lexer.leaves import (
    INTEGER_RANGES,
    BoolLexer,
    FloatLexer,
    IntegerLexer,
    ObjectPathLexer,
    SignatureLexer,
    StringLexer,
    UnsupportedLexer,
    leaf_lexer,
    read_quoted,
)
from dtui.lexer.scanner import MAX_VALUE_DEPTH, ParseResult, Scanner, ValueParser

__all__ = [
    "Scanner",
    "ValueParser",
    "ParseResult",
    "BoolLexer",
    "IntegerLexer",
    "FloatLexer",
    "StringLexer",
    "SignatureLexer",
    "ObjectPathLexer",
    "UnsupportedLexer",
    "leaf_lexer",
    "read_quoted",
    "INTEGER_RANGES",
    "MAX_VALUE_DEPTH",
]
