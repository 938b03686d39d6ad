"""Grammar module.

Exports the reference grammar strings and per-type example literals.
"""
from __future__ import annotations

from dtui.grammar.grammar import (
    EXAMPLE_LITERALS,
    FULL_GRAMMAR,
    GRAMMAR_LITERAL,
    GRAMMAR_OBJECT_PATH,
    GRAMMAR_SIGNATURE,
)

__all__ = [
    "FULL_GRAMMAR",
    "GRAMMAR_LITERAL",
    "GRAMMAR_SIGNATURE",
    "GRAMMAR_OBJECT_PATH",
    "EXAMPLE_LITERALS",
]
