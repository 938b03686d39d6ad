"""Literal formatter module.

Exports the ``LiteralFormatter`` class and the ``format_value`` convenience function.
"""
from __future__ import annotations

from dtui.formatter.formatter import LiteralFormatter, format_value, quote

__all__ = ["LiteralFormatter", "format_value", "quote"]
