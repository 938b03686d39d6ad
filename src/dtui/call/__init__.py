"""Method-call module.

Exports the method-call form, its argument fields and the caller protocol.
"""
from __future__ import annotations

from dtui.call.form import ArgumentField, MethodCaller, MethodCallForm

__all__ = ["ArgumentField", "MethodCallForm", "MethodCaller"]
