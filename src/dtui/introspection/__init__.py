"""Introspection module.

Exports the introspection model and the XML reader.
"""
from __future__ import annotations

from dtui.introspection.nodes import (
    Annotation,
    Arg,
    ArgDirection,
    Interface,
    Method,
    Node,
    Property,
    PropertyAccess,
    Signal,
)
from dtui.introspection.reader import (
    IntrospectionReader,
    read_introspection,
    read_introspection_file,
)

__all__ = [
    "Annotation",
    "Arg",
    "ArgDirection",
    "Interface",
    "Method",
    "Node",
    "Property",
    "PropertyAccess",
    "Signal",
    "IntrospectionReader",
    "read_introspection",
    "read_introspection_file",
]
