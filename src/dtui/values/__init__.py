"""Value module.

Exports the parsed value node types and the value serializer.
"""
from __future__ import annotations

from dtui.values.nodes import (
    ArrayValue,
    DictValue,
    Scalar,
    ScalarData,
    StructureValue,
    Value,
    VariantValue,
)
from dtui.values.serializer import ValueSerializer

__all__ = [
    "Value",
    "Scalar",
    "ScalarData",
    "ArrayValue",
    "DictValue",
    "StructureValue",
    "VariantValue",
    "ValueSerializer",
]
