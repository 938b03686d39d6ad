"""Serialization of parsed values to plain data, JSON and YAML.

The plain-data form is what the CLI prints with ``--format json|yaml``
and what a host UI can hand to a logger:

- scalars become the matching Python scalar
- arrays and structures become lists
- dictionaries with string-like keys become mappings, any other
  dictionary becomes a list of ``[key, value]`` pairs
- variants become ``{"signature": ..., "value": ...}``

Usage
-----
::

    from dtui.values.serializer import ValueSerializer

    serializer = ValueSerializer()
    json_text = serializer.to_json(value)
"""
from __future__ import annotations

import json

import yaml

from dtui.signature.types import PrimitiveSignature, TypeCode
from dtui.values.nodes import (
    ArrayValue,
    DictValue,
    Scalar,
    StructureValue,
    Value,
    VariantValue,
)

_STRING_KEYS = frozenset({TypeCode.STR, TypeCode.OBJECT_PATH, TypeCode.SIGNATURE})


class ValueSerializer:
    """Converts ``Value`` trees to JSON/YAML-friendly structures."""

    def to_data(self, value: Value) -> object:
        """Return ``value`` as nested lists, dicts and scalars."""
        if isinstance(value, Scalar):
            return value.data
        if isinstance(value, ArrayValue):
            return [self.to_data(item) for item in value.items]
        if isinstance(value, StructureValue):
            return [self.to_data(f) for f in value.fields]
        if isinstance(value, VariantValue):
            return {"signature": str(value.inner_signature), "value": self.to_data(value.value)}
        if isinstance(value, DictValue):
            key_sig = value.key_signature
            if isinstance(key_sig, PrimitiveSignature) and key_sig.code in _STRING_KEYS:
                return {str(k.data): self.to_data(v) for k, v in value.entries}  # type: ignore[union-attr]
            return [[self.to_data(k), self.to_data(v)] for k, v in value.entries]
        raise TypeError(f"Not a value: {value!r}")

    def to_document(self, value: Value) -> dict[str, object]:
        """Return ``value`` wrapped with its signature text."""
        return {"signature": str(value.signature), "value": self.to_data(value)}

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, value: Value, indent: int = 2) -> str:
        """Serialize a value document to a JSON string."""
        return json.dumps(self.to_document(value), indent=indent, ensure_ascii=False)

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, value: Value) -> str:
        """Serialize a value document to a YAML string."""
        return yaml.safe_dump(self.to_document(value), default_flow_style=False, allow_unicode=True)
