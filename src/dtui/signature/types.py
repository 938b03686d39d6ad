"""Signature model: runtime descriptions of D-Bus value shapes.

Signatures arrive as data, read from introspection metadata, and drive
construction of the literal parsers.  Every node is a frozen dataclass so
signatures compare structurally, hash, and can be shared freely between
argument fields.

``str(signature)`` renders the D-Bus signature text, so that
``parse_signature(str(sig)) == sig`` for every signature that is valid on
the bus.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class TypeCode(Enum):
    """Primitive D-Bus type codes, valued by their signature character."""

    U8 = "y"
    BOOL = "b"
    I16 = "n"
    U16 = "q"
    I32 = "i"
    U32 = "u"
    I64 = "x"
    U64 = "t"
    F64 = "d"
    STR = "s"
    SIGNATURE = "g"
    OBJECT_PATH = "o"
    VARIANT = "v"
    FD = "h"

    @property
    def label(self) -> str:
        """Short human-readable name used in error messages."""
        return _LABELS[self]

    @property
    def is_basic(self) -> bool:
        """Return True if values of this type may be dictionary keys."""
        return self is not TypeCode.VARIANT


_LABELS: dict[TypeCode, str] = {
    TypeCode.U8: "u8",
    TypeCode.BOOL: "bool",
    TypeCode.I16: "i16",
    TypeCode.U16: "u16",
    TypeCode.I32: "i32",
    TypeCode.U32: "u32",
    TypeCode.I64: "i64",
    TypeCode.U64: "u64",
    TypeCode.F64: "f64",
    TypeCode.STR: "string",
    TypeCode.SIGNATURE: "signature",
    TypeCode.OBJECT_PATH: "object path",
    TypeCode.VARIANT: "variant",
    TypeCode.FD: "file descriptor",
}

CODES_BY_CHAR: dict[str, TypeCode] = {code.value: code for code in TypeCode}


# ---------------------------------------------------------------------------
# Signature nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UnitSignature:
    """The empty signature.  Never a valid parse target."""

    def __str__(self) -> str:
        return ""

    @property
    def label(self) -> str:
        return "unit"


@dataclass(frozen=True, slots=True)
class PrimitiveSignature:
    """A single non-container type such as ``u`` or ``s``."""

    code: TypeCode

    def __str__(self) -> str:
        return self.code.value

    @property
    def label(self) -> str:
        return self.code.label


@dataclass(frozen=True, slots=True)
class ArraySignature:
    """A homogeneous array ``a<element>``."""

    element: "Signature"

    def __str__(self) -> str:
        return f"a{self.element}"

    @property
    def label(self) -> str:
        return f"array of {self.element.label}"


@dataclass(frozen=True, slots=True)
class DictSignature:
    """A dictionary ``a{<key><value>}``.

    D-Bus encodes dictionaries as arrays of dict entries; the model keeps
    them as their own variant because the literal grammar differs.
    """

    key: "Signature"
    value: "Signature"

    def __str__(self) -> str:
        return f"a{{{self.key}{self.value}}}"

    @property
    def label(self) -> str:
        return f"dict of {self.key.label} to {self.value.label}"


@dataclass(frozen=True, slots=True)
class StructureSignature:
    """A structure ``(<field>...)`` with a fixed, ordered field list."""

    fields: tuple["Signature", ...]

    def __str__(self) -> str:
        return "(" + "".join(str(f) for f in self.fields) + ")"

    @property
    def label(self) -> str:
        return f"structure of {len(self.fields)} field(s)"


Signature = Union[
    UnitSignature,
    PrimitiveSignature,
    ArraySignature,
    DictSignature,
    StructureSignature,
]

UNIT = UnitSignature()
U8 = PrimitiveSignature(TypeCode.U8)
BOOL = PrimitiveSignature(TypeCode.BOOL)
I16 = PrimitiveSignature(TypeCode.I16)
U16 = PrimitiveSignature(TypeCode.U16)
I32 = PrimitiveSignature(TypeCode.I32)
U32 = PrimitiveSignature(TypeCode.U32)
I64 = PrimitiveSignature(TypeCode.I64)
U64 = PrimitiveSignature(TypeCode.U64)
F64 = PrimitiveSignature(TypeCode.F64)
STR = PrimitiveSignature(TypeCode.STR)
SIGNATURE = PrimitiveSignature(TypeCode.SIGNATURE)
OBJECT_PATH = PrimitiveSignature(TypeCode.OBJECT_PATH)
VARIANT = PrimitiveSignature(TypeCode.VARIANT)
FD = PrimitiveSignature(TypeCode.FD)
