"""Signature module.

Exports the signature model, the signature text reader and object path
validation.
"""
from __future__ import annotations

from dtui.signature.object_path import is_valid_object_path, object_path_problem
from dtui.signature.parser import (
    SignatureReader,
    is_valid_signature,
    parse_signature,
    parse_signature_list,
)
from dtui.signature.types import (
    BOOL,
    F64,
    FD,
    I16,
    I32,
    I64,
    OBJECT_PATH,
    SIGNATURE,
    STR,
    U8,
    U16,
    U32,
    U64,
    UNIT,
    VARIANT,
    ArraySignature,
    DictSignature,
    PrimitiveSignature,
    Signature,
    StructureSignature,
    TypeCode,
    UnitSignature,
)

__all__ = [
    # Model
    "Signature",
    "TypeCode",
    "UnitSignature",
    "PrimitiveSignature",
    "ArraySignature",
    "DictSignature",
    "StructureSignature",
    # Constants
    "UNIT",
    "U8",
    "BOOL",
    "I16",
    "U16",
    "I32",
    "U32",
    "I64",
    "U64",
    "F64",
    "STR",
    "SIGNATURE",
    "OBJECT_PATH",
    "VARIANT",
    "FD",
    # Reader
    "SignatureReader",
    "parse_signature",
    "parse_signature_list",
    "is_valid_signature",
    # Object paths
    "is_valid_object_path",
    "object_path_problem",
]
