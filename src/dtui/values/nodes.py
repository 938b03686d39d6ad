"""Value model produced by the literal parser.

Values mirror the D-Bus wire domain.  Every node is an immutable, hashable
dataclass that owns its data outright: nothing refers back into the input
text or into earlier parse attempts.  Each node reports the ``Signature``
it conforms to via ``.signature``.

Dictionaries compare and hash independently of entry order; structures
and arrays are order-sensitive.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from dtui.signature.types import (
    VARIANT,
    ArraySignature,
    DictSignature,
    PrimitiveSignature,
    Signature,
    StructureSignature,
    TypeCode,
)

ScalarData = Union[bool, int, float, str]


@dataclass(frozen=True, slots=True)
class Scalar:
    """A primitive value tagged with its D-Bus type code.

    ``data`` is a ``bool`` for ``b``, an ``int`` for the integer family, a
    ``float`` for ``d`` and a ``str`` for ``s``, ``g`` and ``o``.
    """

    code: TypeCode
    data: ScalarData

    @property
    def signature(self) -> PrimitiveSignature:
        return PrimitiveSignature(self.code)


@dataclass(frozen=True, slots=True)
class ArrayValue:
    """A homogeneous array; every item conforms to ``element_signature``."""

    element_signature: Signature
    items: tuple["Value", ...] = ()

    @property
    def signature(self) -> ArraySignature:
        return ArraySignature(self.element_signature)


@dataclass(frozen=True, slots=True, eq=False)
class DictValue:
    """A dictionary with unique keys.

    ``entries`` keeps encounter order for display, but equality and hashing
    treat the dictionary as an unordered mapping.
    """

    key_signature: Signature
    value_signature: Signature
    entries: tuple[tuple["Value", "Value"], ...] = ()

    @property
    def signature(self) -> DictSignature:
        return DictSignature(self.key_signature, self.value_signature)

    def as_dict(self) -> dict["Value", "Value"]:
        """Return the entries as a plain ``dict``."""
        return dict(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DictValue):
            return NotImplemented
        return (
            self.key_signature == other.key_signature
            and self.value_signature == other.value_signature
            and self.as_dict() == other.as_dict()
        )

    def __hash__(self) -> int:
        return hash((self.key_signature, self.value_signature, frozenset(self.entries)))


@dataclass(frozen=True, slots=True)
class StructureValue:
    """An ordered, fixed-arity group of heterogeneous fields."""

    fields: tuple["Value", ...]

    @property
    def signature(self) -> StructureSignature:
        return StructureSignature(tuple(f.signature for f in self.fields))


@dataclass(frozen=True, slots=True)
class VariantValue:
    """A value whose inner type was chosen by the literal itself."""

    value: "Value"

    @property
    def signature(self) -> PrimitiveSignature:
        return VARIANT

    @property
    def inner_signature(self) -> Signature:
        """Signature of the wrapped value."""
        return self.value.signature


Value = Union[Scalar, ArrayValue, DictValue, StructureValue, VariantValue]
