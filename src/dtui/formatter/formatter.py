"""Literal formatter: ``Value`` → literal text.

The ``LiteralFormatter`` renders a parsed value back into the literal
grammar accepted by ``dtui.parser.compile``, so that for every value
``compile(value.signature).parse(format_value(value))`` yields an equal
value.  It is also how call replies are shown to the operator.

Rendering rules:

- booleans as ``true``/``false``, integers in decimal
- doubles in plain positional notation (the grammar has no exponent),
  always with a fractional part
- strings, signatures and object paths double-quoted, escaping ``\\``,
  ``"`` and control characters
- ``[a, b]``, ``{k: v}``, ``(a, b)`` and ``"sig"->value``; with
  ``compact=True`` no space follows separators

Usage
-----
::

    from dtui.formatter import LiteralFormatter

    text = LiteralFormatter(compact=True).format(value)
"""
from __future__ import annotations

import math
from decimal import Decimal
from typing import Final

from dtui.signature.types import TypeCode
from dtui.values.nodes import (
    ArrayValue,
    DictValue,
    Scalar,
    StructureValue,
    Value,
    VariantValue,
)

_ESCAPES: Final[dict[str, str]] = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_QUOTED: Final[frozenset[TypeCode]] = frozenset(
    {TypeCode.STR, TypeCode.SIGNATURE, TypeCode.OBJECT_PATH}
)


class LiteralFormatter:
    """Produces literal text from a ``Value`` tree.

    Parameters
    ----------
    compact:
        If True, omit the space after ``,`` and ``:``.
    """

    def __init__(self, compact: bool = False) -> None:
        self._compact = compact

    @property
    def _comma(self) -> str:
        return "," if self._compact else ", "

    @property
    def _colon(self) -> str:
        return ":" if self._compact else ": "

    def format(self, value: Value) -> str:
        """Render ``value`` as literal text.

        Raises
        ------
        ValueError
            If a double is infinite or NaN; those have no literal form.
        """
        if isinstance(value, Scalar):
            return self._format_scalar(value)
        if isinstance(value, ArrayValue):
            return "[" + self._comma.join(self.format(item) for item in value.items) + "]"
        if isinstance(value, DictValue):
            pairs = (f"{self.format(k)}{self._colon}{self.format(v)}" for k, v in value.entries)
            return "{" + self._comma.join(pairs) + "}"
        if isinstance(value, StructureValue):
            return "(" + self._comma.join(self.format(f) for f in value.fields) + ")"
        if isinstance(value, VariantValue):
            return f"{quote(str(value.inner_signature))}->{self.format(value.value)}"
        raise TypeError(f"Not a value: {value!r}")

    def _format_scalar(self, value: Scalar) -> str:
        if value.code is TypeCode.BOOL:
            return "true" if value.data else "false"
        if value.code in _QUOTED:
            return quote(str(value.data))
        if value.code is TypeCode.F64:
            return _format_double(float(value.data))
        return str(int(value.data))


def quote(text: str) -> str:
    """Render ``text`` as a double-quoted string literal."""
    out: list[str] = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch < " ":
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def _format_double(number: float) -> str:
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"{number!r} has no literal form")
    # repr() is the shortest round-tripping form; Decimal expands any exponent
    text = format(Decimal(repr(number)), "f")
    if "." not in text:
        text += ".0"
    return text


def format_value(value: Value, compact: bool = False) -> str:
    """Convenience function: render a value as literal text.

    Parameters
    ----------
    value:
        The value to render.
    compact:
        If True, omit the space after separators.

    Returns
    -------
    str
        Literal text that parses back to an equal value.
    """
    return LiteralFormatter(compact=compact).format(value)
