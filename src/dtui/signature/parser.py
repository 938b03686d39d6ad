"""Reader for D-Bus signature text.

Converts signature strings such as ``"a{sv}"`` or ``"(sia(ii))"`` into the
``Signature`` model and enforces the D-Bus signature grammar:

- at most 255 bytes of text
- only known type codes and container delimiters
- arrays must have an element type
- structures must have at least one field
- dict entries ``{kv}`` may only appear directly inside an array, have
  exactly two types, and a basic (non-container, non-variant) key
- nesting: at most 32 arrays, 32 structures and 64 containers in total
"""
from __future__ import annotations

from typing import Final

from dtui.errors import SignatureError
from dtui.signature.types import (
    CODES_BY_CHAR,
    UNIT,
    ArraySignature,
    DictSignature,
    PrimitiveSignature,
    Signature,
    StructureSignature,
)

MAX_SIGNATURE_LENGTH: Final[int] = 255
MAX_ARRAY_DEPTH: Final[int] = 32
MAX_STRUCT_DEPTH: Final[int] = 32
MAX_TOTAL_DEPTH: Final[int] = 64


class SignatureReader:
    """Single-pass recursive reader over one signature string.

    Parameters
    ----------
    text:
        The signature text to read.
    """

    __slots__ = ("_text", "_pos")

    def __init__(self, text: str) -> None:
        self._text: str = text
        self._pos: int = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def read_all(self) -> tuple[Signature, ...]:
        """Read every complete type in the text.

        Raises
        ------
        SignatureError
            If the text is not a valid D-Bus signature.
        """
        if len(self._text.encode("utf-8")) > MAX_SIGNATURE_LENGTH:
            raise SignatureError(
                f"signature exceeds {MAX_SIGNATURE_LENGTH} bytes", self._text, MAX_SIGNATURE_LENGTH
            )
        types: list[Signature] = []
        while self._pos < len(self._text):
            types.append(self._read_single(0, 0))
        return tuple(types)

    # ------------------------------------------------------------------
    # Internal reader
    # ------------------------------------------------------------------

    def _fail(self, message: str) -> SignatureError:
        return SignatureError(message, self._text, self._pos)

    def _read_single(self, arrays: int, structs: int) -> Signature:
        if self._pos >= len(self._text):
            raise self._fail("unexpected end of signature")
        ch = self._text[self._pos]

        if ch in CODES_BY_CHAR:
            self._pos += 1
            return PrimitiveSignature(CODES_BY_CHAR[ch])

        if ch == "a":
            arrays += 1
            self._check_depth(arrays, structs)
            self._pos += 1
            if self._pos >= len(self._text):
                raise self._fail("array is missing its element type")
            if self._text[self._pos] == "{":
                return self._read_dict_entry(arrays, structs)
            return ArraySignature(self._read_single(arrays, structs))

        if ch == "(":
            structs += 1
            self._check_depth(arrays, structs)
            self._pos += 1
            fields: list[Signature] = []
            while self._pos < len(self._text) and self._text[self._pos] != ")":
                fields.append(self._read_single(arrays, structs))
            if self._pos >= len(self._text):
                raise self._fail("unterminated structure, expected ')'")
            if not fields:
                raise self._fail("structure must have at least one field")
            self._pos += 1
            return StructureSignature(tuple(fields))

        if ch == "{":
            raise self._fail("dict entry is only allowed as an array element")
        if ch in ")}":
            raise self._fail(f"unbalanced {ch!r}")
        raise self._fail(f"unknown type code {ch!r}")

    def _read_dict_entry(self, arrays: int, structs: int) -> DictSignature:
        structs += 1
        self._check_depth(arrays, structs)
        self._pos += 1  # {
        if self._pos >= len(self._text):
            raise self._fail("unterminated dict entry, expected '}'")
        key_start = self._pos
        key = self._read_single(arrays, structs)
        if not isinstance(key, PrimitiveSignature) or not key.code.is_basic:
            self._pos = key_start
            raise self._fail("dict key must be a basic type")
        if self._pos >= len(self._text) or self._text[self._pos] == "}":
            raise self._fail("dict entry must contain exactly two types")
        value = self._read_single(arrays, structs)
        if self._pos >= len(self._text):
            raise self._fail("unterminated dict entry, expected '}'")
        if self._text[self._pos] != "}":
            raise self._fail("dict entry must contain exactly two types")
        self._pos += 1
        return DictSignature(key, value)

    def _check_depth(self, arrays: int, structs: int) -> None:
        if arrays > MAX_ARRAY_DEPTH:
            raise self._fail(f"arrays nested deeper than {MAX_ARRAY_DEPTH}")
        if structs > MAX_STRUCT_DEPTH:
            raise self._fail(f"structures nested deeper than {MAX_STRUCT_DEPTH}")
        if arrays + structs > MAX_TOTAL_DEPTH:
            raise self._fail(f"containers nested deeper than {MAX_TOTAL_DEPTH}")


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def parse_signature(text: str) -> Signature:
    """Parse signature text holding at most one complete type.

    The empty string yields ``UNIT``.

    Raises
    ------
    SignatureError
        If the text is invalid or holds more than one complete type.

    Example
    -------
    ::

        from dtui.signature import parse_signature
        sig = parse_signature("a{sv}")
        str(sig)  # 'a{sv}'
    """
    types = SignatureReader(text).read_all()
    if not types:
        return UNIT
    if len(types) > 1:
        raise SignatureError(
            f"expected a single complete type, found {len(types)}", text, len(str(types[0]))
        )
    return types[0]


def parse_signature_list(text: str) -> tuple[Signature, ...]:
    """Parse signature text holding any number of complete types.

    This is the form used for method and signal signatures, e.g. ``"sa{sv}as"``.
    """
    return SignatureReader(text).read_all()


def is_valid_signature(text: str) -> bool:
    """Return True if ``text`` is a valid D-Bus signature (possibly empty)."""
    try:
        SignatureReader(text).read_all()
    except SignatureError:
        return False
    return True
