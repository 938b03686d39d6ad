"""Leaf lexers: parsers for the primitive (non-recursive) signature kinds.

Every leaf lexer skips whitespace before and after its token, so the
composite separators ``,`` ``:`` and ``->`` may be padded freely.

Only the string lexer recovers from errors.  When a string literal is
malformed it records the error, then skips forward one character at a
time retrying the string until it either succeeds or reaches ``}`` or
``]``.  One bad element inside a long array or dictionary therefore does
not hide the problems in the elements after it.  Signature and object
path literals never recover.
"""
from __future__ import annotations

import math
from typing import Callable, Final

from dtui.errors import ErrorKind, ParseError, SignatureError
from dtui.lexer.scanner import Scanner, ValueParser
from dtui.signature.object_path import object_path_problem
from dtui.signature.parser import SignatureReader
from dtui.signature.types import (
    BOOL,
    F64,
    FD,
    OBJECT_PATH,
    SIGNATURE,
    STR,
    PrimitiveSignature,
    Signature,
    TypeCode,
)
from dtui.values.nodes import Scalar

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_DIGITS: Final[frozenset[str]] = frozenset("0123456789")
_HEX_DIGITS: Final[frozenset[str]] = frozenset("0123456789abcdefABCDEF")
_RECOVERY_STOP: Final[frozenset[str]] = frozenset("}]")
_MAX_INTEGER_DIGITS: Final[int] = 20
_REPLACEMENT_CHARACTER: Final[str] = "\ufffd"

_ESCAPE_MAP: Final[dict[str, str]] = {
    "\\": "\\",
    "/": "/",
    '"': '"',
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

INTEGER_RANGES: Final[dict[TypeCode, tuple[int, int]]] = {
    TypeCode.U8: (0, 2**8 - 1),
    TypeCode.U16: (0, 2**16 - 1),
    TypeCode.U32: (0, 2**32 - 1),
    TypeCode.U64: (0, 2**64 - 1),
    TypeCode.I16: (-(2**15), 2**15 - 1),
    TypeCode.I32: (-(2**31), 2**31 - 1),
    TypeCode.I64: (-(2**63), 2**63 - 1),
}


# ---------------------------------------------------------------------------
# Quoted text
# ---------------------------------------------------------------------------


def read_quoted(scanner: Scanner, label: str, soft_errors: list[ParseError]) -> str:
    """Read one ``"..."`` literal at the cursor and return its decoded body.

    Invalid ``\\u`` escapes decode to U+FFFD and are appended to
    ``soft_errors`` instead of failing the literal.

    Raises
    ------
    ParseError
        If there is no opening quote, the literal is unterminated, or it
        contains an unknown escape.
    """
    start = scanner.pos
    if scanner.current() != '"':
        raise scanner.error(ErrorKind.LEXICAL, f"expected a quoted {label}", expected=label)
    scanner.advance()
    buf: list[str] = []
    while True:
        if scanner.at_end():
            raise scanner.error(
                ErrorKind.LEXICAL,
                "unterminated string literal",
                expected="'\"'",
                start=start,
                end=scanner.pos,
            )
        ch = scanner.advance()
        if ch == '"':
            return "".join(buf)
        if ch != "\\":
            buf.append(ch)
            continue
        escape_start = scanner.pos - 1
        esc = scanner.current()
        if esc in _ESCAPE_MAP:
            scanner.advance()
            buf.append(_ESCAPE_MAP[esc])
        elif esc == "u":
            scanner.advance()
            buf.append(_read_unicode_escape(scanner, escape_start, soft_errors))
        else:
            raise scanner.error(
                ErrorKind.LEXICAL,
                f"invalid escape sequence \\{esc}" if esc else "unterminated escape sequence",
                expected="escape",
                start=escape_start,
                end=scanner.pos + (1 if esc else 0),
            )


def _read_unicode_escape(scanner: Scanner, escape_start: int, soft_errors: list[ParseError]) -> str:
    digits: list[str] = []
    while len(digits) < 4 and scanner.current() in _HEX_DIGITS:
        digits.append(scanner.advance())
    if len(digits) < 4:
        soft_errors.append(
            scanner.error(
                ErrorKind.LEXICAL,
                "\\u escape needs four hex digits",
                expected="hex digit",
                start=escape_start,
                end=scanner.pos,
            )
        )
        return _REPLACEMENT_CHARACTER
    code_point = int("".join(digits), 16)
    if 0xD800 <= code_point <= 0xDFFF:
        soft_errors.append(
            scanner.error(
                ErrorKind.LEXICAL,
                "invalid unicode character",
                start=escape_start,
                end=scanner.pos,
            )
        )
        return _REPLACEMENT_CHARACTER
    return chr(code_point)


# ---------------------------------------------------------------------------
# Leaf lexers
# ---------------------------------------------------------------------------


class BoolLexer(ValueParser):
    """``true`` or ``false``, case-sensitive."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(BOOL)

    def scan(self, scanner: Scanner) -> Scalar:
        scanner.skip_whitespace()
        for word, data in (("true", True), ("false", False)):
            if scanner.startswith(word):
                scanner.reset(scanner.pos + len(word))
                scanner.skip_whitespace()
                return Scalar(TypeCode.BOOL, data)
        raise scanner.error(ErrorKind.LEXICAL, "expected 'true' or 'false'", expected=self.label)


class IntegerLexer(ValueParser):
    """Decimal integers of one width, with a leading ``-`` for signed kinds.

    Parameters
    ----------
    code:
        One of the integer type codes (``y n q i u x t``).
    """

    __slots__ = ("_low", "_high")

    def __init__(self, code: TypeCode) -> None:
        super().__init__(PrimitiveSignature(code))
        self._low, self._high = INTEGER_RANGES[code]

    @property
    def signed(self) -> bool:
        return self._low < 0

    def scan(self, scanner: Scanner) -> Scalar:
        scanner.skip_whitespace()
        start = scanner.pos
        if self.signed and scanner.current() == "-":
            scanner.advance()
        if scanner.current() not in _DIGITS:
            scanner.reset(start)
            raise scanner.error(ErrorKind.LEXICAL, f"expected {self.label} digits", expected=self.label)
        while scanner.current() in _DIGITS:
            scanner.advance()
        literal = scanner.source[start : scanner.pos]
        # int() refuses very long digit strings; nothing past 20 digits fits anyway
        if len(literal.lstrip("-").lstrip("0")) > _MAX_INTEGER_DIGITS or not (
            self._low <= int(literal) <= self._high
        ):
            raise scanner.error(
                ErrorKind.RANGE,
                f"{literal} is out of range for {self.label} ({self._low}..{self._high})",
                expected=self.label,
                start=start,
                end=scanner.pos,
            )
        scanner.skip_whitespace()
        return Scalar(self._signature.code, int(literal))  # type: ignore[union-attr]


class FloatLexer(ValueParser):
    """``-? digits ('.' digits)?`` as a double."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(F64)

    def scan(self, scanner: Scanner) -> Scalar:
        scanner.skip_whitespace()
        start = scanner.pos
        if scanner.current() == "-":
            scanner.advance()
        if scanner.current() not in _DIGITS:
            scanner.reset(start)
            raise scanner.error(ErrorKind.LEXICAL, "expected f64 digits", expected=self.label)
        while scanner.current() in _DIGITS:
            scanner.advance()
        if scanner.current() == "." and scanner.peek() in _DIGITS:
            scanner.advance()
            while scanner.current() in _DIGITS:
                scanner.advance()
        number = float(scanner.source[start : scanner.pos])
        if math.isinf(number):
            raise scanner.error(
                ErrorKind.RANGE,
                "value is too large for f64",
                expected=self.label,
                start=start,
                end=scanner.pos,
            )
        scanner.skip_whitespace()
        return Scalar(TypeCode.F64, number)


class StringLexer(ValueParser):
    """Double-quoted strings with JSON-style escapes and error recovery."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(STR)

    def scan(self, scanner: Scanner) -> Scalar:
        scanner.skip_whitespace()
        start = scanner.pos
        soft_errors: list[ParseError] = []
        try:
            text = read_quoted(scanner, self.label, soft_errors)
        except ParseError as exc:
            text = self._recover(scanner, start, scanner.pos, exc)
        else:
            for error in soft_errors:
                scanner.report(error)
        scanner.skip_whitespace()
        return Scalar(TypeCode.STR, text)

    def _recover(self, scanner: Scanner, start: int, reached: int, error: ParseError) -> str:
        """Skip forward retrying the string until ``}`` or ``]``.

        Returns the first string that parses after the bad text, or an empty
        placeholder when a closing delimiter is reached first.  The original
        error is always recorded.

        ``reached`` is where the failed read stopped.  A quote before that
        point was read as an escaped ``\\"`` by the failed attempt, so a retry
        from it would fail at the same place and is not attempted; this
        keeps recovery linear in the length of the input.
        """
        scanner.reset(start)
        if scanner.at_end() or scanner.current() in _RECOVERY_STOP:
            raise error
        while True:
            scanner.advance()
            if scanner.at_end():
                raise error
            if scanner.current() in _RECOVERY_STOP:
                scanner.report(error)
                return ""
            retry_at = scanner.pos
            scanner.skip_whitespace()
            if scanner.pos < reached:
                scanner.reset(retry_at)
                continue
            soft_errors: list[ParseError] = []
            try:
                text = read_quoted(scanner, self.label, soft_errors)
            except ParseError:
                reached = max(reached, scanner.pos)
                scanner.reset(retry_at)
                continue
            scanner.report(error)
            for soft in soft_errors:
                scanner.report(soft)
            return text


class SignatureLexer(ValueParser):
    """A quoted D-Bus signature, validated against the signature grammar."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(SIGNATURE)

    def scan(self, scanner: Scanner) -> Scalar:
        text, _ = self.scan_types(scanner)
        return Scalar(TypeCode.SIGNATURE, text)

    def scan_types(self, scanner: Scanner) -> tuple[str, tuple[Signature, ...]]:
        """Read a signature literal and return its text and decoded types."""
        scanner.skip_whitespace()
        start = scanner.pos
        soft_errors: list[ParseError] = []
        text = read_quoted(scanner, self.label, soft_errors)
        for error in soft_errors:
            scanner.report(error)
        try:
            types = SignatureReader(text).read_all()
        except SignatureError as exc:
            raise scanner.error(
                ErrorKind.SEMANTIC,
                f"{text!r} is not a valid signature: {exc.reason}",
                expected=self.label,
                start=start,
                end=scanner.pos,
            ) from None
        scanner.skip_whitespace()
        return text, types


class ObjectPathLexer(ValueParser):
    """A quoted D-Bus object path such as ``"/org/freedesktop/DBus"``."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(OBJECT_PATH)

    def scan(self, scanner: Scanner) -> Scalar:
        scanner.skip_whitespace()
        start = scanner.pos
        soft_errors: list[ParseError] = []
        text = read_quoted(scanner, self.label, soft_errors)
        for error in soft_errors:
            scanner.report(error)
        problem = object_path_problem(text)
        if problem is not None:
            raise scanner.error(
                ErrorKind.SEMANTIC,
                f"{text!r} is not a valid object path: {problem}",
                expected=self.label,
                start=start,
                end=scanner.pos,
            )
        scanner.skip_whitespace()
        return Scalar(TypeCode.OBJECT_PATH, text)


class UnsupportedLexer(ValueParser):
    """File descriptors have no literal form; always fails."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(FD)

    def scan(self, scanner: Scanner) -> Scalar:
        raise scanner.error(
            ErrorKind.UNSUPPORTED,
            "cannot parse file descriptors",
            expected=self.label,
        )


def leaf_lexer(code: TypeCode) -> ValueParser:
    """Return the leaf lexer for a primitive type code.

    ``TypeCode.VARIANT`` is not a leaf; it is handled by the compiler.
    """
    if code in INTEGER_RANGES:
        return IntegerLexer(code)
    factory = _LEAF_FACTORIES.get(code)
    if factory is None:
        raise KeyError(f"{code.name} has no leaf lexer")
    return factory()


_LEAF_FACTORIES: Final[dict[TypeCode, Callable[[], ValueParser]]] = {
    TypeCode.BOOL: BoolLexer,
    TypeCode.F64: FloatLexer,
    TypeCode.STR: StringLexer,
    TypeCode.SIGNATURE: SignatureLexer,
    TypeCode.OBJECT_PATH: ObjectPathLexer,
    TypeCode.FD: UnsupportedLexer,
}
