"""Composite parsers: arrays, dictionaries, structures and variants.

Each composite parser owns the parsers of its constituent signatures and
delegates to them for every element, so the parser tree mirrors the
signature tree exactly.  Composite failures are fatal for their subtree:
a missing delimiter or a wrong field count raises immediately, and only
errors already recovered by the string lexer remain reported alongside.
Arrays, dictionaries, structures and variants each count as one level of
value nesting; see ``dtui.lexer.scanner.MAX_VALUE_DEPTH``.

Grammar (whitespace allowed around every token)::

    array     ::= '[' [ value ( ',' value )* ] ']'
    dict      ::= '{' [ pair ( ',' pair )* ] '}'
    pair      ::= value ':' value
    structure ::= '(' value ( ',' value )* ')'
    variant   ::= sig_lit '->' value
"""
from __future__ import annotations

from dataclasses import replace
from enum import Enum, auto
from typing import Callable

from dtui.errors import ErrorKind, ParseError
from dtui.lexer.leaves import SignatureLexer
from dtui.lexer.scanner import Scanner, ValueParser
from dtui.signature.types import (
    VARIANT,
    ArraySignature,
    DictSignature,
    Signature,
    StructureSignature,
)
from dtui.values.nodes import (
    ArrayValue,
    DictValue,
    StructureValue,
    Value,
    VariantValue,
)


class DuplicateKeyPolicy(Enum):
    """What a dictionary literal does when a key appears twice.

    LAST_WINS
        The later pair silently replaces the earlier one.
    REJECT
        The repeated key is a structural error.
    """

    LAST_WINS = auto()
    REJECT = auto()


class ArrayParser(ValueParser):
    """``[v, v, ...]`` with every element parsed by one element parser."""

    __slots__ = ("_element",)

    def __init__(self, signature: ArraySignature, element: ValueParser) -> None:
        super().__init__(signature)
        self._element = element

    def scan(self, scanner: Scanner) -> ArrayValue:
        with scanner.nested():
            scanner.expect("[", f"to open {self.label}")
            items: list[Value] = []
            if scanner.current() != "]":
                while True:
                    items.append(self._element.scan(scanner))
                    if scanner.current() == ",":
                        scanner.advance()
                        continue
                    break
            scanner.expect("]", f"to close {self.label}")
        return ArrayValue(self._element.signature, tuple(items))


class DictParser(ValueParser):
    """``{k: v, ...}`` built by inserting pairs in encounter order."""

    __slots__ = ("_key", "_value", "_duplicates")

    def __init__(
        self,
        signature: DictSignature,
        key: ValueParser,
        value: ValueParser,
        duplicates: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS,
    ) -> None:
        super().__init__(signature)
        self._key = key
        self._value = value
        self._duplicates = duplicates

    def scan(self, scanner: Scanner) -> DictValue:
        with scanner.nested():
            scanner.expect("{", f"to open {self.label}")
            entries: dict[Value, Value] = {}
            if scanner.current() != "}":
                while True:
                    scanner.skip_whitespace()
                    key_start = scanner.pos
                    key = self._key.scan(scanner)
                    if key in entries and self._duplicates is DuplicateKeyPolicy.REJECT:
                        raise scanner.error(
                            ErrorKind.STRUCTURAL,
                            "duplicate dictionary key",
                            start=key_start,
                            end=scanner.pos,
                        )
                    scanner.expect(":", "after dictionary key")
                    entries[key] = self._value.scan(scanner)
                    if scanner.current() == ",":
                        scanner.advance()
                        continue
                    break
            scanner.expect("}", f"to close {self.label}")
        return DictValue(
            self._key.signature,
            self._value.signature,
            tuple(entries.items()),
        )


class StructureParser(ValueParser):
    """``(v1, ..., vn)`` with exactly one value per field."""

    __slots__ = ("_fields",)

    def __init__(self, signature: StructureSignature, fields: tuple[ValueParser, ...]) -> None:
        super().__init__(signature)
        self._fields = fields

    def scan(self, scanner: Scanner) -> StructureValue:
        arity = len(self._fields)
        with scanner.nested():
            scanner.expect("(", f"to open {self.label}")
            values: list[Value] = []
            for index, field in enumerate(self._fields):
                if index:
                    if scanner.current() == ")":
                        raise scanner.error(
                            ErrorKind.STRUCTURAL,
                            f"structure needs {arity} fields, found {index}",
                            expected="','",
                        )
                    scanner.expect(",", f"between structure fields {index} and {index + 1}")
                try:
                    values.append(field.scan(scanner))
                except ParseError as exc:
                    raise replace(exc, message=f"field {index + 1} of {arity}: {exc.message}") from None
            if scanner.current() == ",":
                raise scanner.error(
                    ErrorKind.STRUCTURAL,
                    f"structure takes exactly {arity} field(s)",
                    expected="')'",
                )
            scanner.expect(")", f"to close {self.label}")
        return StructureValue(tuple(values))


class VariantParser(ValueParser):
    """``"sig" -> value``: the inner parser is chosen by the literal itself.

    The embedded signature escapes the nesting limits of the outer one, so
    every variant counts as one level of value nesting on the scanner.

    Parameters
    ----------
    compile_inner:
        Builds the parser for the embedded signature while parsing.
    """

    __slots__ = ("_signature_lexer", "_compile_inner")

    def __init__(self, compile_inner: Callable[[Signature], ValueParser]) -> None:
        super().__init__(VARIANT)
        self._signature_lexer = SignatureLexer()
        self._compile_inner = compile_inner

    def scan(self, scanner: Scanner) -> VariantValue:
        scanner.skip_whitespace()
        with scanner.nested():
            start = scanner.pos
            text, types = self._signature_lexer.scan_types(scanner)
            if len(types) != 1:
                raise scanner.error(
                    ErrorKind.SEMANTIC,
                    f"variant signature {text!r} must be a single complete type",
                    expected="signature",
                    start=start,
                    end=scanner.pos,
                )
            scanner.expect("->", "after variant signature")
            inner = self._compile_inner(types[0])
            return VariantValue(inner.scan(scanner))
