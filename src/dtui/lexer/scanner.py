"""Character scanner and the parser abstraction shared by all literal parsers.

A ``Scanner`` is created for every parse attempt and walks the literal
text one character at a time, much like a classic hand-written lexer.  It
also collects *recovered* errors: problems that were reported but did not
stop the parse, such as an invalid ``\\u`` escape or a malformed string
that the string lexer skipped over.

``ValueParser`` is the uniform parser interface.  Leaf lexers and the
composite parsers built by ``dtui.parser.compile`` both implement
``scan``; callers only ever use ``parse``, which never raises on bad
input and returns a ``ParseResult`` instead.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Iterator

from dtui.errors import ErrorKind, ParseError, ParseErrorCollection, Span

if TYPE_CHECKING:
    from dtui.signature.types import Signature
    from dtui.values.nodes import Value

_DELIMITERS: Final[frozenset[str]] = frozenset("[]{}(),:")
_MAX_FOUND: Final[int] = 16

#: Deepest nesting of arrays, dictionaries, structures and variants in one
#: literal, matching the D-Bus limit on total message depth.
MAX_VALUE_DEPTH: Final[int] = 64


class Scanner:
    """Cursor over one literal, plus the recovered-error sink.

    Parameters
    ----------
    source:
        The complete literal text being parsed.
    """

    __slots__ = ("_source", "_pos", "_errors", "_depth")

    def __init__(self, source: str) -> None:
        self._source: str = source
        self._pos: int = 0
        self._errors: list[ParseError] = []
        self._depth: int = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def source(self) -> str:
        return self._source

    @property
    def pos(self) -> int:
        return self._pos

    def reset(self, pos: int) -> None:
        """Move the cursor back (or forward) to ``pos``."""
        self._pos = pos

    def at_end(self) -> bool:
        return self._pos >= len(self._source)

    def current(self) -> str:
        """Return the character at the cursor, or ``""`` at end of input."""
        return self._source[self._pos] if self._pos < len(self._source) else ""

    def peek(self, offset: int = 1) -> str:
        """Return the character at ``pos + offset`` without advancing."""
        idx = self._pos + offset
        return self._source[idx] if idx < len(self._source) else ""

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def startswith(self, text: str) -> bool:
        return self._source.startswith(text, self._pos)

    def skip_whitespace(self) -> None:
        """Skip any Unicode whitespace, including form feed and NBSP."""
        while self._pos < len(self._source) and self._source[self._pos].isspace():
            self._pos += 1

    def expect(self, text: str, context: str = "") -> None:
        """Consume ``text`` (after optional whitespace) or raise a structural error."""
        self.skip_whitespace()
        if not self.startswith(text):
            where = f" {context}" if context else ""
            raise self.error(ErrorKind.STRUCTURAL, f"expected {text!r}{where}", expected=repr(text))
        self._pos += len(text)
        self.skip_whitespace()

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Count one level of container or variant nesting for a ``with`` block.

        Raises
        ------
        ParseError
            If the literal nests deeper than ``MAX_VALUE_DEPTH``.
        """
        if self._depth >= MAX_VALUE_DEPTH:
            raise self.error(
                ErrorKind.STRUCTURAL,
                f"values nested deeper than {MAX_VALUE_DEPTH}",
            )
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    @property
    def errors(self) -> list[ParseError]:
        return self._errors

    def report(self, error: ParseError) -> None:
        """Record an error without stopping the parse."""
        self._errors.append(error)

    def found(self) -> str:
        """Return a short excerpt of the input at the cursor."""
        if self.at_end():
            return ""
        ch = self.current()
        if ch in _DELIMITERS or ch.isspace():
            return ch
        end = self._pos
        while (
            end < len(self._source)
            and end - self._pos < _MAX_FOUND
            and self._source[end] not in _DELIMITERS
            and not self._source[end].isspace()
        ):
            end += 1
        return self._source[self._pos : end]

    def error(
        self,
        kind: ErrorKind,
        message: str,
        *,
        expected: str = "",
        start: int | None = None,
        end: int | None = None,
    ) -> ParseError:
        """Build a ``ParseError`` located at the cursor (or at ``start..end``)."""
        span_start = self._pos if start is None else start
        span_end = span_start + len(self.found()) if end is None else end
        return ParseError(
            kind=kind,
            message=message,
            span=Span(start=span_start, end=span_end),
            expected=expected,
            found=self.found() if start is None else self._source[span_start:span_end],
        )


@dataclass(frozen=True)
class ParseResult:
    """Outcome of one parse attempt.

    Exactly one of ``value`` and ``errors`` is populated: a subtree is
    either fully valid or contributes only errors.
    """

    value: "Value | None"
    errors: tuple[ParseError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> "Value":
        """Return the value or raise the collected errors.

        Raises
        ------
        ParseErrorCollection
            If the parse failed.
        """
        if self.errors or self.value is None:
            raise ParseErrorCollection(list(self.errors))
        return self.value


class ValueParser(ABC):
    """A parser for literals of one fixed signature.

    Instances are immutable once built and safe to share between threads;
    all per-attempt state lives in the ``Scanner``.

    Parameters
    ----------
    signature:
        The signature every produced value conforms to.
    """

    __slots__ = ("_signature",)

    def __init__(self, signature: "Signature") -> None:
        self._signature = signature

    @property
    def signature(self) -> "Signature":
        return self._signature

    @property
    def label(self) -> str:
        """What this parser expects, for error messages."""
        return self._signature.label

    def parse(self, text: str) -> ParseResult:
        """Parse the whole of ``text``.

        Never raises for malformed input: every problem is returned in
        ``ParseResult.errors``, ordered by when it was found.
        """
        scanner = Scanner(text)
        value: Value | None = None
        try:
            value = self.scan(scanner)
            scanner.skip_whitespace()
            if not scanner.at_end():
                raise scanner.error(
                    ErrorKind.STRUCTURAL,
                    "unexpected trailing input",
                    expected="end of input",
                )
        except ParseError as exc:
            scanner.report(exc)
        if scanner.errors:
            return ParseResult(value=None, errors=tuple(scanner.errors))
        return ParseResult(value=value)

    @abstractmethod
    def scan(self, scanner: Scanner) -> "Value":
        """Consume one literal at the cursor and return its value.

        Leading and trailing whitespace around the literal is consumed.

        Raises
        ------
        ParseError
            If the literal is malformed; the enclosing subtree fails.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._signature)!r})"
