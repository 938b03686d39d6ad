"""Error types shared by the signature reader, the literal parser and the
method-call form.

Parse errors carry a character span into the literal being edited so that
the UI can underline the offending region and tell the operator what was
expected there.  They are returned as values from ``ValueParser.parse``;
the exception base class only exists so the convenience helpers can raise
them as a ``ParseErrorCollection``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)`` within the input text.

    Parameters
    ----------
    start:
        0-based offset of the first character.
    end:
        0-based offset *past* the last character.
    """

    start: int
    end: int

    def __repr__(self) -> str:
        return f"Span({self.start}..{self.end})"


class ErrorKind(Enum):
    """Classification of a literal parse failure.

    LEXICAL
        Malformed token text for a leaf kind: bad digits, an unterminated
        string, a bad escape.
    RANGE
        A numeric literal outside the representable range of its width.
    STRUCTURAL
        Wrong element count, missing delimiter, unbalanced brackets or
        trailing input.
    SEMANTIC
        Well-formed quoted text that is not a valid signature or object
        path.
    UNSUPPORTED
        A type that has no textual literal form (file descriptors).
    """

    LEXICAL = auto()
    RANGE = auto()
    STRUCTURAL = auto()
    SEMANTIC = auto()
    UNSUPPORTED = auto()


@dataclass(frozen=True)
class ParseError(Exception):
    """A single located literal parse error.

    Parameters
    ----------
    kind:
        The error classification.
    message:
        Human-readable description of the problem.
    span:
        Location of the offending text.
    expected:
        Label of what the parser expected at this position, e.g. ``"u32"``.
    found:
        The text actually found at the position (empty at end of input).
    """

    kind: ErrorKind
    message: str
    span: Span
    expected: str = ""
    found: str = ""

    def __str__(self) -> str:
        text = f"{self.kind.name.lower()} error at {self.span.start}: {self.message}"
        if self.expected:
            text += f" (expected {self.expected}"
            text += f", found {self.found!r})" if self.found else ", found end of input)"
        return text

    # dataclass(frozen=True) doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))


@dataclass
class ParseErrorCollection(Exception):
    """Aggregates the ``ParseError`` instances of one parse attempt.

    Parameters
    ----------
    errors:
        Errors in the order they were encountered.
    """

    errors: list[ParseError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any errors were recorded."""
        return bool(self.errors)

    def __str__(self) -> str:
        if not self.errors:
            return "ParseErrorCollection (no errors)"
        lines = [f"ParseErrorCollection ({len(self.errors)} error(s)):"]
        for err in self.errors:
            lines.append(f"  {err}")
        return "\n".join(lines)


class SignatureError(ValueError):
    """Raised when D-Bus signature text violates the signature grammar.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    signature:
        The offending signature text.
    offset:
        0-based position within ``signature`` where the problem was found.
    """

    def __init__(self, message: str, signature: str, offset: int = 0) -> None:
        super().__init__(f"Invalid signature {signature!r} at {offset}: {message}")
        self.reason = message
        self.signature = signature
        self.offset = offset


class CompileError(ValueError):
    """Raised when a parser cannot be constructed for a signature."""


class IntrospectionError(ValueError):
    """Raised when an introspection document cannot be read."""


class SubmissionBlocked(Exception):
    """Raised when a method call is submitted while an argument is invalid.

    Parameters
    ----------
    failures:
        Mapping of argument position to the errors that argument reported.
    """

    def __init__(self, failures: dict[int, tuple[ParseError, ...]]) -> None:
        positions = ", ".join(str(p) for p in sorted(failures))
        super().__init__(f"Cannot submit call: argument(s) {positions} do not parse")
        self.failures = failures
