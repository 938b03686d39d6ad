"""Method-call form: the consumer of the literal parser.

A ``MethodCallForm`` holds one ``ArgumentField`` per declared argument of
the selected method.  Each field compiles its parser once, from the
argument's signature, and re-parses its text on every edit so the UI can
show valid/invalid feedback immediately.

Submission only goes ahead when every input argument parses; the values
are then passed, in declared order, to a ``MethodCaller``.  The bus
connection lives behind that protocol and is not part of this package.
When the caller returns reply values they are rendered into the output
fields with the literal formatter.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from dtui.errors import ParseError, SubmissionBlocked
from dtui.formatter.formatter import LiteralFormatter
from dtui.introspection.nodes import Arg, Method
from dtui.lexer.scanner import ParseResult, ValueParser
from dtui.parser.compiler import compile
from dtui.parser.composite import DuplicateKeyPolicy
from dtui.values.nodes import Value

logger = logging.getLogger(__name__)


@runtime_checkable
class MethodCaller(Protocol):
    """Performs a method call on the bus.

    Returns the reply's values, or None when the reply is not available
    synchronously.
    """

    def call_method(
        self,
        service: str,
        object_path: str,
        interface: str,
        method: str,
        args: Sequence[Value],
    ) -> Sequence[Value] | None: ...


class ArgumentField:
    """One editable argument line with live parse feedback.

    Parameters
    ----------
    arg:
        The introspected argument.
    position:
        0-based position of the argument in the method declaration.
    duplicate_keys:
        Dictionary duplicate-key policy for this field's parser.
    """

    def __init__(
        self,
        arg: Arg,
        position: int,
        duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS,
    ) -> None:
        self.arg = arg
        self.position = position
        self.parser: ValueParser = compile(arg.signature, duplicate_keys=duplicate_keys)
        self._text = ""
        self._result = self.parser.parse(self._text)

    @property
    def is_input(self) -> bool:
        return self.arg.is_input

    @property
    def text(self) -> str:
        return self._text

    @property
    def result(self) -> ParseResult:
        """Outcome of parsing the current text."""
        return self._result

    @property
    def is_valid(self) -> bool:
        return self._result.ok

    @property
    def errors(self) -> tuple[ParseError, ...]:
        return self._result.errors

    def set_text(self, text: str) -> ParseResult:
        """Replace the field text and re-parse it."""
        self._text = text
        self._result = self.parser.parse(text)
        return self._result

    def __repr__(self) -> str:
        state = "valid" if self.is_valid else f"{len(self.errors)} error(s)"
        return f"ArgumentField({self.position}, {str(self.arg.signature)!r}, {state})"


class MethodCallForm:
    """Argument entry for one method of one object.

    Parameters
    ----------
    service:
        Bus name of the service that owns the object.
    object_path:
        Path of the object.
    interface:
        Interface that declares the method.
    method:
        The introspected method.
    duplicate_keys:
        Dictionary duplicate-key policy used by every field.
    """

    def __init__(
        self,
        service: str,
        object_path: str,
        interface: str,
        method: Method,
        duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS,
    ) -> None:
        self.service = service
        self.object_path = object_path
        self.interface = interface
        self.method = method
        self.fields: tuple[ArgumentField, ...] = tuple(
            ArgumentField(arg, position, duplicate_keys)
            for position, arg in enumerate(method.args)
        )
        self.called = False
        self._formatter = LiteralFormatter()
        logger.debug(
            "Built call form for %s.%s with %d argument field(s)",
            interface,
            method.name,
            len(self.fields),
        )

    @property
    def inputs(self) -> tuple[ArgumentField, ...]:
        return tuple(f for f in self.fields if f.is_input)

    @property
    def outputs(self) -> tuple[ArgumentField, ...]:
        return tuple(f for f in self.fields if not f.is_input)

    @property
    def is_ready(self) -> bool:
        """Return True if every input argument currently parses."""
        return all(f.is_valid for f in self.inputs)

    def edit(self, position: int, text: str) -> ParseResult:
        """Set the text of the argument at ``position``."""
        return self.fields[position].set_text(text)

    def arguments(self) -> tuple[Value, ...]:
        """Return the input values in declared order.

        Raises
        ------
        SubmissionBlocked
            If any input argument does not parse.
        """
        failures = {f.position: f.errors for f in self.inputs if not f.is_valid}
        if failures:
            raise SubmissionBlocked(failures)
        return tuple(f.result.unwrap() for f in self.inputs)

    def submit(self, caller: MethodCaller) -> Sequence[Value] | None:
        """Call the method through ``caller`` if every input parses.

        Reply values, when returned, are written into the output fields.

        Raises
        ------
        SubmissionBlocked
            If any input argument does not parse; ``caller`` is not invoked.
        """
        try:
            args = self.arguments()
        except SubmissionBlocked as exc:
            logger.debug("Call to %s.%s blocked: %s", self.interface, self.method.name, exc)
            raise
        logger.info(
            "Calling %s %s %s.%s with %d argument(s)",
            self.service,
            self.object_path,
            self.interface,
            self.method.name,
            len(args),
        )
        reply = caller.call_method(
            self.service, self.object_path, self.interface, self.method.name, args
        )
        self.called = True
        if reply is not None:
            self.show_reply(reply)
        return reply

    def show_reply(self, reply: Sequence[Value]) -> None:
        """Render reply values into the output fields, in order."""
        for field, value in zip(self.outputs, reply):
            field.set_text(self._formatter.format(value))
