"""dtui — typed literal parsing for an interactive D-Bus browser.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import dtui

    # Decode a signature discovered through introspection
    sig = dtui.parse_signature("a{sv}")

    # Compile a parser once, then re-run it on every edit
    parser = dtui.compile(sig)
    result = parser.parse('{"volume": "u"->5}')
    result.ok        # True
    result.value     # DictValue(...)

    # Parse in one step, raising on errors
    value = dtui.parse("(si)", '("5", 1)')

    # Render a value back to literal text
    dtui.format(value)   # '("5", 1)'

    dtui.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Union

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from dtui.introspection.nodes import Node
    from dtui.lexer.scanner import ValueParser
    from dtui.parser.composite import DuplicateKeyPolicy
    from dtui.signature.types import Signature
    from dtui.values.nodes import Value


def parse_signature(text: str) -> "Signature":
    """Decode D-Bus signature text holding at most one complete type.

    Raises
    ------
    dtui.errors.SignatureError
        If the text is not a valid single-type signature.
    """
    from dtui.signature.parser import parse_signature as _parse_signature

    return _parse_signature(text)


def compile(  # noqa: A001
    signature: Union["Signature", str],
    duplicate_keys: "DuplicateKeyPolicy | None" = None,
) -> "ValueParser":
    """Build the reusable literal parser for a signature.

    Parameters
    ----------
    signature:
        A ``Signature`` or its D-Bus text.
    duplicate_keys:
        Dictionary duplicate-key policy; last write wins by default.

    Raises
    ------
    dtui.errors.SignatureError
        If ``signature`` is text and invalid.
    dtui.errors.CompileError
        If the signature is the unit signature.
    """
    from dtui.parser.compiler import compile as _compile
    from dtui.parser.composite import DuplicateKeyPolicy

    if isinstance(signature, str):
        signature = parse_signature(signature)
    return _compile(signature, duplicate_keys=duplicate_keys or DuplicateKeyPolicy.LAST_WINS)


def parse(signature: Union["Signature", str], text: str) -> "Value":
    """Parse ``text`` as a literal of ``signature``.

    Raises
    ------
    dtui.errors.ParseErrorCollection
        If the literal does not parse.
    """
    return compile(signature).parse(text).unwrap()


def format(value: "Value", compact: bool = False) -> str:  # noqa: A001
    """Render a value as literal text that parses back to an equal value."""
    from dtui.formatter.formatter import format_value

    return format_value(value, compact=compact)


def read_introspection(text: str) -> "Node":
    """Parse a D-Bus introspection XML document.

    Raises
    ------
    dtui.errors.IntrospectionError
        If the document is malformed.
    """
    from dtui.introspection.reader import read_introspection as _read

    return _read(text)


__all__ = [
    "__version__",
    "parse_signature",
    "compile",
    "parse",
    "format",
    "read_introspection",
]
