"""Signature-to-parser compiler.

``compile`` turns a ``Signature`` into a ``ValueParser`` by dispatching
once on the signature variant and recursing into constituent signatures.
Because the dispatch is one-to-one, a compiled parser can only ever
produce values shaped like its signature.

Compiled parsers are immutable, so compilation is memoised per
``(signature, policy)``: a variant literal that names the same inner
signature on every keystroke reuses the same parser.

Usage
-----
::

    from dtui.parser import compile
    from dtui.signature import parse_signature

    parser = compile(parse_signature("a{sv}"))
    result = parser.parse('{"volume": "u"->5}')
    if result.ok:
        value = result.value
"""
from __future__ import annotations

import functools
import logging

from dtui.errors import CompileError
from dtui.lexer.leaves import leaf_lexer
from dtui.lexer.scanner import ValueParser
from dtui.parser.composite import (
    ArrayParser,
    DictParser,
    DuplicateKeyPolicy,
    StructureParser,
    VariantParser,
)
from dtui.signature.types import (
    ArraySignature,
    DictSignature,
    PrimitiveSignature,
    Signature,
    StructureSignature,
    TypeCode,
    UnitSignature,
)

logger = logging.getLogger(__name__)

_CACHE_SIZE = 512


def compile(  # noqa: A001
    signature: Signature,
    *,
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS,
) -> ValueParser:
    """Build the literal parser for ``signature``.

    Parameters
    ----------
    signature:
        Any signature except ``UNIT``.
    duplicate_keys:
        How dictionary literals treat repeated keys, at every depth.

    Returns
    -------
    ValueParser
        A reusable parser; call ``.parse(text)`` on every edit.

    Raises
    ------
    CompileError
        If the signature is (or contains) the unit signature.
    """
    return _compile_cached(signature, duplicate_keys)


@functools.lru_cache(maxsize=_CACHE_SIZE)
def _compile_cached(signature: Signature, duplicate_keys: DuplicateKeyPolicy) -> ValueParser:
    parser = _build(signature, duplicate_keys)
    logger.debug("Compiled %s for signature %r", type(parser).__name__, str(signature))
    return parser


def _build(signature: Signature, duplicate_keys: DuplicateKeyPolicy) -> ValueParser:
    if isinstance(signature, UnitSignature):
        raise CompileError("Cannot build a parser for the unit signature")

    if isinstance(signature, PrimitiveSignature):
        if signature.code is TypeCode.VARIANT:
            return VariantParser(
                functools.partial(_compile_cached, duplicate_keys=duplicate_keys)
            )
        return leaf_lexer(signature.code)

    if isinstance(signature, ArraySignature):
        return ArrayParser(signature, _compile_cached(signature.element, duplicate_keys))

    if isinstance(signature, DictSignature):
        return DictParser(
            signature,
            _compile_cached(signature.key, duplicate_keys),
            _compile_cached(signature.value, duplicate_keys),
            duplicate_keys,
        )

    if isinstance(signature, StructureSignature):
        if not signature.fields:
            raise CompileError("Cannot build a parser for an empty structure")
        return StructureParser(
            signature,
            tuple(_compile_cached(f, duplicate_keys) for f in signature.fields),
        )

    raise CompileError(f"Not a signature: {signature!r}")
