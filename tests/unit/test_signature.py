"""Unit tests for dtui.signature — signature model, reader and object paths."""
from __future__ import annotations

import pytest

from dtui.errors import SignatureError
from dtui.signature import (
    BOOL,
    I32,
    STR,
    U32,
    UNIT,
    VARIANT,
    ArraySignature,
    DictSignature,
    PrimitiveSignature,
    StructureSignature,
    TypeCode,
    is_valid_object_path,
    is_valid_signature,
    object_path_problem,
    parse_signature,
    parse_signature_list,
)


# ---------------------------------------------------------------------------
# TypeCode
# ---------------------------------------------------------------------------


class TestTypeCode:
    @pytest.mark.parametrize("char", list("ybnqiuxtdsgovh"))
    def test_every_code_char_round_trips(self, char: str) -> None:
        assert TypeCode(char).value == char

    def test_variant_is_not_basic(self) -> None:
        assert not TypeCode.VARIANT.is_basic

    @pytest.mark.parametrize("code", [c for c in TypeCode if c is not TypeCode.VARIANT])
    def test_other_codes_are_basic(self, code: TypeCode) -> None:
        assert code.is_basic

    def test_labels_are_readable(self) -> None:
        assert TypeCode.U32.label == "u32"
        assert TypeCode.OBJECT_PATH.label == "object path"


# ---------------------------------------------------------------------------
# Signature nodes
# ---------------------------------------------------------------------------


class TestSignatureNodes:
    def test_primitive_str(self) -> None:
        assert str(U32) == "u"

    def test_array_str(self) -> None:
        assert str(ArraySignature(ArraySignature(I32))) == "aai"

    def test_dict_str(self) -> None:
        assert str(DictSignature(STR, VARIANT)) == "a{sv}"

    def test_structure_str(self) -> None:
        sig = StructureSignature((STR, ArraySignature(StructureSignature((I32, I32)))))
        assert str(sig) == "(sa(ii))"

    def test_unit_str_is_empty(self) -> None:
        assert str(UNIT) == ""

    def test_nodes_are_hashable_and_compare_by_value(self) -> None:
        assert ArraySignature(I32) == ArraySignature(PrimitiveSignature(TypeCode.I32))
        assert len({ArraySignature(I32), ArraySignature(I32)}) == 1

    def test_nodes_are_frozen(self) -> None:
        sig = ArraySignature(I32)
        with pytest.raises((AttributeError, TypeError)):
            sig.element = STR  # type: ignore[misc]

    def test_labels(self) -> None:
        assert DictSignature(STR, U32).label == "dict of string to u32"
        assert ArraySignature(BOOL).label == "array of bool"
        assert StructureSignature((STR, U32)).label == "structure of 2 field(s)"


# ---------------------------------------------------------------------------
# parse_signature — valid input
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("text", [
    "y", "b", "n", "q", "i", "u", "x", "t", "d", "s", "g", "o", "v", "h",
    "ai", "aai", "as", "a{sv}", "a{oa{sa{sv}}}", "(si)", "(sa(ii))",
    "a(sv)", "((i))", "a{ys}", "a{bv}",
])
def test_parse_signature_round_trips_text(text: str) -> None:
    assert str(parse_signature(text)) == text


class TestParseSignature:
    def test_empty_text_is_unit(self) -> None:
        assert parse_signature("") is UNIT

    def test_dict(self) -> None:
        assert parse_signature("a{sv}") == DictSignature(STR, VARIANT)

    def test_array_of_dict_entries_is_a_dict_not_an_array(self) -> None:
        assert not isinstance(parse_signature("a{si}"), ArraySignature)

    def test_structure(self) -> None:
        assert parse_signature("(si)") == StructureSignature((STR, I32))

    def test_multiple_types_rejected(self) -> None:
        with pytest.raises(SignatureError, match="single complete type"):
            parse_signature("ss")

    def test_parse_signature_list(self) -> None:
        assert parse_signature_list("sa{sv}as") == (
            STR,
            DictSignature(STR, VARIANT),
            ArraySignature(STR),
        )

    def test_parse_signature_list_empty(self) -> None:
        assert parse_signature_list("") == ()

    def test_maximum_length_accepted(self) -> None:
        assert len(parse_signature_list("s" * 255)) == 255

    def test_maximum_nesting_accepted(self) -> None:
        text = "a" * 32 + "(" * 32 + "s" + ")" * 32
        assert str(parse_signature(text)) == text


# ---------------------------------------------------------------------------
# parse_signature — invalid input
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("text, reason", [
    ("k", "unknown type code 'k'"),
    ("a", "array is missing its element type"),
    ("()", "structure must have at least one field"),
    ("(s", "unterminated structure"),
    (")", "unbalanced ')'"),
    ("}", "unbalanced '}'"),
    ("{sv}", "only allowed as an array element"),
    ("(s{sv})", "only allowed as an array element"),
    ("a{vs}", "dict key must be a basic type"),
    ("a{(s)s}", "dict key must be a basic type"),
    ("a{ass}", "dict key must be a basic type"),
    ("a{s}", "exactly two types"),
    ("a{sss}", "exactly two types"),
    ("a{", "unterminated dict entry"),
    ("a{s", "exactly two types"),
    ("a{si", "unterminated dict entry"),
    ("a" * 33 + "s", "arrays nested deeper than 32"),
    ("(" * 33 + "s" + ")" * 33, "structures nested deeper than 32"),
    ("s" * 256, "exceeds 255 bytes"),
])
def test_invalid_signature_reason(text: str, reason: str) -> None:
    with pytest.raises(SignatureError) as exc_info:
        parse_signature_list(text)
    assert reason in exc_info.value.reason
    assert exc_info.value.signature == text


class TestSignatureError:
    def test_offset_points_at_problem(self) -> None:
        with pytest.raises(SignatureError) as exc_info:
            parse_signature("(sk)")
        assert exc_info.value.offset == 2

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_signature("z")

    def test_str_mentions_signature(self) -> None:
        with pytest.raises(SignatureError) as exc_info:
            parse_signature("z")
        assert "'z'" in str(exc_info.value)


class TestIsValidSignature:
    def test_valid(self) -> None:
        assert is_valid_signature("a{sv}")

    def test_empty_is_valid(self) -> None:
        assert is_valid_signature("")

    def test_several_types_are_valid(self) -> None:
        assert is_valid_signature("ss")

    def test_invalid(self) -> None:
        assert not is_valid_signature("a{vs}")


# ---------------------------------------------------------------------------
# Object paths
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("path", [
    "/",
    "/org",
    "/org/freedesktop/DBus",
    "/a_b/C9",
])
def test_valid_object_paths(path: str) -> None:
    assert is_valid_object_path(path)
    assert object_path_problem(path) is None


@pytest.mark.parametrize("path, problem", [
    ("", "must not be empty"),
    ("org", "must start with '/'"),
    ("//", "consecutive '/'"),
    ("/org//x", "consecutive '/'"),
    ("/org/", "must not end with '/'"),
    ("/org/free-desktop", "may only contain"),
    ("/org/é", "may only contain"),
])
def test_invalid_object_paths(path: str, problem: str) -> None:
    assert not is_valid_object_path(path)
    assert problem in (object_path_problem(path) or "")
