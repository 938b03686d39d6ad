"""Unit tests for dtui.grammar — reference grammar strings and examples."""
from __future__ import annotations

import pytest

from dtui.grammar import EXAMPLE_LITERALS, FULL_GRAMMAR, GRAMMAR_LITERAL, GRAMMAR_SIGNATURE
from dtui.parser import compile
from dtui.signature import parse_signature


class TestGrammarStrings:
    def test_full_grammar_contains_sections(self) -> None:
        assert GRAMMAR_LITERAL in FULL_GRAMMAR
        assert GRAMMAR_SIGNATURE in FULL_GRAMMAR

    @pytest.mark.parametrize("rule", ["array", "dict", "structure", "variant", "string"])
    def test_literal_rules_present(self, rule: str) -> None:
        assert f"\n{rule}" in GRAMMAR_LITERAL


@pytest.mark.parametrize("code, literal", sorted(EXAMPLE_LITERALS.items()))
def test_every_example_literal_parses(code: str, literal: str) -> None:
    assert compile(parse_signature(code)).parse(literal).ok
