"""Unit tests for gsh.grammar.grammar: precedence table and EBNF reference."""
from __future__ import annotations

import pytest

from gsh.grammar.grammar import (
    FULL_GRAMMAR,
    GRAMMAR_CONTROL,
    GRAMMAR_DECLARATIONS,
    GRAMMAR_EXPRESSION,
    GRAMMAR_MODULES,
    GRAMMAR_PROGRAM,
    PRECEDENCES,
    Precedence,
    precedence_of,
)
from gsh.grammar.tokens import TokenType


class TestPrecedenceOrdering:
    def test_levels_are_strictly_increasing(self) -> None:
        ordered = [
            Precedence.LOWEST,
            Precedence.PIPE,
            Precedence.NULLISH,
            Precedence.OR,
            Precedence.AND,
            Precedence.EQUALS,
            Precedence.LESSGREATER,
            Precedence.SUM,
            Precedence.PRODUCT,
            Precedence.PREFIX,
            Precedence.CALL,
            Precedence.MEMBER,
        ]
        assert ordered == sorted(ordered)
        assert len(set(ordered)) == len(ordered)

    def test_pipe_binds_loosest(self) -> None:
        non_lowest = [p for p in PRECEDENCES.values() if p is not Precedence.LOWEST]
        assert min(non_lowest) is Precedence.PIPE

    def test_member_binds_tightest(self) -> None:
        assert max(PRECEDENCES.values()) is Precedence.MEMBER


class TestPrecedenceOf:
    @pytest.mark.parametrize(
        "token_type, expected",
        [
            (TokenType.OP_PIPE, Precedence.PIPE),
            (TokenType.OP_NULLISH, Precedence.NULLISH),
            (TokenType.OP_OR, Precedence.OR),
            (TokenType.OP_AND, Precedence.AND),
            (TokenType.OP_EQ, Precedence.EQUALS),
            (TokenType.OP_GTE, Precedence.LESSGREATER),
            (TokenType.OP_MINUS, Precedence.SUM),
            (TokenType.OP_PERCENT, Precedence.PRODUCT),
            (TokenType.LPAREN, Precedence.CALL),
            (TokenType.LBRACKET, Precedence.CALL),
            (TokenType.DOT, Precedence.MEMBER),
        ],
    )
    def test_known_operators(self, token_type: TokenType, expected: Precedence) -> None:
        assert precedence_of(token_type) is expected

    @pytest.mark.parametrize(
        "token_type",
        [TokenType.IDENT, TokenType.OP_BANG, TokenType.OP_QUESTION, TokenType.SEMICOLON, TokenType.EOF],
    )
    def test_non_infix_tokens_are_lowest(self, token_type: TokenType) -> None:
        assert precedence_of(token_type) is Precedence.LOWEST


class TestGrammarReference:
    def test_full_grammar_contains_every_section(self) -> None:
        for section in (
            GRAMMAR_PROGRAM,
            GRAMMAR_DECLARATIONS,
            GRAMMAR_CONTROL,
            GRAMMAR_MODULES,
            GRAMMAR_EXPRESSION,
        ):
            assert section in FULL_GRAMMAR

    @pytest.mark.parametrize("rule", ["program", "config_decl", "tool_decl", "try_stmt", "import_stmt"])
    def test_rules_are_defined(self, rule: str) -> None:
        lines = FULL_GRAMMAR.splitlines()
        assert any(line.startswith(rule) and "::=" in line for line in lines)
