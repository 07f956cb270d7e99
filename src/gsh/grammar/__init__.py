"""gsh grammar module.

Exports token definitions, the precedence table and the EBNF reference.
"""
from __future__ import annotations

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
from gsh.grammar.tokens import KEYWORDS, Token, TokenType, is_keyword, lookup_ident

__all__ = [
    # Token types
    "TokenType",
    "Token",
    "KEYWORDS",
    "lookup_ident",
    "is_keyword",
    # Precedence
    "Precedence",
    "PRECEDENCES",
    "precedence_of",
    # Grammar constants
    "FULL_GRAMMAR",
    "GRAMMAR_PROGRAM",
    "GRAMMAR_DECLARATIONS",
    "GRAMMAR_CONTROL",
    "GRAMMAR_MODULES",
    "GRAMMAR_EXPRESSION",
]
