"""gsh Lexer module.

Exports the ``Lexer`` class and the ``tokenize`` convenience function.
"""
from __future__ import annotations

from gsh.lexer.lexer import ESCAPED_DOLLAR, Lexer, dedent, tokenize

__all__ = ["Lexer", "tokenize", "dedent", "ESCAPED_DOLLAR"]
