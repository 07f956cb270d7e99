"""gsh Parser module.

Exports the ``Parser`` class, the ``parse``/``parse_program`` convenience
functions, and parse error types.
"""
from __future__ import annotations

from gsh.parser.errors import ParseError, ParseErrorCollection
from gsh.parser.parser import Parser, describe, parse, parse_program

__all__ = [
    "Parser",
    "parse",
    "parse_program",
    "describe",
    "ParseError",
    "ParseErrorCollection",
]
