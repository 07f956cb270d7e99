"""gsh-script: lexer, parser and tooling for the gsh agentic-shell scripting language.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import gsh

    # Parse a script into an AST (raises on any diagnostic)
    program = gsh.parse('''
        model claude {
          provider: "anthropic"
        }
        agent Writer {
          model: claude
        }
        draft = "an outline" | Writer
    ''')

    # Parse without raising: partial tree plus diagnostics
    program, diagnostics = gsh.parse_program('x = 5; y = 10')

    # Canonical source text
    canonical = gsh.format(program)

    gsh.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from gsh.ast.nodes import Program
    from gsh.diagnostics import Diagnostic
    from gsh.grammar.tokens import Token


def tokenize(source: str) -> list["Token"]:
    """Tokenize a gsh source string, ending with an ``EOF`` token."""
    from gsh.lexer.lexer import tokenize as _tokenize

    return _tokenize(source)


def parse(source: str) -> "Program":
    """Parse a gsh source string into a ``Program`` AST.

    Parameters
    ----------
    source:
        Complete gsh source text.

    Returns
    -------
    Program
        The parsed script.

    Raises
    ------
    gsh.parser.ParseErrorCollection
        If the source produced any lexical or syntactic diagnostic.
    """
    from gsh.parser.parser import parse as _parse

    return _parse(source)


def parse_program(source: str) -> tuple["Program", list["Diagnostic"]]:
    """Parse without raising and return the program plus its diagnostics."""
    from gsh.parser.parser import parse_program as _parse_program

    return _parse_program(source)


def format(program: "Program") -> str:  # noqa: A001
    """Render a ``Program`` as canonical gsh source ending with a newline.

    Parameters
    ----------
    program:
        The parsed script to format.

    Returns
    -------
    str
        Canonical source text; empty programs render as an empty string.
    """
    text = str(program)
    return text + "\n" if text else ""


__all__ = [
    "__version__",
    "tokenize",
    "parse",
    "parse_program",
    "format",
]
