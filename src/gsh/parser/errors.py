"""Parse error types for the gsh parser.

``ParseError`` is used internally to unwind out of a failing construct
back to the nearest statement loop, which records it and resynchronises.
``ParseErrorCollection`` is what callers of ``gsh.parse`` see when the
source had any lexical or syntactic problem.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from gsh.diagnostics import Diagnostic


@dataclass(frozen=True)
class ParseError(Exception):
    """A single syntactic error carrying its diagnostic.

    Parameters
    ----------
    diagnostic:
        The diagnostic to record once the parser has unwound.
    """

    diagnostic: Diagnostic

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def line(self) -> int:
        return self.diagnostic.line

    @property
    def column(self) -> int:
        return self.diagnostic.column

    def __str__(self) -> str:
        return self.diagnostic.message

    # dataclass(frozen=True) doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))


@dataclass
class ParseErrorCollection(Exception):
    """Every diagnostic produced while parsing one source text.

    Parameters
    ----------
    diagnostics:
        Lexical and syntactic diagnostics in source order.
    """

    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    def __str__(self) -> str:
        if not self.diagnostics:
            return "ParseErrorCollection (no errors)"
        lines = [f"ParseErrorCollection ({len(self.diagnostics)} error(s)):"]
        for diagnostic in self.diagnostics:
            lines.append(f"  {diagnostic}")
        return "\n".join(lines)
