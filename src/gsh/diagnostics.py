"""Diagnostic types shared by the gsh lexer and parser.

A single ``DiagnosticSink`` is created per parse and handed to both
stages, so lexical and syntactic problems end up in one ordered list.
Exact-text duplicates are dropped on insertion: error recovery can
revisit the same token more than once, and callers should see each
distinct problem only once.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto

logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    """Which stage of the front end produced a diagnostic."""

    LEX = auto()
    PARSE = auto()


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single lexical or syntactic error.

    Parameters
    ----------
    kind:
        The front-end stage that reported the problem.
    message:
        Full human-readable text, including the ``line``/``column``
        suffix.
    line:
        1-based line number of the offending token.
    column:
        1-based column number of the offending token.
    """

    kind: DiagnosticKind
    message: str
    line: int
    column: int

    def __str__(self) -> str:
        return self.message


@dataclass
class DiagnosticSink:
    """Ordered, de-duplicated collection of diagnostics for one parse."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    _seen: set[str] = field(default_factory=set, repr=False)

    def add(self, diagnostic: Diagnostic) -> bool:
        """Record ``diagnostic`` unless an identical message already exists.

        Returns
        -------
        bool
            True if the diagnostic was new and has been recorded.
        """
        if diagnostic.message in self._seen:
            return False
        self._seen.add(diagnostic.message)
        self.diagnostics.append(diagnostic)
        logger.debug("%s diagnostic: %s", diagnostic.kind.name, diagnostic.message)
        return True

    def messages(self, kind: DiagnosticKind | None = None) -> list[str]:
        """Return diagnostic messages in insertion order, optionally filtered."""
        return [d.message for d in self.diagnostics if kind is None or d.kind is kind]

    def in_source_order(self) -> list[Diagnostic]:
        """Return diagnostics ordered by source position, ties in insertion order."""
        return sorted(self.diagnostics, key=lambda d: (d.line, d.column))

    @property
    def has_errors(self) -> bool:
        """Return True if any diagnostic was recorded."""
        return bool(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)
