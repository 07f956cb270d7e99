"""gsh Lexer: converts raw source text into a stream of tokens.

The lexer is a single-pass, pull-style scanner: each call to
``Lexer.next_token`` returns the next token, and once the input is
exhausted it keeps returning ``EOF``.  Line and column numbers are
1-based and count code points.

Whitespace (space, tab, CR, LF) and ``#`` comments are skipped, so the
stream never contains layout tokens; the parser recovers line structure
from token positions.

Three string forms are recognised:

    - ``"..."`` / ``'...'``: may span lines; escapes ``\\n \\t \\r \\\\
      \\" \\'`` and ``\\uXXXX``.  Unknown escapes are kept verbatim.
    - ``\"\"\"...\"\"\"`` / ``'''...'''``: raw, then dedented and trimmed.
    - backtick templates: escapes ``\\n \\t \\r \\\\ \\``` and ``\\uXXXX``;
      ``\\$`` becomes the ``ESCAPED_DOLLAR`` placeholder.

The lexer never raises.  Unterminated strings are reported to the shared
``DiagnosticSink`` and the partial token is still emitted.
"""
from __future__ import annotations

import string
from typing import Final

from gsh.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink
from gsh.grammar.tokens import Token, TokenType, lookup_ident

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Placeholder for an escaped ``$`` inside a template literal.  It cannot
#: occur in ordinary source text, so a later interpolation pass can tell
#: ``\$`` apart from a real ``${...}``.
ESCAPED_DOLLAR: Final[str] = "\x00ESCAPED_DOLLAR\x00"

_DIGITS: Final[frozenset[str]] = frozenset("0123456789")
_HEX_DIGITS: Final[frozenset[str]] = frozenset(string.hexdigits)
_WHITESPACE: Final[frozenset[str]] = frozenset(" \t\r\n")

_QUOTED_ESCAPES: Final[dict[str, str]] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

_TEMPLATE_ESCAPES: Final[dict[str, str]] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    "`": "`",
    "$": ESCAPED_DOLLAR,
}

_TWO_CHAR_OPERATORS: Final[dict[str, TokenType]] = {
    "==": TokenType.OP_EQ,
    "!=": TokenType.OP_NOT_EQ,
    "<=": TokenType.OP_LTE,
    ">=": TokenType.OP_GTE,
    "&&": TokenType.OP_AND,
    "||": TokenType.OP_OR,
    "??": TokenType.OP_NULLISH,
}

_SINGLE_CHAR_TOKENS: Final[dict[str, TokenType]] = {
    "=": TokenType.OP_ASSIGN,
    "+": TokenType.OP_PLUS,
    "-": TokenType.OP_MINUS,
    "*": TokenType.OP_ASTERISK,
    "/": TokenType.OP_SLASH,
    "%": TokenType.OP_PERCENT,
    "!": TokenType.OP_BANG,
    "<": TokenType.OP_LT,
    ">": TokenType.OP_GT,
    "|": TokenType.OP_PIPE,
    "?": TokenType.OP_QUESTION,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ".": TokenType.DOT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_ident_continue(ch: str) -> bool:
    return ch == "_" or ch.isalpha() or ch in _DIGITS


def dedent(text: str) -> str:
    """Strip the common leading indentation from ``text``.

    The minimum run of leading spaces/tabs (each counting as one column)
    is measured over lines that contain something other than whitespace.
    Whitespace-only lines are left untouched.  Outer whitespace is *not*
    trimmed here; the triple-quote scanner does that afterwards.
    """
    lines = text.split("\n")
    widths = [len(line) - len(line.lstrip(" \t")) for line in lines if line.strip()]
    if not widths:
        return text
    indent = min(widths)
    if indent <= 0:
        return text
    return "\n".join(line[indent:] if line.strip() else line for line in lines)


class Lexer:
    """Single-pass gsh lexer.

    Parameters
    ----------
    source:
        The complete gsh source text to tokenize.
    sink:
        Diagnostic sink to report lexical errors to.  A fresh one is
        created when omitted; the parser shares it so that both stages
        append to one list.
    """

    __slots__ = ("_source", "_pos", "_line", "_col", "sink")

    def __init__(self, source: str, sink: DiagnosticSink | None = None) -> None:
        self._source: str = source
        self._pos: int = 0
        self._line: int = 1
        self._col: int = 1
        self.sink: DiagnosticSink = sink if sink is not None else DiagnosticSink()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def errors(self) -> list[str]:
        """Lexical diagnostics reported so far, in order."""
        return self.sink.messages(DiagnosticKind.LEX)

    @property
    def line(self) -> int:
        """Line of the next unread character, i.e. where the last token ended."""
        return self._line

    def next_token(self) -> Token:
        """Scan and return the next token (``EOF`` forever once exhausted)."""
        self._skip_trivia()
        line, col = self._line, self._col
        ch = self._current()

        if ch == "":
            return Token(TokenType.EOF, "", line, col)

        if ch in ('"', "'"):
            if self._peek() == ch and self._peek(2) == ch:
                return Token(TokenType.STRING, self._read_triple_quoted(ch, line, col), line, col)
            return Token(TokenType.STRING, self._read_quoted(ch, line, col), line, col)

        if ch == "`":
            return Token(TokenType.TEMPLATE_LITERAL, self._read_template(line, col), line, col)

        if _is_ident_start(ch):
            word = self._read_identifier()
            return Token(lookup_ident(word), word, line, col)

        if ch in _DIGITS:
            return Token(TokenType.NUMBER, self._read_number(), line, col)

        pair = ch + self._peek()
        if pair in _TWO_CHAR_OPERATORS:
            self._advance()
            self._advance()
            return Token(_TWO_CHAR_OPERATORS[pair], pair, line, col)

        self._advance()
        # A lone '&' and any unknown character fall through to ILLEGAL.
        return Token(_SINGLE_CHAR_TOKENS.get(ch, TokenType.ILLEGAL), ch, line, col)

    def tokenize(self) -> list[Token]:
        """Drain the stream and return every token up to and including ``EOF``."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type is TokenType.EOF:
                return tokens

    # ------------------------------------------------------------------
    # Internal scanner
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or ``""`` at EOF."""
        return self._source[self._pos] if self._pos < len(self._source) else ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character at ``pos + offset`` without advancing."""
        idx = self._pos + offset
        return self._source[idx] if idx < len(self._source) else ""

    def _advance(self) -> str:
        """Consume and return the current character, updating line/col."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _skip_trivia(self) -> None:
        """Skip whitespace and ``#`` comments until neither applies."""
        while True:
            ch = self._current()
            if ch in _WHITESPACE:
                self._advance()
            elif ch == "#":
                while self._current() not in ("", "\n"):
                    self._advance()
            else:
                return

    def _report_unterminated(self, kind: str, line: int, col: int) -> None:
        message = (
            f"lexer error at line {self._line}, column {self._col}: "
            f"unterminated {kind} starting at line {line}, column {col}"
        )
        self.sink.add(Diagnostic(DiagnosticKind.LEX, message, line, col))

    # ------------------------------------------------------------------
    # Token-specific scanners
    # ------------------------------------------------------------------

    def _read_identifier(self) -> str:
        start = self._pos
        while _is_ident_continue(self._current()):
            self._advance()
        return self._source[start : self._pos]

    def _read_number(self) -> str:
        """Consume ``digits ['.' digits]``; the dot needs a digit after it."""
        start = self._pos
        while self._current() in _DIGITS:
            self._advance()
        if self._current() == "." and self._peek() in _DIGITS:
            self._advance()
            while self._current() in _DIGITS:
                self._advance()
        return self._source[start : self._pos]

    def _read_unicode_escape(self, buf: list[str]) -> None:
        """Decode ``\\uXXXX`` with the cursor on ``u``.

        Anything short of four hex digits is kept as literal text.
        """
        self._advance()  # u
        digits: list[str] = []
        while len(digits) < 4 and self._current() in _HEX_DIGITS:
            digits.append(self._advance())
        if len(digits) < 4:
            buf.append("\\u" + "".join(digits))
            return
        code_point = int("".join(digits), 16)
        if 0xD800 <= code_point <= 0xDFFF:
            code_point = 0xFFFD
        buf.append(chr(code_point))

    def _read_escaped(
        self,
        closing: str,
        escapes: dict[str, str],
        kind: str,
        line: int,
        col: int,
    ) -> str:
        """Shared loop for quoted strings and templates."""
        self._advance()  # opening delimiter
        buf: list[str] = []
        while True:
            ch = self._current()
            if ch == "":
                self._report_unterminated(kind, line, col)
                break
            if ch == closing:
                self._advance()
                break
            if ch != "\\":
                buf.append(self._advance())
                continue
            self._advance()  # backslash
            esc = self._current()
            if esc == "":
                buf.append("\\")
            elif esc in escapes:
                buf.append(escapes[esc])
                self._advance()
            elif esc == "u":
                self._read_unicode_escape(buf)
            else:
                buf.append("\\" + self._advance())
        return "".join(buf)

    def _read_quoted(self, quote: str, line: int, col: int) -> str:
        return self._read_escaped(quote, _QUOTED_ESCAPES, "string literal", line, col)

    def _read_template(self, line: int, col: int) -> str:
        return self._read_escaped("`", _TEMPLATE_ESCAPES, "template string", line, col)

    def _read_triple_quoted(self, quote: str, line: int, col: int) -> str:
        """Consume a raw triple-quoted string, then dedent and trim it."""
        delimiter = quote * 3
        for _ in range(3):
            self._advance()
        start = self._pos
        end = self._source.find(delimiter, start)
        if end == -1:
            while self._current() != "":
                self._advance()
            self._report_unterminated("triple-quoted string", line, col)
            body = self._source[start:]
        else:
            while self._pos < end + 3:
                self._advance()
            body = self._source[start:end]
        return dedent(body).strip()


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def tokenize(source: str) -> list[Token]:
    """Tokenize a gsh source string and return the complete token list.

    Lexical diagnostics are discarded; use ``Lexer`` directly (or
    ``gsh.parser.Parser``) when they matter.

    Example
    -------
    ::

        from gsh.lexer import tokenize
        tokens = tokenize('agent Writer { model: claude }')
    """
    return Lexer(source).tokenize()
