"""Token definitions for the gsh scripting language.

Defines the complete token vocabulary used by the gsh lexer.  Every
keyword, operator, delimiter and literal kind is a member of the
``TokenType`` enum.  The member *value* is the human-readable label used
in diagnostics, so ``TokenType.LPAREN.value`` is ``"'('"`` and
``TokenType.KW_OF.value`` is ``"keyword 'of'"``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Exhaustive enumeration of all gsh token types."""

    # -----------------------------------------------------------------
    # Special
    # -----------------------------------------------------------------
    ILLEGAL = "illegal token"
    EOF = "end of input"
    COMMENT = "comment"  # reserved; the lexer skips comments

    # -----------------------------------------------------------------
    # Identifiers and literals
    # -----------------------------------------------------------------
    IDENT = "identifier"
    NUMBER = "number"
    STRING = "string"
    TEMPLATE_LITERAL = "template literal"

    # -----------------------------------------------------------------
    # Keywords: declarations
    # -----------------------------------------------------------------
    KW_MCP = "keyword 'mcp'"
    KW_MODEL = "keyword 'model'"
    KW_AGENT = "keyword 'agent'"
    KW_ACP = "keyword 'acp'"
    KW_TOOL = "keyword 'tool'"

    # -----------------------------------------------------------------
    # Keywords: control flow
    # -----------------------------------------------------------------
    KW_IF = "keyword 'if'"
    KW_ELSE = "keyword 'else'"
    KW_FOR = "keyword 'for'"
    KW_OF = "keyword 'of'"
    KW_WHILE = "keyword 'while'"
    KW_BREAK = "keyword 'break'"
    KW_CONTINUE = "keyword 'continue'"
    KW_TRY = "keyword 'try'"
    KW_CATCH = "keyword 'catch'"
    KW_FINALLY = "keyword 'finally'"
    KW_THROW = "keyword 'throw'"
    KW_RETURN = "keyword 'return'"

    # -----------------------------------------------------------------
    # Keywords: modules and reserved words
    # -----------------------------------------------------------------
    KW_IMPORT = "keyword 'import'"
    KW_EXPORT = "keyword 'export'"
    KW_FROM = "keyword 'from'"
    KW_GO = "keyword 'go'"

    # -----------------------------------------------------------------
    # Operators
    # -----------------------------------------------------------------
    OP_ASSIGN = "'='"
    OP_PLUS = "'+'"
    OP_MINUS = "'-'"
    OP_ASTERISK = "'*'"
    OP_SLASH = "'/'"
    OP_PERCENT = "'%'"
    OP_BANG = "'!'"
    OP_EQ = "'=='"
    OP_NOT_EQ = "'!='"
    OP_LT = "'<'"
    OP_GT = "'>'"
    OP_LTE = "'<='"
    OP_GTE = "'>='"
    OP_AND = "'&&'"
    OP_OR = "'||'"
    OP_PIPE = "'|'"
    OP_QUESTION = "'?'"
    OP_NULLISH = "'??'"

    # -----------------------------------------------------------------
    # Delimiters
    # -----------------------------------------------------------------
    COMMA = "','"
    COLON = "':'"
    SEMICOLON = "';'"
    DOT = "'.'"
    LPAREN = "'('"
    RPAREN = "')'"
    LBRACE = "'{'"
    RBRACE = "'}'"
    LBRACKET = "'['"
    RBRACKET = "']'"

    @property
    def label(self) -> str:
        """Human-readable label used in diagnostics."""
        return self.value


# Mapping from literal keyword text to its TokenType.
KEYWORDS: dict[str, TokenType] = {
    "mcp": TokenType.KW_MCP,
    "model": TokenType.KW_MODEL,
    "agent": TokenType.KW_AGENT,
    "acp": TokenType.KW_ACP,
    "tool": TokenType.KW_TOOL,
    "if": TokenType.KW_IF,
    "else": TokenType.KW_ELSE,
    "for": TokenType.KW_FOR,
    "of": TokenType.KW_OF,
    "while": TokenType.KW_WHILE,
    "break": TokenType.KW_BREAK,
    "continue": TokenType.KW_CONTINUE,
    "try": TokenType.KW_TRY,
    "catch": TokenType.KW_CATCH,
    "finally": TokenType.KW_FINALLY,
    "throw": TokenType.KW_THROW,
    "return": TokenType.KW_RETURN,
    "import": TokenType.KW_IMPORT,
    "export": TokenType.KW_EXPORT,
    "from": TokenType.KW_FROM,
    "go": TokenType.KW_GO,
}

_KEYWORD_TYPES: frozenset[TokenType] = frozenset(KEYWORDS.values())


def lookup_ident(text: str) -> TokenType:
    """Classify an identifier-shaped word as a keyword or ``IDENT``."""
    return KEYWORDS.get(text, TokenType.IDENT)


def is_keyword(token_type: TokenType) -> bool:
    """Return True if ``token_type`` is one of the reserved keywords."""
    return token_type in _KEYWORD_TYPES


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token with source-location metadata.

    Parameters
    ----------
    type:
        The ``TokenType`` variant for this token.
    literal:
        Decoded value for string kinds, surface text otherwise.
    line:
        1-based line number of the first character.
    column:
        1-based column (in code points) of the first character.
    """

    type: TokenType
    literal: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r}, {self.line}:{self.column})"

    @property
    def is_keyword(self) -> bool:
        """Return True if this token is any reserved keyword."""
        return self.type in _KEYWORD_TYPES
