"""Formal grammar and operator precedence for the gsh scripting language.

The grammar is implemented by the hand-written Pratt parser in
``gsh.parser``; the EBNF constants below are reference documentation
(printed by ``gsh-script grammar``).  ``PRECEDENCES`` is the binding
power table the parser actually consumes.

Grammar notation used here:
    ``::=``     production rule
    ``|``       alternation
    ``( )``     grouping
    ``[ ]``     optional (zero or one)
    ``{ }``     zero or more repetitions
    ``NL``      a line break between two tokens
    ``IDENT``   identifier (Unicode letter or ``_`` then word chars)
"""
from __future__ import annotations

from enum import IntEnum

from gsh.grammar.tokens import TokenType

# ---------------------------------------------------------------------------
# Top-level
# ---------------------------------------------------------------------------

GRAMMAR_PROGRAM = """
program    ::= { statement NL } EOF
block      ::= '{' { statement NL } '}'

statement  ::= declaration
             | if_stmt | while_stmt | for_stmt | try_stmt
             | 'break' | 'continue'
             | 'return' [ expression ]
             | 'throw' expression
             | import_stmt | export_stmt
             | assignment
             | expression
"""

# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

GRAMMAR_DECLARATIONS = """
declaration ::= config_decl | tool_decl
config_decl ::= ( 'mcp' | 'model' | 'agent' | 'acp' ) IDENT
                '{' [ config_entry { [ ',' ] config_entry } [ ',' ] ] '}'
config_entry ::= ( IDENT | keyword ) ':' expression

tool_decl   ::= 'tool' IDENT '(' [ param { ',' param } ] ')' [ ':' IDENT ] block
param       ::= IDENT [ ':' IDENT ]

assignment  ::= IDENT [ ':' IDENT ] '=' expression
"""

# ---------------------------------------------------------------------------
# Control flow
# ---------------------------------------------------------------------------

GRAMMAR_CONTROL = """
if_stmt    ::= 'if' '(' expression ')' block [ 'else' ( if_stmt | block ) ]
while_stmt ::= 'while' '(' expression ')' block
for_stmt   ::= 'for' '(' IDENT 'of' expression ')' block
try_stmt   ::= 'try' block [ 'catch' '(' IDENT ')' block ] [ 'finally' block ]
"""

# ---------------------------------------------------------------------------
# Modules
# ---------------------------------------------------------------------------

GRAMMAR_MODULES = """
import_stmt ::= 'import' STRING
              | 'import' '{' IDENT { ',' IDENT } [ ',' ] '}' 'from' STRING
export_stmt ::= 'export' ( assignment | declaration )
"""

# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

GRAMMAR_EXPRESSION = """
expression ::= prefix { infix }

prefix     ::= IDENT | NUMBER | STRING | TEMPLATE
             | 'true' | 'false' | 'null'
             | ( '!' | '-' ) expression
             | '(' expression ')'
             | '[' [ expression { ',' expression } [ ',' ] ] ']'
             | '{' [ key ':' expression { ',' key ':' expression } [ ',' ] ] '}'
key        ::= IDENT | STRING

infix      ::= binary_op expression
             | '|' expression
             | '(' [ expression { ',' expression } [ ',' ] ] ')'   (same line)
             | '[' expression ']'                                 (same line)
             | '.' ( IDENT | keyword )

binary_op  ::= '??' | '||' | '&&' | '==' | '!=' | '<' | '>' | '<=' | '>='
             | '+' | '-' | '*' | '/' | '%'
"""

FULL_GRAMMAR = "\n".join(
    [
        GRAMMAR_PROGRAM,
        GRAMMAR_DECLARATIONS,
        GRAMMAR_CONTROL,
        GRAMMAR_MODULES,
        GRAMMAR_EXPRESSION,
    ]
)


# ---------------------------------------------------------------------------
# Operator precedence
# ---------------------------------------------------------------------------


class Precedence(IntEnum):
    """Binding power levels, loosest first."""

    LOWEST = 1
    PIPE = 2
    NULLISH = 3
    OR = 4
    AND = 5
    EQUALS = 6
    LESSGREATER = 7
    SUM = 8
    PRODUCT = 9
    PREFIX = 10
    CALL = 11
    MEMBER = 12


PRECEDENCES: dict[TokenType, Precedence] = {
    TokenType.OP_PIPE: Precedence.PIPE,
    TokenType.OP_NULLISH: Precedence.NULLISH,
    TokenType.OP_OR: Precedence.OR,
    TokenType.OP_AND: Precedence.AND,
    TokenType.OP_EQ: Precedence.EQUALS,
    TokenType.OP_NOT_EQ: Precedence.EQUALS,
    TokenType.OP_LT: Precedence.LESSGREATER,
    TokenType.OP_GT: Precedence.LESSGREATER,
    TokenType.OP_LTE: Precedence.LESSGREATER,
    TokenType.OP_GTE: Precedence.LESSGREATER,
    TokenType.OP_PLUS: Precedence.SUM,
    TokenType.OP_MINUS: Precedence.SUM,
    TokenType.OP_ASTERISK: Precedence.PRODUCT,
    TokenType.OP_SLASH: Precedence.PRODUCT,
    TokenType.OP_PERCENT: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.CALL,
    TokenType.DOT: Precedence.MEMBER,
}


def precedence_of(token_type: TokenType) -> Precedence:
    """Return the infix binding power of ``token_type`` (LOWEST if none)."""
    return PRECEDENCES.get(token_type, Precedence.LOWEST)
