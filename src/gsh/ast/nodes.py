"""AST node definitions for the gsh scripting language.

Every node produced by the gsh parser is a frozen dataclass, so trees are
immutable once built and can be shared read-only.  Each node keeps the
``Token`` it originated from (for positions and ``token_literal``) plus
its children; child sequences are tuples.

``str(node)`` returns the canonical rendering.  Rendering is
deterministic and fully parenthesised, and re-parsing a rendered program
and rendering it again yields the same text.

The ``Expression``, ``Statement`` and ``Node`` unions cover the closed
set of node kinds; downstream code dispatches with ``isinstance``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from gsh.grammar.tokens import KEYWORDS, Token, TokenType
from gsh.lexer.lexer import ESCAPED_DOLLAR

_INDENT = "  "


def _indent(text: str) -> str:
    return "\n".join(_INDENT + line for line in text.split("\n"))


def _is_bare_key(key: str) -> bool:
    """Return True if ``key`` can be written without quotes as an object key."""
    if not key or key in KEYWORDS:
        return False
    if not (key[0] == "_" or key[0].isalpha()):
        return False
    return all(ch == "_" or ch.isalpha() or ch in "0123456789" for ch in key[1:])


def quote_string(value: str) -> str:
    """Render ``value`` as a double-quoted literal that lexes back to itself."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


def quote_template(value: str) -> str:
    """Render ``value`` as a backtick template literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("`", "\\`")
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
        .replace(ESCAPED_DOLLAR, "\\$")
    )
    return f"`{escaped}`"


class _NodeMixin:
    """Shared behaviour for every AST node."""

    __slots__ = ()

    token: Token

    def token_literal(self) -> str:
        """Return the literal text of the token this node originated from."""
        return self.token.literal

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column


# ---------------------------------------------------------------------------
# Expressions: leaves
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Identifier(_NodeMixin):
    """A bare name such as ``env`` or ``Writer``."""

    token: Token
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class NumberLiteral(_NodeMixin):
    """A numeric literal; ``value`` keeps the source text."""

    token: Token
    value: str

    @property
    def number(self) -> int | float:
        """The literal as a Python number (int unless it has a fraction)."""
        return float(self.value) if "." in self.value else int(self.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class StringLiteral(_NodeMixin):
    """A quoted, triple-quoted or template string with its decoded value."""

    token: Token
    value: str

    @property
    def template(self) -> bool:
        """True when the literal came from a backtick template."""
        return self.token.type is TokenType.TEMPLATE_LITERAL

    def __str__(self) -> str:
        return quote_template(self.value) if self.template else quote_string(self.value)


@dataclass(frozen=True, slots=True)
class BooleanLiteral(_NodeMixin):
    token: Token
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class NullLiteral(_NodeMixin):
    token: Token

    def __str__(self) -> str:
        return "null"


# ---------------------------------------------------------------------------
# Expressions: composite
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BinaryExpression(_NodeMixin):
    """``left OP right`` for arithmetic, comparison, logical and ``??``.

    Parameters
    ----------
    token:
        The operator token.
    left, right:
        Operand expressions.
    operator:
        Operator text, e.g. ``"+"`` or ``"??"``.
    """

    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True, slots=True)
class UnaryExpression(_NodeMixin):
    """Prefix ``!`` or ``-`` applied to ``right``."""

    token: Token
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True, slots=True)
class PipeExpression(_NodeMixin):
    """``left | right``: feed ``left`` into the agent or tool ``right``."""

    token: Token
    left: Expression
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} | {self.right})"


@dataclass(frozen=True, slots=True)
class CallExpression(_NodeMixin):
    token: Token  # the '(' token
    function: Expression
    arguments: tuple[Expression, ...] = ()

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass(frozen=True, slots=True)
class MemberExpression(_NodeMixin):
    token: Token  # the '.' token
    object: Expression
    property: Identifier

    def __str__(self) -> str:
        return f"{self.object}.{self.property}"


@dataclass(frozen=True, slots=True)
class IndexExpression(_NodeMixin):
    token: Token  # the '[' token
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"{self.left}[{self.index}]"


@dataclass(frozen=True, slots=True)
class ArrayLiteral(_NodeMixin):
    token: Token
    elements: tuple[Expression, ...] = ()

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass(frozen=True, slots=True)
class ObjectLiteral(_NodeMixin):
    """``{key: value, ...}`` with insertion order preserved.

    ``pairs`` is an insertion-ordered dict; ``order`` exposes its keys as
    a tuple, so the two can never disagree.
    """

    token: Token
    pairs: dict[str, Expression] = field(default_factory=dict, hash=False)

    @property
    def order(self) -> tuple[str, ...]:
        return tuple(self.pairs)

    def __str__(self) -> str:
        items = ", ".join(
            f"{key if _is_bare_key(key) else quote_string(key)}: {value}"
            for key, value in self.pairs.items()
        )
        return "{" + items + "}"


Expression = Union[
    Identifier,
    NumberLiteral,
    StringLiteral,
    BooleanLiteral,
    NullLiteral,
    BinaryExpression,
    UnaryExpression,
    PipeExpression,
    CallExpression,
    MemberExpression,
    IndexExpression,
    ArrayLiteral,
    ObjectLiteral,
]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BlockStatement(_NodeMixin):
    token: Token  # the '{' token
    statements: tuple[Statement, ...] = ()

    def __str__(self) -> str:
        if not self.statements:
            return "{\n}"
        body = "\n".join(_indent(str(s)) for s in self.statements)
        return "{\n" + body + "\n}"


@dataclass(frozen=True, slots=True)
class AssignmentStatement(_NodeMixin):
    """``name[: Type] = value``."""

    token: Token
    name: Identifier
    type_annotation: Identifier | None
    value: Expression

    def __str__(self) -> str:
        if self.type_annotation is not None:
            return f"{self.name}: {self.type_annotation} = {self.value}"
        return f"{self.name} = {self.value}"


@dataclass(frozen=True, slots=True)
class ExpressionStatement(_NodeMixin):
    token: Token
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True, slots=True)
class IfStatement(_NodeMixin):
    """``if (cond) {..}`` with an optional ``else`` block or ``else if`` chain."""

    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: IfStatement | BlockStatement | None = None

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text


@dataclass(frozen=True, slots=True)
class WhileStatement(_NodeMixin):
    token: Token
    condition: Expression
    body: BlockStatement

    def __str__(self) -> str:
        return f"while ({self.condition}) {self.body}"


@dataclass(frozen=True, slots=True)
class ForOfStatement(_NodeMixin):
    token: Token
    variable: Identifier
    iterable: Expression
    body: BlockStatement

    def __str__(self) -> str:
        return f"for ({self.variable} of {self.iterable}) {self.body}"


@dataclass(frozen=True, slots=True)
class BreakStatement(_NodeMixin):
    token: Token

    def __str__(self) -> str:
        return "break"


@dataclass(frozen=True, slots=True)
class ContinueStatement(_NodeMixin):
    token: Token

    def __str__(self) -> str:
        return "continue"


@dataclass(frozen=True, slots=True)
class ReturnStatement(_NodeMixin):
    token: Token
    return_value: Expression | None = None

    def __str__(self) -> str:
        if self.return_value is None:
            return "return"
        return f"return {self.return_value}"


@dataclass(frozen=True, slots=True)
class ThrowStatement(_NodeMixin):
    token: Token
    expression: Expression

    def __str__(self) -> str:
        return f"throw {self.expression}"


@dataclass(frozen=True, slots=True)
class CatchClause(_NodeMixin):
    token: Token
    parameter: Identifier
    block: BlockStatement

    def __str__(self) -> str:
        return f"catch ({self.parameter}) {self.block}"


@dataclass(frozen=True, slots=True)
class FinallyClause(_NodeMixin):
    token: Token
    block: BlockStatement

    def __str__(self) -> str:
        return f"finally {self.block}"


@dataclass(frozen=True, slots=True)
class TryStatement(_NodeMixin):
    """``try {..}`` followed by a catch clause, a finally clause, or both.

    Raises
    ------
    ValueError
        If constructed with neither clause.
    """

    token: Token
    block: BlockStatement
    catch_clause: CatchClause | None = None
    finally_clause: FinallyClause | None = None

    def __post_init__(self) -> None:
        if self.catch_clause is None and self.finally_clause is None:
            raise ValueError("try statement needs a catch clause, a finally clause, or both")

    def __str__(self) -> str:
        parts = [f"try {self.block}"]
        if self.catch_clause is not None:
            parts.append(str(self.catch_clause))
        if self.finally_clause is not None:
            parts.append(str(self.finally_clause))
        return " ".join(parts)


@dataclass(frozen=True, slots=True)
class ImportStatement(_NodeMixin):
    """``import "path"`` or ``import { a, b } from "path"``."""

    token: Token
    path: StringLiteral
    symbols: tuple[str, ...] = ()

    def __str__(self) -> str:
        if not self.symbols:
            return f"import {self.path}"
        return "import { " + ", ".join(self.symbols) + f" }} from {self.path}"


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _ConfigDeclaration(_NodeMixin):
    """Common shape of ``mcp``, ``model``, ``agent`` and ``acp`` declarations.

    Parameters
    ----------
    token:
        The declaring keyword token.
    name:
        The declared name.
    config:
        Insertion-ordered ``key -> expression`` mapping from the body.
    """

    keyword: ClassVar[str] = ""

    token: Token
    name: Identifier
    config: dict[str, Expression] = field(default_factory=dict, hash=False)

    def __str__(self) -> str:
        if not self.config:
            return f"{self.keyword} {self.name} {{\n}}"
        body = "\n".join(_indent(f"{key}: {value}") for key, value in self.config.items())
        return f"{self.keyword} {self.name} {{\n{body}\n}}"


@dataclass(frozen=True)
class McpDeclaration(_ConfigDeclaration):
    keyword: ClassVar[str] = "mcp"


@dataclass(frozen=True)
class ModelDeclaration(_ConfigDeclaration):
    keyword: ClassVar[str] = "model"


@dataclass(frozen=True)
class AgentDeclaration(_ConfigDeclaration):
    keyword: ClassVar[str] = "agent"


@dataclass(frozen=True)
class AcpDeclaration(_ConfigDeclaration):
    keyword: ClassVar[str] = "acp"


@dataclass(frozen=True, slots=True)
class ToolParameter(_NodeMixin):
    token: Token
    name: Identifier
    type_annotation: Identifier | None = None

    def __str__(self) -> str:
        if self.type_annotation is None:
            return str(self.name)
        return f"{self.name}: {self.type_annotation}"


@dataclass(frozen=True, slots=True)
class ToolDeclaration(_NodeMixin):
    """``tool name(p: T, ...): R { body }``."""

    token: Token
    name: Identifier
    parameters: tuple[ToolParameter, ...]
    return_type: Identifier | None
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        ret = f": {self.return_type}" if self.return_type is not None else ""
        return f"tool {self.name}({params}){ret} {self.body}"


Declaration = Union[
    McpDeclaration,
    ModelDeclaration,
    AgentDeclaration,
    AcpDeclaration,
    ToolDeclaration,
]


@dataclass(frozen=True, slots=True)
class ExportStatement(_NodeMixin):
    """``export`` applied to an assignment or a declaration."""

    token: Token
    declaration: AssignmentStatement | Declaration

    @property
    def name(self) -> str:
        """The name the export makes visible to importers."""
        return self.declaration.name.value

    def __str__(self) -> str:
        return f"export {self.declaration}"


Statement = Union[
    AssignmentStatement,
    ExpressionStatement,
    BlockStatement,
    IfStatement,
    WhileStatement,
    ForOfStatement,
    BreakStatement,
    ContinueStatement,
    ReturnStatement,
    ThrowStatement,
    TryStatement,
    ImportStatement,
    ExportStatement,
    McpDeclaration,
    ModelDeclaration,
    AgentDeclaration,
    AcpDeclaration,
    ToolDeclaration,
]


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Program(_NodeMixin):
    """Root of a parsed script.

    ``token`` is the first token of the source (``EOF`` for empty input).
    """

    token: Token
    statements: tuple[Statement, ...] = ()

    def __str__(self) -> str:
        return "\n".join(str(s) for s in self.statements)


Node = Union[
    Program,
    Expression,
    Statement,
    CatchClause,
    FinallyClause,
    ToolParameter,
]
