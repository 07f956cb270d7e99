"""AST serialization for gsh.

Turns a ``Program`` tree into plain dict/list structures that map
naturally to JSON and YAML.  Every node dict carries a ``"kind"``
discriminator plus the ``line``/``column`` of its origin token.

Usage
-----
::

    from gsh.ast.serializer import AstSerializer

    serializer = AstSerializer()
    data = serializer.to_dict(program)
    json_text = serializer.to_json(program)
"""
from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import yaml

from gsh.ast.nodes import (
    AcpDeclaration,
    AgentDeclaration,
    ArrayLiteral,
    AssignmentStatement,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    BreakStatement,
    CallExpression,
    CatchClause,
    ContinueStatement,
    ExportStatement,
    Expression,
    ExpressionStatement,
    FinallyClause,
    ForOfStatement,
    Identifier,
    IfStatement,
    ImportStatement,
    IndexExpression,
    McpDeclaration,
    MemberExpression,
    ModelDeclaration,
    NullLiteral,
    NumberLiteral,
    ObjectLiteral,
    PipeExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
    ThrowStatement,
    ToolDeclaration,
    ToolParameter,
    TryStatement,
    UnaryExpression,
    WhileStatement,
)

_CONFIG_DECLARATIONS = (McpDeclaration, ModelDeclaration, AgentDeclaration, AcpDeclaration)


class AstSerializer:
    """Converts ``Program`` AST trees into JSON-compatible dicts."""

    def __init__(self) -> None:
        self._expression_handlers: dict[type, Callable[[Any], dict[str, object]]] = {
            Identifier: lambda n: {"value": n.value},
            NumberLiteral: lambda n: {"value": n.value},
            StringLiteral: lambda n: {"value": n.value, "template": n.template},
            BooleanLiteral: lambda n: {"value": n.value},
            NullLiteral: lambda n: {},
            BinaryExpression: lambda n: {
                "operator": n.operator,
                "left": self._expr_to_dict(n.left),
                "right": self._expr_to_dict(n.right),
            },
            UnaryExpression: lambda n: {
                "operator": n.operator,
                "right": self._expr_to_dict(n.right),
            },
            PipeExpression: lambda n: {
                "left": self._expr_to_dict(n.left),
                "right": self._expr_to_dict(n.right),
            },
            CallExpression: lambda n: {
                "function": self._expr_to_dict(n.function),
                "arguments": [self._expr_to_dict(a) for a in n.arguments],
            },
            MemberExpression: lambda n: {
                "object": self._expr_to_dict(n.object),
                "property": n.property.value,
            },
            IndexExpression: lambda n: {
                "left": self._expr_to_dict(n.left),
                "index": self._expr_to_dict(n.index),
            },
            ArrayLiteral: lambda n: {
                "elements": [self._expr_to_dict(e) for e in n.elements],
            },
            ObjectLiteral: lambda n: {
                "pairs": {k: self._expr_to_dict(v) for k, v in n.pairs.items()},
            },
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def to_dict(self, program: Program) -> dict[str, object]:
        """Serialize a ``Program`` to a JSON-compatible dict."""
        return {
            **self._header(program),
            "statements": [self._stmt_to_dict(s) for s in program.statements],
        }

    def to_json(self, program: Program, indent: int = 2) -> str:
        """Serialize a ``Program`` to a JSON string."""
        return json.dumps(self.to_dict(program), indent=indent, ensure_ascii=False)

    def to_yaml(self, program: Program) -> str:
        """Serialize a ``Program`` to a YAML string."""
        return yaml.safe_dump(
            self.to_dict(program),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _header(self, node: Any) -> dict[str, object]:
        return {"kind": type(node).__name__, "line": node.line, "column": node.column}

    def _name(self, ident: Identifier | None) -> str | None:
        return ident.value if ident is not None else None

    def _expr_to_dict(self, expr: Expression) -> dict[str, object]:
        handler = self._expression_handlers.get(type(expr))
        if handler is None:
            raise TypeError(f"Unknown expression kind: {type(expr).__name__}")
        return {**self._header(expr), **handler(expr)}

    def _block_to_dict(self, block: BlockStatement) -> dict[str, object]:
        return {
            **self._header(block),
            "statements": [self._stmt_to_dict(s) for s in block.statements],
        }

    def _param_to_dict(self, param: ToolParameter) -> dict[str, object]:
        return {
            "name": param.name.value,
            "type_annotation": self._name(param.type_annotation),
        }

    def _catch_to_dict(self, clause: CatchClause | None) -> dict[str, object] | None:
        if clause is None:
            return None
        return {
            **self._header(clause),
            "parameter": clause.parameter.value,
            "block": self._block_to_dict(clause.block),
        }

    def _finally_to_dict(self, clause: FinallyClause | None) -> dict[str, object] | None:
        if clause is None:
            return None
        return {**self._header(clause), "block": self._block_to_dict(clause.block)}

    def _stmt_to_dict(self, stmt: Statement) -> dict[str, object]:
        data = self._header(stmt)
        if isinstance(stmt, AssignmentStatement):
            data.update(
                name=stmt.name.value,
                type_annotation=self._name(stmt.type_annotation),
                value=self._expr_to_dict(stmt.value),
            )
        elif isinstance(stmt, ExpressionStatement):
            data["expression"] = self._expr_to_dict(stmt.expression)
        elif isinstance(stmt, BlockStatement):
            return self._block_to_dict(stmt)
        elif isinstance(stmt, IfStatement):
            alternative = stmt.alternative
            data.update(
                condition=self._expr_to_dict(stmt.condition),
                consequence=self._block_to_dict(stmt.consequence),
                alternative=self._stmt_to_dict(alternative) if alternative is not None else None,
            )
        elif isinstance(stmt, WhileStatement):
            data.update(
                condition=self._expr_to_dict(stmt.condition),
                body=self._block_to_dict(stmt.body),
            )
        elif isinstance(stmt, ForOfStatement):
            data.update(
                variable=stmt.variable.value,
                iterable=self._expr_to_dict(stmt.iterable),
                body=self._block_to_dict(stmt.body),
            )
        elif isinstance(stmt, (BreakStatement, ContinueStatement)):
            pass
        elif isinstance(stmt, ReturnStatement):
            value = stmt.return_value
            data["return_value"] = self._expr_to_dict(value) if value is not None else None
        elif isinstance(stmt, ThrowStatement):
            data["expression"] = self._expr_to_dict(stmt.expression)
        elif isinstance(stmt, TryStatement):
            data.update(
                block=self._block_to_dict(stmt.block),
                catch_clause=self._catch_to_dict(stmt.catch_clause),
                finally_clause=self._finally_to_dict(stmt.finally_clause),
            )
        elif isinstance(stmt, ImportStatement):
            data.update(path=stmt.path.value, symbols=list(stmt.symbols))
        elif isinstance(stmt, ExportStatement):
            data.update(name=stmt.name, declaration=self._stmt_to_dict(stmt.declaration))
        elif isinstance(stmt, _CONFIG_DECLARATIONS):
            data.update(
                name=stmt.name.value,
                config={k: self._expr_to_dict(v) for k, v in stmt.config.items()},
            )
        elif isinstance(stmt, ToolDeclaration):
            data.update(
                name=stmt.name.value,
                parameters=[self._param_to_dict(p) for p in stmt.parameters],
                return_type=self._name(stmt.return_type),
                body=self._block_to_dict(stmt.body),
            )
        else:
            raise TypeError(f"Unknown statement kind: {type(stmt).__name__}")
        return data
