"""gsh AST module.

Exports all AST node types and the serializer for dumping AST trees to
JSON/YAML.
"""
from __future__ import annotations

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
    Declaration,
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
    Node,
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
from gsh.ast.serializer import AstSerializer

__all__ = [
    # Root and unions
    "Program",
    "Node",
    "Expression",
    "Statement",
    "Declaration",
    # Expression types
    "Identifier",
    "NumberLiteral",
    "StringLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "BinaryExpression",
    "UnaryExpression",
    "PipeExpression",
    "CallExpression",
    "MemberExpression",
    "IndexExpression",
    "ArrayLiteral",
    "ObjectLiteral",
    # Statement types
    "AssignmentStatement",
    "ExpressionStatement",
    "BlockStatement",
    "IfStatement",
    "WhileStatement",
    "ForOfStatement",
    "BreakStatement",
    "ContinueStatement",
    "ReturnStatement",
    "ThrowStatement",
    "TryStatement",
    "CatchClause",
    "FinallyClause",
    "ImportStatement",
    "ExportStatement",
    # Declarations
    "McpDeclaration",
    "ModelDeclaration",
    "AgentDeclaration",
    "AcpDeclaration",
    "ToolDeclaration",
    "ToolParameter",
    # Serializer
    "AstSerializer",
]
