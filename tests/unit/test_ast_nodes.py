"""Unit tests for gsh.ast.nodes: construction, immutability and rendering."""
from __future__ import annotations

import dataclasses

import pytest

from gsh.ast.nodes import (
    AgentDeclaration,
    ArrayLiteral,
    AssignmentStatement,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    BreakStatement,
    CallExpression,
    CatchClause,
    ExportStatement,
    ExpressionStatement,
    FinallyClause,
    Identifier,
    IfStatement,
    ImportStatement,
    IndexExpression,
    McpDeclaration,
    MemberExpression,
    NullLiteral,
    NumberLiteral,
    ObjectLiteral,
    PipeExpression,
    Program,
    ReturnStatement,
    StringLiteral,
    ToolDeclaration,
    ToolParameter,
    TryStatement,
    UnaryExpression,
    quote_string,
    quote_template,
)
from gsh.grammar.tokens import Token, TokenType
from gsh.lexer.lexer import ESCAPED_DOLLAR


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _tok(token_type: TokenType = TokenType.IDENT, literal: str = "", line: int = 1, column: int = 1) -> Token:
    return Token(token_type, literal, line, column)


def _ident(name: str) -> Identifier:
    return Identifier(token=_tok(TokenType.IDENT, name), value=name)


def _num(text: str) -> NumberLiteral:
    return NumberLiteral(token=_tok(TokenType.NUMBER, text), value=text)


def _str(value: str) -> StringLiteral:
    return StringLiteral(token=_tok(TokenType.STRING, value), value=value)


def _block(*statements) -> BlockStatement:
    return BlockStatement(token=_tok(TokenType.LBRACE, "{"), statements=tuple(statements))


def _assign(name: str, value) -> AssignmentStatement:
    return AssignmentStatement(
        token=_tok(TokenType.IDENT, name), name=_ident(name), type_annotation=None, value=value
    )


# ---------------------------------------------------------------------------
# Node basics
# ---------------------------------------------------------------------------


class TestNodeBasics:
    def test_token_literal_and_position(self) -> None:
        node = Identifier(token=_tok(TokenType.IDENT, "env", 4, 9), value="env")
        assert node.token_literal() == "env"
        assert (node.line, node.column) == (4, 9)

    def test_nodes_are_frozen(self) -> None:
        node = _ident("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.value = "y"  # type: ignore[misc]

    def test_config_declarations_are_frozen(self) -> None:
        decl = AgentDeclaration(token=_tok(TokenType.KW_AGENT, "agent"), name=_ident("A"), config={})
        with pytest.raises(dataclasses.FrozenInstanceError):
            decl.name = _ident("B")  # type: ignore[misc]

    def test_equal_trees_compare_equal(self) -> None:
        assert _assign("x", _num("1")) == _assign("x", _num("1"))

    def test_number_value(self) -> None:
        assert _num("42").number == 42
        assert _num("2.5").number == 2.5

    def test_string_template_flag(self) -> None:
        template = StringLiteral(token=_tok(TokenType.TEMPLATE_LITERAL, "x"), value="x")
        assert template.template
        assert not _str("x").template

    def test_try_requires_a_clause(self) -> None:
        with pytest.raises(ValueError):
            TryStatement(token=_tok(TokenType.KW_TRY, "try"), block=_block())

    def test_object_literal_order_follows_pairs(self) -> None:
        obj = ObjectLiteral(token=_tok(TokenType.LBRACE, "{"), pairs={"b": _num("1"), "a": _num("2")})
        assert obj.order == ("b", "a")

    def test_export_name(self) -> None:
        export = ExportStatement(token=_tok(TokenType.KW_EXPORT, "export"), declaration=_assign("limit", _num("3")))
        assert export.name == "limit"


# ---------------------------------------------------------------------------
# Expression rendering
# ---------------------------------------------------------------------------


class TestExpressionRendering:
    def test_literals(self) -> None:
        assert str(_num("3.14")) == "3.14"
        assert str(BooleanLiteral(token=_tok(), value=True)) == "true"
        assert str(BooleanLiteral(token=_tok(), value=False)) == "false"
        assert str(NullLiteral(token=_tok())) == "null"

    def test_binary_is_parenthesised(self) -> None:
        node = BinaryExpression(token=_tok(TokenType.OP_PLUS, "+"), left=_num("5"), operator="+", right=_num("10"))
        assert str(node) == "(5 + 10)"

    def test_unary(self) -> None:
        node = UnaryExpression(token=_tok(TokenType.OP_BANG, "!"), operator="!", right=_ident("ok"))
        assert str(node) == "(!ok)"

    def test_pipe(self) -> None:
        node = PipeExpression(token=_tok(TokenType.OP_PIPE, "|"), left=_str("hi"), right=_ident("Agent"))
        assert str(node) == '("hi" | Agent)'

    def test_call_member_index(self) -> None:
        member = MemberExpression(token=_tok(TokenType.DOT, "."), object=_ident("fs"), property=_ident("read"))
        call = CallExpression(token=_tok(TokenType.LPAREN, "("), function=member, arguments=(_str("a"), _num("1")))
        index = IndexExpression(token=_tok(TokenType.LBRACKET, "["), left=call, index=_num("0"))
        assert str(index) == 'fs.read("a", 1)[0]'

    def test_call_without_arguments(self) -> None:
        call = CallExpression(token=_tok(TokenType.LPAREN, "("), function=_ident("now"))
        assert str(call) == "now()"

    def test_array(self) -> None:
        arr = ArrayLiteral(token=_tok(TokenType.LBRACKET, "["), elements=(_num("1"), _num("2")))
        assert str(arr) == "[1, 2]"
        assert str(ArrayLiteral(token=_tok(TokenType.LBRACKET, "["))) == "[]"

    def test_object_quotes_keys_that_are_not_bare(self) -> None:
        obj = ObjectLiteral(
            token=_tok(TokenType.LBRACE, "{"),
            pairs={"name": _str("x"), "Content-Type": _str("json"), "model": _num("1")},
        )
        assert str(obj) == '{name: "x", "Content-Type": "json", "model": 1}'


class TestQuoting:
    def test_quote_string_escapes(self) -> None:
        assert quote_string('a"b\\c\nd\te') == '"a\\"b\\\\c\\nd\\te"'

    def test_quote_template_restores_escaped_dollar(self) -> None:
        assert quote_template("cost " + ESCAPED_DOLLAR + "5 `x`") == "`cost \\$5 \\`x\\``"

    def test_template_literal_renders_with_backticks(self) -> None:
        node = StringLiteral(token=_tok(TokenType.TEMPLATE_LITERAL, "hi ${name}"), value="hi ${name}")
        assert str(node) == "`hi ${name}`"


# ---------------------------------------------------------------------------
# Statement rendering
# ---------------------------------------------------------------------------


class TestStatementRendering:
    def test_assignment_with_annotation(self) -> None:
        stmt = AssignmentStatement(
            token=_tok(TokenType.IDENT, "n"), name=_ident("n"), type_annotation=_ident("number"), value=_num("1")
        )
        assert str(stmt) == "n: number = 1"

    def test_empty_block(self) -> None:
        assert str(_block()) == "{\n}"

    def test_block_indents_statements(self) -> None:
        assert str(_block(_assign("x", _num("1")))) == "{\n  x = 1\n}"

    def test_if_else(self) -> None:
        stmt = IfStatement(
            token=_tok(TokenType.KW_IF, "if"),
            condition=_ident("ok"),
            consequence=_block(_assign("x", _num("1"))),
            alternative=_block(),
        )
        assert str(stmt) == "if (ok) {\n  x = 1\n} else {\n}"

    def test_return_forms(self) -> None:
        assert str(ReturnStatement(token=_tok(TokenType.KW_RETURN, "return"))) == "return"
        assert str(ReturnStatement(token=_tok(TokenType.KW_RETURN, "return"), return_value=_num("1"))) == "return 1"

    def test_try_catch_finally(self) -> None:
        stmt = TryStatement(
            token=_tok(TokenType.KW_TRY, "try"),
            block=_block(BreakStatement(token=_tok(TokenType.KW_BREAK, "break"))),
            catch_clause=CatchClause(token=_tok(TokenType.KW_CATCH, "catch"), parameter=_ident("e"), block=_block()),
            finally_clause=FinallyClause(token=_tok(TokenType.KW_FINALLY, "finally"), block=_block()),
        )
        assert str(stmt) == "try {\n  break\n} catch (e) {\n} finally {\n}"

    def test_imports(self) -> None:
        plain = ImportStatement(token=_tok(TokenType.KW_IMPORT, "import"), path=_str("lib.gsh"))
        named = ImportStatement(token=_tok(TokenType.KW_IMPORT, "import"), path=_str("lib.gsh"), symbols=("a", "b"))
        assert str(plain) == 'import "lib.gsh"'
        assert str(named) == 'import { a, b } from "lib.gsh"'

    def test_config_declaration(self) -> None:
        decl = McpDeclaration(
            token=_tok(TokenType.KW_MCP, "mcp"),
            name=_ident("fs"),
            config={"command": _str("npx"), "args": ArrayLiteral(token=_tok(TokenType.LBRACKET, "["), elements=(_str("-y"),))},
        )
        assert str(decl) == 'mcp fs {\n  command: "npx"\n  args: ["-y"]\n}'

    def test_empty_config_declaration(self) -> None:
        decl = AgentDeclaration(token=_tok(TokenType.KW_AGENT, "agent"), name=_ident("A"), config={})
        assert str(decl) == "agent A {\n}"

    def test_tool_declaration(self) -> None:
        tool = ToolDeclaration(
            token=_tok(TokenType.KW_TOOL, "tool"),
            name=_ident("add"),
            parameters=(
                ToolParameter(token=_tok(TokenType.IDENT, "a"), name=_ident("a"), type_annotation=_ident("number")),
                ToolParameter(token=_tok(TokenType.IDENT, "b"), name=_ident("b")),
            ),
            return_type=_ident("number"),
            body=_block(ReturnStatement(token=_tok(TokenType.KW_RETURN, "return"), return_value=_ident("a"))),
        )
        assert str(tool) == "tool add(a: number, b): number {\n  return a\n}"

    def test_export(self) -> None:
        export = ExportStatement(token=_tok(TokenType.KW_EXPORT, "export"), declaration=_assign("x", _num("1")))
        assert str(export) == "export x = 1"

    def test_program_joins_statements_with_newlines(self) -> None:
        program = Program(
            token=_tok(TokenType.IDENT, "x"),
            statements=(_assign("x", _num("1")), ExpressionStatement(token=_tok(), expression=_ident("x"))),
        )
        assert str(program) == "x = 1\nx"

    def test_empty_program(self) -> None:
        assert str(Program(token=_tok(TokenType.EOF, ""))) == ""
