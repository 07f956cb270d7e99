"""Unit tests for gsh.ast.serializer: dict, JSON and YAML dumps of parsed programs."""
from __future__ import annotations

import json

import pytest
import yaml

from gsh.ast.nodes import BlockStatement, FinallyClause, Program
from gsh.ast.serializer import AstSerializer
from gsh.grammar.tokens import Token, TokenType
from gsh.parser.parser import parse


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def serializer() -> AstSerializer:
    return AstSerializer()


def first_statement(serializer: AstSerializer, source: str) -> dict:
    return serializer.to_dict(parse(source))["statements"][0]


# ---------------------------------------------------------------------------
# Program envelope
# ---------------------------------------------------------------------------


class TestProgram:
    def test_empty_program(self, serializer: AstSerializer) -> None:
        data = serializer.to_dict(parse(""))
        assert data == {"kind": "Program", "line": 1, "column": 1, "statements": []}

    def test_every_node_has_header(self, serializer: AstSerializer) -> None:
        stmt = first_statement(serializer, "x = a + 1")
        for node in (stmt, stmt["value"], stmt["value"]["left"], stmt["value"]["right"]):
            assert {"kind", "line", "column"} <= node.keys()

    def test_positions_are_origin_tokens(self, serializer: AstSerializer) -> None:
        stmt = first_statement(serializer, "\n  x = a + 1")
        assert (stmt["line"], stmt["column"]) == (2, 3)
        assert (stmt["value"]["line"], stmt["value"]["column"]) == (2, 9)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


class TestExpressions:
    def test_binary(self, serializer: AstSerializer) -> None:
        value = first_statement(serializer, "x = 5 + 10")["value"]
        assert value["kind"] == "BinaryExpression"
        assert value["operator"] == "+"
        assert value["left"]["value"] == "5"
        assert value["right"]["value"] == "10"

    def test_pipe(self, serializer: AstSerializer) -> None:
        expr = first_statement(serializer, '"hi" | Writer')["expression"]
        assert expr["kind"] == "PipeExpression"
        assert expr["left"] == {"kind": "StringLiteral", "line": 1, "column": 1, "value": "hi", "template": False}
        assert expr["right"]["value"] == "Writer"

    def test_literals(self, serializer: AstSerializer) -> None:
        elements = first_statement(serializer, "x = [true, null, `t`]")["value"]["elements"]
        assert [e["kind"] for e in elements] == ["BooleanLiteral", "NullLiteral", "StringLiteral"]
        assert elements[0]["value"] is True
        assert elements[2]["template"] is True

    def test_call_member_index(self, serializer: AstSerializer) -> None:
        expr = first_statement(serializer, "fs.read(path)[0]")["expression"]
        assert expr["kind"] == "IndexExpression"
        call = expr["left"]
        assert call["kind"] == "CallExpression"
        assert call["function"]["kind"] == "MemberExpression"
        assert call["function"]["property"] == "read"
        assert [a["value"] for a in call["arguments"]] == ["path"]

    def test_object_pairs_keep_order(self, serializer: AstSerializer) -> None:
        pairs = first_statement(serializer, "x = {b: 1, a: 2}")["value"]["pairs"]
        assert list(pairs) == ["b", "a"]

    def test_unary(self, serializer: AstSerializer) -> None:
        value = first_statement(serializer, "x = -y")["value"]
        assert value["kind"] == "UnaryExpression"
        assert value["operator"] == "-"


# ---------------------------------------------------------------------------
# Statements and declarations
# ---------------------------------------------------------------------------


class TestStatements:
    def test_assignment_with_annotation(self, serializer: AstSerializer) -> None:
        stmt = first_statement(serializer, "n: number = 1")
        assert stmt["kind"] == "AssignmentStatement"
        assert stmt["name"] == "n"
        assert stmt["type_annotation"] == "number"

    def test_if_else_chain(self, serializer: AstSerializer) -> None:
        stmt = first_statement(serializer, "if (a) {\n} else if (b) {\n} else {\n}")
        assert stmt["alternative"]["kind"] == "IfStatement"
        assert stmt["alternative"]["alternative"]["kind"] == "BlockStatement"

    def test_for_of(self, serializer: AstSerializer) -> None:
        stmt = first_statement(serializer, "for (item of items) {\n  continue\n}")
        assert stmt["variable"] == "item"
        assert stmt["body"]["statements"][0]["kind"] == "ContinueStatement"

    def test_try_without_catch(self, serializer: AstSerializer) -> None:
        stmt = first_statement(serializer, "try {\n} finally {\n}")
        assert stmt["catch_clause"] is None
        assert stmt["finally_clause"]["kind"] == "FinallyClause"

    def test_return_without_value(self, serializer: AstSerializer) -> None:
        body = first_statement(serializer, "tool t() {\n  return\n}")["body"]
        assert body["statements"][0]["return_value"] is None

    def test_tool_declaration(self, serializer: AstSerializer) -> None:
        stmt = first_statement(serializer, "tool add(a: number, b): number {\n}")
        assert stmt["kind"] == "ToolDeclaration"
        assert stmt["parameters"] == [
            {"name": "a", "type_annotation": "number"},
            {"name": "b", "type_annotation": None},
        ]
        assert stmt["return_type"] == "number"

    def test_config_declaration(self, serializer: AstSerializer) -> None:
        stmt = first_statement(serializer, 'model claude {\n  provider: "anthropic"\n}')
        assert stmt["kind"] == "ModelDeclaration"
        assert stmt["name"] == "claude"
        assert stmt["config"]["provider"]["value"] == "anthropic"

    def test_import_and_export(self, serializer: AstSerializer) -> None:
        data = serializer.to_dict(parse('import { a, b } from "lib"\nexport x = 1'))
        imp, exp = data["statements"]
        assert imp["symbols"] == ["a", "b"]
        assert imp["path"] == "lib"
        assert exp["name"] == "x"
        assert exp["declaration"]["kind"] == "AssignmentStatement"

    def test_unknown_statement_kind_raises(self, serializer: AstSerializer) -> None:
        tok = Token(TokenType.KW_FINALLY, "finally", 1, 1)
        clause = FinallyClause(token=tok, block=BlockStatement(token=tok))
        program = Program(token=tok, statements=(clause,))  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            serializer.to_dict(program)


# ---------------------------------------------------------------------------
# Text formats
# ---------------------------------------------------------------------------


class TestTextFormats:
    def test_json_round_trips_to_dict(self, serializer: AstSerializer) -> None:
        program = parse('x = "café" | Writer')
        text = serializer.to_json(program)
        assert json.loads(text) == serializer.to_dict(program)
        assert "café" in text

    def test_json_indent(self, serializer: AstSerializer) -> None:
        text = serializer.to_json(parse("x = 1"), indent=4)
        assert '\n    "kind"' in text

    def test_yaml_round_trips_to_dict(self, serializer: AstSerializer) -> None:
        program = parse("agent A {\n  model: m\n}")
        assert yaml.safe_load(serializer.to_yaml(program)) == serializer.to_dict(program)

    def test_yaml_keeps_key_order(self, serializer: AstSerializer) -> None:
        text = serializer.to_yaml(parse(""))
        assert text.index("kind") < text.index("statements")
