"""gsh Pratt parser.

Converts the token stream of a ``Lexer`` into a ``Program`` AST.

Statements are parsed by recursive descent and expressions by a Pratt
(top-down operator precedence) loop driven by ``PRECEDENCES``.  The
lexer drops layout, so line structure is recovered from token
positions: statements must be separated by line breaks, a ``(`` or
``[`` that starts a new line does not continue the previous expression,
and ``return``/``throw`` only take an operand from their own line.

Error recovery
--------------
A failing construct raises ``ParseError``.  The innermost statement
loop (program or block) records it and synchronizes by skipping
tokens until it reaches a line break at the same brace depth, the
``}`` that closes the current block, or ``EOF``.  A single run can
therefore surface many independent errors, and ``parse_program`` never
raises.  The module-level ``parse`` raises ``ParseErrorCollection``
when anything was reported.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

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
from gsh.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink
from gsh.grammar.grammar import Precedence, precedence_of
from gsh.grammar.tokens import Token, TokenType
from gsh.lexer.lexer import Lexer
from gsh.parser.errors import ParseError, ParseErrorCollection

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

_CONFIG_DECLARATIONS: dict[TokenType, type] = {
    TokenType.KW_MCP: McpDeclaration,
    TokenType.KW_MODEL: ModelDeclaration,
    TokenType.KW_AGENT: AgentDeclaration,
    TokenType.KW_ACP: AcpDeclaration,
}

_BINARY_OPERATORS = frozenset({
    TokenType.OP_PLUS, TokenType.OP_MINUS, TokenType.OP_ASTERISK,
    TokenType.OP_SLASH, TokenType.OP_PERCENT,
    TokenType.OP_EQ, TokenType.OP_NOT_EQ,
    TokenType.OP_LT, TokenType.OP_GT, TokenType.OP_LTE, TokenType.OP_GTE,
    TokenType.OP_AND, TokenType.OP_OR, TokenType.OP_NULLISH,
})

# Tokens whose literal text is worth showing in a diagnostic.
_VALUE_TOKENS = frozenset({
    TokenType.IDENT, TokenType.NUMBER, TokenType.STRING,
    TokenType.TEMPLATE_LITERAL, TokenType.ILLEGAL,
})

_SEMICOLON_MESSAGE = "semicolons are not allowed as statement separators; use newlines instead"

# Deepest chain of nested expressions and blocks accepted before reporting an error.
_MAX_NESTING = 128


def describe(tok: Token) -> str:
    """Render ``tok`` for an error message, e.g. ``identifier 'x'`` or ``'('``."""
    if tok.type in _VALUE_TOKENS:
        return f"{tok.type.label} {tok.literal!r}"
    return tok.type.label


class Parser:
    """Pratt parser that produces a ``Program`` from a ``Lexer``.

    Parameters
    ----------
    lexer:
        Token source.  The parser pulls tokens lazily and shares the
        lexer's ``DiagnosticSink``, so lexical and syntactic diagnostics
        end up in one ordered list.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self.sink: DiagnosticSink = lexer.sink
        self._prev_token: Token | None = None
        self._depth = 0
        self._nesting = 0
        self._consumed = 0
        # Line on which each token ends; multi-line strings end below where they start.
        self._prev_end_line = 0
        self.cur_token: Token = lexer.next_token()
        self._cur_end_line = lexer.line
        self.peek_token: Token = lexer.next_token()
        self._peek_end_line = lexer.line

        self._prefix_parsers: dict[TokenType, Callable[[], Expression]] = {
            TokenType.IDENT: self._parse_identifier,
            TokenType.NUMBER: self._parse_number,
            TokenType.STRING: self._parse_string,
            TokenType.TEMPLATE_LITERAL: self._parse_string,
            TokenType.OP_BANG: self._parse_unary,
            TokenType.OP_MINUS: self._parse_unary,
            TokenType.LPAREN: self._parse_grouped,
            TokenType.LBRACKET: self._parse_array,
            TokenType.LBRACE: self._parse_object,
        }
        self._infix_parsers: dict[TokenType, Callable[[Expression], Expression]] = {
            op: self._parse_binary for op in _BINARY_OPERATORS
        }
        self._infix_parsers[TokenType.OP_PIPE] = self._parse_pipe
        self._infix_parsers[TokenType.LPAREN] = self._parse_call
        self._infix_parsers[TokenType.LBRACKET] = self._parse_index
        self._infix_parsers[TokenType.DOT] = self._parse_member

        self._statement_parsers: dict[TokenType, Callable[[], Statement]] = {
            TokenType.KW_MCP: self._parse_config_declaration,
            TokenType.KW_MODEL: self._parse_config_declaration,
            TokenType.KW_AGENT: self._parse_config_declaration,
            TokenType.KW_ACP: self._parse_config_declaration,
            TokenType.KW_TOOL: self._parse_tool_declaration,
            TokenType.KW_IF: self._parse_if,
            TokenType.KW_WHILE: self._parse_while,
            TokenType.KW_FOR: self._parse_for_of,
            TokenType.KW_BREAK: self._parse_break,
            TokenType.KW_CONTINUE: self._parse_continue,
            TokenType.KW_RETURN: self._parse_return,
            TokenType.KW_TRY: self._parse_try,
            TokenType.KW_THROW: self._parse_throw,
            TokenType.KW_IMPORT: self._parse_import,
            TokenType.KW_EXPORT: self._parse_export,
            TokenType.KW_GO: self._parse_reserved,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def errors(self) -> list[str]:
        """All lexical and syntactic diagnostics without duplicates.

        Ordered by source position.  The lexer runs one token ahead of the
        parser, so insertion order alone can list a lexical error before an
        earlier syntactic one.
        """
        return [d.message for d in self.sink.in_source_order()]

    def parse_program(self) -> Program:
        """Parse the whole token stream.

        Always returns a ``Program``; statements that failed to parse are
        omitted and their diagnostics are available through ``errors``.
        """
        first = self.cur_token
        statements = self._parse_statement_list(None)
        program = Program(token=first, statements=tuple(statements))
        logger.debug(
            "Parsed %d statement(s) with %d diagnostic(s)",
            len(program.statements),
            len(self.sink),
        )
        return program

    # ------------------------------------------------------------------
    # Navigation helpers
    # ------------------------------------------------------------------

    def _advance(self) -> Token:
        """Consume and return the current token."""
        tok = self.cur_token
        if tok.type is TokenType.LBRACE:
            self._depth += 1
        elif tok.type is TokenType.RBRACE:
            self._depth = max(0, self._depth - 1)
        self._prev_token = tok
        self._prev_end_line = self._cur_end_line
        self.cur_token = self.peek_token
        self._cur_end_line = self._peek_end_line
        self.peek_token = self._lexer.next_token()
        self._peek_end_line = self._lexer.line
        self._consumed += 1
        return tok

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types."""
        return self.cur_token.type in types

    def _match(self, *types: TokenType) -> Token | None:
        """Consume and return the current token if it matches; else None."""
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType) -> Token:
        """Consume the current token if it matches, else raise ``ParseError``."""
        if self._check(token_type):
            return self._advance()
        tok = self.cur_token
        raise self._error(
            f"expected next token to be {token_type.label}, got {describe(tok)} instead", tok
        )

    def _on_new_line(self) -> bool:
        """Return True if the current token starts below the end of the previous one."""
        return self._prev_token is None or self.cur_token.line > self._prev_end_line

    def _continues_line(self) -> bool:
        """Return True if an operand follows on the same line."""
        return not self._on_new_line() and not self._check(
            TokenType.EOF, TokenType.RBRACE, TokenType.SEMICOLON
        )

    # ------------------------------------------------------------------
    # Error handling
    # ------------------------------------------------------------------

    def _error(self, message: str, tok: Token) -> ParseError:
        return ParseError(
            Diagnostic(
                kind=DiagnosticKind.PARSE,
                message=f"{message} at line {tok.line}, column {tok.column}",
                line=tok.line,
                column=tok.column,
            )
        )

    def _unexpected(self, tok: Token) -> ParseError:
        if tok.type is TokenType.ILLEGAL:
            return self._error(f"unexpected token: {describe(tok)}", tok)
        return self._error(f"unexpected token {describe(tok)}", tok)

    def _record_error(self, error: ParseError) -> None:
        self.sink.add(error.diagnostic)

    @contextmanager
    def _nested(self, what: str) -> Iterator[None]:
        """Count one level of recursion, raising ``ParseError`` past ``_MAX_NESTING``."""
        if self._nesting >= _MAX_NESTING:
            raise self._error(f"{what} nested too deeply", self.cur_token)
        self._nesting += 1
        try:
            yield
        finally:
            self._nesting -= 1

    def _synchronize(self, depth: int, start: int) -> None:
        """Skip tokens until a safe point to resume statement parsing.

        Parameters
        ----------
        depth:
            Brace depth at which the failed statement started.
        start:
            Value of the consumed-token counter when it started.
        """
        if self._consumed == start and not (self._check(TokenType.RBRACE) and self._depth > 0):
            self._advance()
        while not self._check(TokenType.EOF):
            if self._depth < depth:
                return
            if self._depth == depth and (self._check(TokenType.RBRACE) or self._on_new_line()):
                return
            self._advance()

    # ------------------------------------------------------------------
    # Statement lists and blocks
    # ------------------------------------------------------------------

    def _parse_statement_list(self, terminator: TokenType | None) -> list[Statement]:
        """Parse statements until ``EOF`` or ``terminator`` (left unconsumed)."""
        statements: list[Statement] = []
        while not self._check(TokenType.EOF) and not (
            terminator is not None and self._check(terminator)
        ):
            if self._check(TokenType.SEMICOLON):
                self._record_error(self._error(_SEMICOLON_MESSAGE, self.cur_token))
                self._advance()
                continue
            depth, start = self._depth, self._consumed
            try:
                statements.append(self._parse_statement())
            except ParseError as exc:
                self._record_error(exc)
                self._synchronize(depth, start)
                continue
            self._check_statement_end()
        return statements

    def _check_statement_end(self) -> None:
        """Require a line break (or ``}``/``EOF``) after a statement."""
        tok = self.cur_token
        if tok.type is TokenType.SEMICOLON:
            self._record_error(self._error(_SEMICOLON_MESSAGE, tok))
            self._advance()
            return
        if tok.type in (TokenType.EOF, TokenType.RBRACE) or self._on_new_line():
            return
        if tok.type is TokenType.ILLEGAL:
            error = self._unexpected(tok)
        else:
            error = self._error(
                f"unexpected token {describe(tok)} on same line as previous statement; "
                "expected newline",
                tok,
            )
        self._record_error(error)
        self._synchronize(self._depth, self._consumed)

    def _parse_block(self) -> BlockStatement:
        """Parse ``'{' statement* '}'``."""
        with self._nested("block"):
            open_tok = self._expect(TokenType.LBRACE)
            statements = self._parse_statement_list(TokenType.RBRACE)
            if not self._check(TokenType.RBRACE):
                tok = self.cur_token
                raise self._error(f"expected '}}' to close block, got {describe(tok)}", tok)
            self._advance()
            return BlockStatement(token=open_tok, statements=tuple(statements))

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _parse_statement(self) -> Statement:
        parse_fn = self._statement_parsers.get(self.cur_token.type)
        if parse_fn is not None:
            return parse_fn()
        if self._check(TokenType.IDENT) and self.peek_token.type in (
            TokenType.OP_ASSIGN,
            TokenType.COLON,
        ):
            return self._parse_assignment()
        tok = self.cur_token
        return ExpressionStatement(token=tok, expression=self._parse_expression())

    def _parse_type_name(self, context: str) -> Identifier:
        tok = self.cur_token
        if tok.type is not TokenType.IDENT:
            raise self._error(f"expected {context}, got {describe(tok)}", tok)
        self._advance()
        return Identifier(token=tok, value=tok.literal)

    def _parse_assignment(self) -> AssignmentStatement:
        """Parse ``IDENT [':' IDENT] '=' expression``."""
        name_tok = self._advance()
        annotation: Identifier | None = None
        if self._match(TokenType.COLON):
            annotation = self._parse_type_name("type annotation after ':'")
        self._expect(TokenType.OP_ASSIGN)
        value = self._parse_expression()
        return AssignmentStatement(
            token=name_tok,
            name=Identifier(token=name_tok, value=name_tok.literal),
            type_annotation=annotation,
            value=value,
        )

    def _parse_if(self) -> IfStatement:
        if_tok = self._advance()
        self._expect(TokenType.LPAREN)
        condition = self._parse_expression()
        self._expect(TokenType.RPAREN)
        consequence = self._parse_block()
        alternative: IfStatement | BlockStatement | None = None
        if self._match(TokenType.KW_ELSE):
            if self._check(TokenType.KW_IF):
                with self._nested("block"):
                    alternative = self._parse_if()
            else:
                alternative = self._parse_block()
        return IfStatement(
            token=if_tok,
            condition=condition,
            consequence=consequence,
            alternative=alternative,
        )

    def _parse_while(self) -> WhileStatement:
        while_tok = self._advance()
        self._expect(TokenType.LPAREN)
        condition = self._parse_expression()
        self._expect(TokenType.RPAREN)
        return WhileStatement(token=while_tok, condition=condition, body=self._parse_block())

    def _parse_for_of(self) -> ForOfStatement:
        """Parse ``'for' '(' IDENT 'of' expression ')' block``."""
        for_tok = self._advance()
        self._expect(TokenType.LPAREN)
        var_tok = self._expect(TokenType.IDENT)
        self._expect(TokenType.KW_OF)
        iterable = self._parse_expression()
        self._expect(TokenType.RPAREN)
        return ForOfStatement(
            token=for_tok,
            variable=Identifier(token=var_tok, value=var_tok.literal),
            iterable=iterable,
            body=self._parse_block(),
        )

    def _parse_break(self) -> BreakStatement:
        return BreakStatement(token=self._advance())

    def _parse_continue(self) -> ContinueStatement:
        return ContinueStatement(token=self._advance())

    def _parse_return(self) -> ReturnStatement:
        return_tok = self._advance()
        value = self._parse_expression() if self._continues_line() else None
        return ReturnStatement(token=return_tok, return_value=value)

    def _parse_throw(self) -> ThrowStatement:
        throw_tok = self._advance()
        if not self._continues_line():
            raise self._error("throw statement requires an expression", throw_tok)
        return ThrowStatement(token=throw_tok, expression=self._parse_expression())

    def _parse_try(self) -> TryStatement:
        """Parse ``'try' block ['catch' '(' IDENT ')' block] ['finally' block]``."""
        try_tok = self._advance()
        block = self._parse_block()

        catch_clause: CatchClause | None = None
        if self._check(TokenType.KW_CATCH):
            catch_tok = self._advance()
            self._expect(TokenType.LPAREN)
            param_tok = self._expect(TokenType.IDENT)
            self._expect(TokenType.RPAREN)
            catch_clause = CatchClause(
                token=catch_tok,
                parameter=Identifier(token=param_tok, value=param_tok.literal),
                block=self._parse_block(),
            )

        finally_clause: FinallyClause | None = None
        if self._check(TokenType.KW_FINALLY):
            finally_tok = self._advance()
            finally_clause = FinallyClause(token=finally_tok, block=self._parse_block())

        if catch_clause is None and finally_clause is None:
            raise self._error(
                "try statement must have at least one 'catch' or 'finally' clause", try_tok
            )
        return TryStatement(
            token=try_tok,
            block=block,
            catch_clause=catch_clause,
            finally_clause=finally_clause,
        )

    def _parse_import(self) -> ImportStatement:
        """Parse ``import "path"`` or ``import { a, b } from "path"``."""
        import_tok = self._advance()
        symbols: list[str] = []
        if self._check(TokenType.LBRACE):
            open_tok = self._advance()
            while not self._check(TokenType.RBRACE):
                sym = self.cur_token
                if sym.type is not TokenType.IDENT:
                    raise self._error(f"expected imported symbol name, got {describe(sym)}", sym)
                self._advance()
                symbols.append(sym.literal)
                if not self._match(TokenType.COMMA):
                    break
            self._expect(TokenType.RBRACE)
            if not symbols:
                raise self._error("import list must name at least one symbol", open_tok)
            self._expect(TokenType.KW_FROM)
        path_tok = self.cur_token
        if path_tok.type is not TokenType.STRING:
            raise self._error(f"expected module path string, got {describe(path_tok)}", path_tok)
        self._advance()
        return ImportStatement(
            token=import_tok,
            path=StringLiteral(token=path_tok, value=path_tok.literal),
            symbols=tuple(symbols),
        )

    def _parse_export(self) -> ExportStatement:
        export_tok = self._advance()
        tok = self.cur_token
        if tok.type in _CONFIG_DECLARATIONS:
            declaration: Statement = self._parse_config_declaration()
        elif tok.type is TokenType.KW_TOOL:
            declaration = self._parse_tool_declaration()
        elif tok.type is TokenType.IDENT and self.peek_token.type in (
            TokenType.OP_ASSIGN,
            TokenType.COLON,
        ):
            declaration = self._parse_assignment()
        else:
            raise self._error(
                f"expected declaration or assignment after 'export', got {describe(tok)}", tok
            )
        return ExportStatement(token=export_tok, declaration=declaration)

    def _parse_reserved(self) -> Statement:
        tok = self.cur_token
        raise self._error(f"keyword {tok.literal!r} is reserved for future use", tok)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_config_declaration(self) -> Statement:
        """Parse ``('mcp'|'model'|'agent'|'acp') IDENT '{' (key ':' expr [','])* '}'``."""
        keyword_tok = self._advance()
        name_tok = self._expect(TokenType.IDENT)
        self._expect(TokenType.LBRACE)

        config: dict[str, Expression] = {}
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            key_tok = self.cur_token
            if not (key_tok.type is TokenType.IDENT or key_tok.is_keyword):
                raise self._error(
                    f"expected identifier for config key, got {describe(key_tok)}", key_tok
                )
            self._advance()
            self._expect(TokenType.COLON)
            config[key_tok.literal] = self._parse_expression()
            self._match(TokenType.COMMA)
        self._expect(TokenType.RBRACE)

        node_cls = _CONFIG_DECLARATIONS[keyword_tok.type]
        return node_cls(
            token=keyword_tok,
            name=Identifier(token=name_tok, value=name_tok.literal),
            config=config,
        )

    def _parse_tool_declaration(self) -> ToolDeclaration:
        """Parse ``'tool' IDENT '(' params ')' [':' IDENT] block``."""
        tool_tok = self._advance()
        name_tok = self._expect(TokenType.IDENT)
        self._expect(TokenType.LPAREN)

        parameters: list[ToolParameter] = []
        while not self._check(TokenType.RPAREN):
            param_tok = self.cur_token
            if param_tok.type is not TokenType.IDENT:
                raise self._error(f"expected parameter name, got {describe(param_tok)}", param_tok)
            self._advance()
            annotation: Identifier | None = None
            if self._match(TokenType.COLON):
                annotation = self._parse_type_name("type annotation after ':'")
            parameters.append(
                ToolParameter(
                    token=param_tok,
                    name=Identifier(token=param_tok, value=param_tok.literal),
                    type_annotation=annotation,
                )
            )
            if not self._match(TokenType.COMMA):
                break
        self._expect(TokenType.RPAREN)

        return_type: Identifier | None = None
        if self._match(TokenType.COLON):
            return_type = self._parse_type_name("return type after ':'")

        return ToolDeclaration(
            token=tool_tok,
            name=Identifier(token=name_tok, value=name_tok.literal),
            parameters=tuple(parameters),
            return_type=return_type,
            body=self._parse_block(),
        )

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self, precedence: Precedence = Precedence.LOWEST) -> Expression:
        """Pratt loop: one prefix production, then infixes that bind tighter."""
        with self._nested("expression"):
            prefix = self._prefix_parsers.get(self.cur_token.type)
            if prefix is None:
                raise self._unexpected(self.cur_token)
            left = prefix()

            while precedence < precedence_of(self.cur_token.type):
                # A call or index opening on a new line starts a new statement.
                if self._check(TokenType.LPAREN, TokenType.LBRACKET) and self._on_new_line():
                    break
                left = self._infix_parsers[self.cur_token.type](left)
            return left

    def _parse_expression_list(self, closing: TokenType) -> tuple[Expression, ...]:
        """Parse comma-separated expressions up to ``closing``; trailing comma allowed."""
        items: list[Expression] = []
        while not self._check(closing):
            items.append(self._parse_expression())
            if not self._match(TokenType.COMMA):
                break
        self._expect(closing)
        return tuple(items)

    # -- prefix --------------------------------------------------------

    def _parse_identifier(self) -> Expression:
        tok = self._advance()
        if tok.literal == "true":
            return BooleanLiteral(token=tok, value=True)
        if tok.literal == "false":
            return BooleanLiteral(token=tok, value=False)
        if tok.literal == "null":
            return NullLiteral(token=tok)
        return Identifier(token=tok, value=tok.literal)

    def _parse_number(self) -> Expression:
        tok = self._advance()
        return NumberLiteral(token=tok, value=tok.literal)

    def _parse_string(self) -> Expression:
        tok = self._advance()
        return StringLiteral(token=tok, value=tok.literal)

    def _parse_unary(self) -> Expression:
        op_tok = self._advance()
        right = self._parse_expression(Precedence.PREFIX)
        return UnaryExpression(token=op_tok, operator=op_tok.literal, right=right)

    def _parse_grouped(self) -> Expression:
        self._advance()
        expr = self._parse_expression()
        self._expect(TokenType.RPAREN)
        return expr

    def _parse_array(self) -> Expression:
        open_tok = self._advance()
        return ArrayLiteral(token=open_tok, elements=self._parse_expression_list(TokenType.RBRACKET))

    def _parse_object(self) -> Expression:
        """Parse ``'{' [key ':' expr {',' key ':' expr} [',']] '}'``.

        A repeated key keeps its first position and takes the last value.
        """
        open_tok = self._advance()
        pairs: dict[str, Expression] = {}
        while not self._check(TokenType.RBRACE):
            key_tok = self.cur_token
            if key_tok.type not in (TokenType.IDENT, TokenType.STRING):
                raise self._error(
                    f"expected object key (identifier or string), got {describe(key_tok)}",
                    key_tok,
                )
            self._advance()
            self._expect(TokenType.COLON)
            pairs[key_tok.literal] = self._parse_expression()
            if not self._match(TokenType.COMMA):
                break
        self._expect(TokenType.RBRACE)
        return ObjectLiteral(token=open_tok, pairs=pairs)

    # -- infix ---------------------------------------------------------

    def _parse_binary(self, left: Expression) -> Expression:
        op_tok = self._advance()
        right = self._parse_expression(precedence_of(op_tok.type))
        return BinaryExpression(token=op_tok, left=left, operator=op_tok.literal, right=right)

    def _parse_pipe(self, left: Expression) -> Expression:
        pipe_tok = self._advance()
        right = self._parse_expression(Precedence.PIPE)
        return PipeExpression(token=pipe_tok, left=left, right=right)

    def _parse_call(self, function: Expression) -> Expression:
        open_tok = self._advance()
        arguments = self._parse_expression_list(TokenType.RPAREN)
        return CallExpression(token=open_tok, function=function, arguments=arguments)

    def _parse_index(self, left: Expression) -> Expression:
        open_tok = self._advance()
        index = self._parse_expression()
        self._expect(TokenType.RBRACKET)
        return IndexExpression(token=open_tok, left=left, index=index)

    def _parse_member(self, obj: Expression) -> Expression:
        dot_tok = self._advance()
        prop_tok = self.cur_token
        # Keywords are valid property names: ``config.model``, ``result.from``.
        if not (prop_tok.type is TokenType.IDENT or prop_tok.is_keyword):
            raise self._error(
                f"expected next token to be {TokenType.IDENT.label}, got {describe(prop_tok)} instead",
                prop_tok,
            )
        self._advance()
        return MemberExpression(
            token=dot_tok,
            object=obj,
            property=Identifier(token=prop_tok, value=prop_tok.literal),
        )


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def parse_program(source: str) -> tuple[Program, list[Diagnostic]]:
    """Parse ``source`` without raising.

    Returns
    -------
    tuple[Program, list[Diagnostic]]
        The (possibly partial) program and every diagnostic, ordered by
        source position.
    """
    sink = DiagnosticSink()
    program = Parser(Lexer(source, sink)).parse_program()
    return program, sink.in_source_order()


def parse(source: str) -> Program:
    """Parse a gsh source string and return the root ``Program``.

    Raises
    ------
    ParseErrorCollection
        If the source produced any lexical or syntactic diagnostic.

    Example
    -------
    ::

        from gsh.parser import parse
        program = parse('''
            agent Writer {
              model: claude
            }
            summary = "draft" | Writer
        ''')
    """
    program, diagnostics = parse_program(source)
    if diagnostics:
        raise ParseErrorCollection(diagnostics)
    return program
