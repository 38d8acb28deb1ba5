"""Parser for the Monkey language.

Statements are parsed by recursive descent; expressions use Pratt
(precedence-climbing) parsing. Each token type that can start an
expression has a *prefix* handler, and each token type that can continue
one has an *infix* handler registered together with its binding power.
``parse_expression`` keeps folding infix operators into the left-hand
expression while the next operator binds tighter than the caller's
precedence, which gives the usual precedence and left associativity
without one grammar rule per level.

The parser never raises on bad input. Handlers return ``None`` after
recording a diagnostic in ``Parser.errors``; the statement loop then
skips ahead to the next statement boundary and carries on, so a single
run can report several independent syntax errors.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from .ast import (
    ArrayLiteral, BlockStatement, BooleanLiteral, CallExpression, Expression,
    ExpressionStatement, FloatLiteral, FunctionLiteral, Identifier, IfExpression,
    IndexExpression, InfixExpression, IntegerLiteral, LetStatement,
    PrefixExpression, Program, ReturnStatement, Statement, StringLiteral,
    WhileExpression,
)
from .lexer import Lexer
from .tokens import Token, TokenType
from .types import INT64_MAX


class Precedence(IntEnum):
    LOWEST = 0
    LOGICAL = 1     # && ||
    EQUALS = 2      # == !=
    COMPARISON = 3  # < >
    SUM = 4         # + -
    PRODUCT = 5     # * /
    PREFIX = 6      # -x !x
    CALL = 7        # f(x)
    INDEX = 8       # a[i]


PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []

        self.prefix_parse_fns: Dict[TokenType, PrefixParseFn] = {}
        self.infix_parse_fns: Dict[TokenType, Tuple[InfixParseFn, Precedence]] = {}

        self.register_prefix(TokenType.IDENT, self.parse_identifier)
        self.register_prefix(TokenType.INT, self.parse_integer_literal)
        self.register_prefix(TokenType.FLOAT, self.parse_float_literal)
        self.register_prefix(TokenType.STRING, self.parse_string_literal)
        self.register_prefix(TokenType.TRUE, self.parse_boolean)
        self.register_prefix(TokenType.FALSE, self.parse_boolean)
        self.register_prefix(TokenType.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenType.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenType.IF, self.parse_if_expression)
        self.register_prefix(TokenType.WHILE, self.parse_while_expression)
        self.register_prefix(TokenType.FUNCTION, self.parse_function_literal)
        self.register_prefix(TokenType.LBRACKET, self.parse_array_literal)

        self.register_infix(TokenType.AND, self.parse_infix_expression, Precedence.LOGICAL)
        self.register_infix(TokenType.OR, self.parse_infix_expression, Precedence.LOGICAL)
        self.register_infix(TokenType.EQ, self.parse_infix_expression, Precedence.EQUALS)
        self.register_infix(TokenType.NOT_EQ, self.parse_infix_expression, Precedence.EQUALS)
        self.register_infix(TokenType.LT, self.parse_infix_expression, Precedence.COMPARISON)
        self.register_infix(TokenType.GT, self.parse_infix_expression, Precedence.COMPARISON)
        self.register_infix(TokenType.PLUS, self.parse_infix_expression, Precedence.SUM)
        self.register_infix(TokenType.MINUS, self.parse_infix_expression, Precedence.SUM)
        self.register_infix(TokenType.ASTERISK, self.parse_infix_expression, Precedence.PRODUCT)
        self.register_infix(TokenType.SLASH, self.parse_infix_expression, Precedence.PRODUCT)
        self.register_infix(TokenType.LPAREN, self.parse_call_expression, Precedence.CALL)
        self.register_infix(TokenType.LBRACKET, self.parse_index_expression, Precedence.INDEX)

        # Read two tokens so cur_token and peek_token are both set
        self.cur_token = self.lexer.next_token()
        self.peek_token = self.lexer.next_token()

    def register_prefix(self, token_type: TokenType, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[token_type] = fn

    def register_infix(self, token_type: TokenType, fn: InfixParseFn, precedence: Precedence) -> None:
        self.infix_parse_fns[token_type] = (fn, precedence)

    # Token cursor

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type: TokenType) -> bool:
        return self.cur_token.type == token_type

    def peek_token_is(self, token_type: TokenType) -> bool:
        return self.peek_token.type == token_type

    def expect_peek(self, token_type: TokenType) -> bool:
        """Advance if the next token has the given type, else record an error."""
        if self.peek_token_is(token_type):
            self.next_token()
            return True
        self.peek_error(token_type)
        return False

    def peek_precedence(self) -> Precedence:
        entry = self.infix_parse_fns.get(self.peek_token.type)
        return entry[1] if entry else Precedence.LOWEST

    # Diagnostics

    def error(self, token: Token, message: str) -> None:
        self.errors.append(f"{token.line}:{token.column}: {message}")

    def peek_error(self, token_type: TokenType) -> None:
        self.error(
            self.peek_token,
            f"expected next token to be {token_type}, got {self.peek_token.type} instead",
        )

    def no_prefix_parse_fn_error(self, token: Token) -> None:
        if token.type == TokenType.ILLEGAL:
            self.error(token, f"illegal token {token.literal!r}")
        else:
            self.error(token, f"no prefix parse function for {token.type} found")

    def synchronize(self, *boundaries: TokenType) -> None:
        """Skip tokens until the current one is a boundary or EOF."""
        while not self.cur_token_is(TokenType.EOF) and self.cur_token.type not in boundaries:
            self.next_token()

    # Statements

    def parse_program(self) -> Program:
        program = Program(self.cur_token, [])
        while not self.cur_token_is(TokenType.EOF):
            if self.cur_token_is(TokenType.SEMICOLON):
                self.next_token()
                continue
            statement = self.parse_statement()
            if statement is None:
                self.synchronize(TokenType.SEMICOLON)
            else:
                program.statements.append(statement)
            self.next_token()
        return program

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(TokenType.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        token = self.cur_token
        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)
        if not self.expect_peek(TokenType.ASSIGN):
            return None
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return LetStatement(token, name, value)

    def parse_return_statement(self) -> Optional[ReturnStatement]:
        token = self.cur_token
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ReturnStatement(token, value)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ExpressionStatement(token, expression)

    def parse_block_statement(self) -> BlockStatement:
        """Parse ``{ ... }`` starting at the opening brace.

        Bad statements inside the block are skipped up to the next ``;`` or
        the closing brace, so the block itself is always returned.
        """
        block = BlockStatement(self.cur_token, [])
        self.next_token()
        while not self.cur_token_is(TokenType.RBRACE):
            if self.cur_token_is(TokenType.EOF):
                self.error(self.cur_token, f"expected next token to be {TokenType.RBRACE}, got {TokenType.EOF} instead")
                break
            if self.cur_token_is(TokenType.SEMICOLON):
                self.next_token()
                continue
            statement = self.parse_statement()
            if statement is None:
                self.synchronize(TokenType.SEMICOLON, TokenType.RBRACE)
                if self.cur_token_is(TokenType.RBRACE):
                    break
            else:
                block.statements.append(statement)
            self.next_token()
        return block

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token)
            return None
        left = prefix()

        while left is not None and not self.peek_token_is(TokenType.SEMICOLON) \
                and precedence < self.peek_precedence():
            infix, _ = self.infix_parse_fns[self.peek_token.type]
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[Expression]:
        value = int(self.cur_token.literal)
        if value > INT64_MAX:
            self.error(self.cur_token, f"could not parse {self.cur_token.literal} as integer")
            return None
        return IntegerLiteral(self.cur_token, value)

    def parse_float_literal(self) -> Expression:
        return FloatLiteral(self.cur_token, float(self.cur_token.literal))

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token, self.cur_token_is(TokenType.TRUE))

    def parse_prefix_expression(self) -> Optional[Expression]:
        token = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        token = self.cur_token
        _, precedence = self.infix_parse_fns[token.type]
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_condition(self) -> Optional[Expression]:
        """Parse ``( expr )`` following an ``if`` or ``while`` keyword."""
        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None or not self.expect_peek(TokenType.RPAREN):
            return None
        return condition

    def parse_if_expression(self) -> Optional[Expression]:
        token = self.cur_token
        condition = self.parse_condition()
        if condition is None or not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()
        expression = IfExpression(token, condition, consequence)

        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            expression.alternative = self.parse_block_statement()
        return expression

    def parse_while_expression(self) -> Optional[Expression]:
        token = self.cur_token
        condition = self.parse_condition()
        if condition is None or not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()
        return WhileExpression(token, condition, body)

    def parse_function_literal(self) -> Optional[Expression]:
        token = self.cur_token
        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None or not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()
        return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self) -> Optional[List[Identifier]]:
        identifiers: List[Identifier] = []
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def parse_expression_list(self, end: TokenType) -> Optional[List[Expression]]:
        items: List[Expression] = []
        if self.peek_token_is(end):
            self.next_token()
            return items

        self.next_token()
        item = self.parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self.expect_peek(end):
            return None
        return items

    def parse_array_literal(self) -> Optional[Expression]:
        token = self.cur_token
        elements = self.parse_expression_list(TokenType.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(token, elements)

    def parse_call_expression(self, function: Expression) -> Optional[Expression]:
        token = self.cur_token
        arguments = self.parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return CallExpression(token, function, arguments)

    def parse_index_expression(self, left: Expression) -> Optional[Expression]:
        token = self.cur_token
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        if index is None or not self.expect_peek(TokenType.RBRACKET):
            return None
        return IndexExpression(token, left, index)


def parse_program(source: str) -> Tuple[Program, List[str]]:
    """Parse source text, returning the program and its diagnostics."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
