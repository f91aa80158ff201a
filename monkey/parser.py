"""Parser for the Monkey language.

Statements are parsed by recursive descent. Expressions use Pratt
parsing: every token kind that can start an expression has a prefix
handler, and every token kind that can continue one has an infix handler
plus a binding precedence. `parse_expression` keeps folding infix
operators into the left operand while the next token binds tighter than
the precedence it was called with.

The parser does not stop at the first mistake. Each problem is recorded
in `errors` as a readable message, the broken subtree becomes `None`, and
parsing carries on so a single pass reports as many errors as it can.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List, Optional

from .ast import (
    Program, Statement, Expression, Identifier, IntegerLiteral, BooleanLiteral,
    StringLiteral, ArrayLiteral, HashLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression, IndexExpression,
    BlockStatement, LetStatement, ReturnStatement, ExpressionStatement,
)
from .errors import ParseError
from .lexer import Lexer
from .tokens import Token, TokenKind

INT64_MAX = 2 ** 63 - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -X or !X
    CALL = 7         # myFunction(X)
    INDEX = 8        # array[index]


PRECEDENCES = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
    TokenKind.LBRACKET: Precedence.INDEX,
}

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []

        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

        self.prefix_parse_fns: Dict[TokenKind, PrefixParseFn] = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.NUMBER: self.parse_integer_literal,
            TokenKind.STRING: self.parse_string_literal,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
            TokenKind.LBRACKET: self.parse_array_literal,
            TokenKind.LBRACE: self.parse_hash_literal,
        }
        self.infix_parse_fns: Dict[TokenKind, InfixParseFn] = {
            kind: self.parse_infix_expression
            for kind in (
                TokenKind.PLUS, TokenKind.MINUS, TokenKind.SLASH, TokenKind.ASTERISK,
                TokenKind.EQ, TokenKind.NOT_EQ, TokenKind.LT, TokenKind.GT,
            )
        }
        self.infix_parse_fns[TokenKind.LPAREN] = self.parse_call_expression
        self.infix_parse_fns[TokenKind.LBRACKET] = self.parse_index_expression

    # Token cursor

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.type == kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.type == kind

    def expect_peek(self, kind: TokenKind) -> bool:
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # Errors

    @staticmethod
    def _where(token: Token) -> str:
        return f"{token.line}:{token.column}"

    def peek_error(self, kind: TokenKind):
        tok = self.peek_token
        self.errors.append(
            f"expected next token to be {kind}, got {tok.type} {tok.value!r} instead at {self._where(tok)}"
        )

    def no_prefix_parse_fn_error(self, token: Token):
        self.errors.append(
            f"no prefix parse function for {token.type} {token.value!r} found at {self._where(token)}"
        )

    def synchronize(self):
        """Skip to the end of the current statement after a failed one."""
        while not (self.cur_token_is(TokenKind.SEMICOLON) or self.cur_token_is(TokenKind.EOF)):
            if self.peek_token_is(TokenKind.RBRACE):
                return
            self.next_token()

    # Statements

    def parse_program(self) -> Program:
        program = Program(statements=[])
        while not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            else:
                self.synchronize()
            self.next_token()
        return program

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        token = self.cur_token
        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = Identifier(self.cur_token.value, token=self.cur_token)
        if not self.expect_peek(TokenKind.ASSIGN):
            return None
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return LetStatement(name, value, token=token)

    def parse_return_statement(self) -> ReturnStatement:
        token = self.cur_token
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ReturnStatement(value, token=token)

    def parse_expression_statement(self) -> ExpressionStatement:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ExpressionStatement(expression, token=token)

    def parse_block_statement(self) -> BlockStatement:
        # called with cur_token on '{', returns with cur_token on '}'
        block = BlockStatement(statements=[], token=self.cur_token)
        self.next_token()
        while not self.cur_token_is(TokenKind.RBRACE) and not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            else:
                self.synchronize()
            self.next_token()
        if self.cur_token_is(TokenKind.EOF):
            self.errors.append(f"unterminated block starting at {self._where(block.token)}")
        return block

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token)
            return None
        left = prefix()

        while not self.peek_token_is(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token.value, token=self.cur_token)

    def parse_integer_literal(self) -> Optional[IntegerLiteral]:
        value = int(self.cur_token.value)
        if value > INT64_MAX:
            self.errors.append(
                f"could not parse {self.cur_token.value} as integer at {self._where(self.cur_token)}"
            )
            return None
        return IntegerLiteral(value, token=self.cur_token)

    def parse_string_literal(self) -> StringLiteral:
        return StringLiteral(self.cur_token.value, token=self.cur_token)

    def parse_boolean(self) -> BooleanLiteral:
        return BooleanLiteral(self.cur_token_is(TokenKind.TRUE), token=self.cur_token)

    def parse_prefix_expression(self) -> PrefixExpression:
        token = self.cur_token
        self.next_token()
        operand = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(token.value, operand, token=token)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(left, token.value, right, token=token)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Optional[IfExpression]:
        token = self.cur_token
        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()
        return IfExpression(condition, consequence, alternative, token=token)

    def parse_function_literal(self) -> Optional[FunctionLiteral]:
        token = self.cur_token
        if not self.expect_peek(TokenKind.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        body = self.parse_block_statement()
        return FunctionLiteral(parameters, body, token=token)

    def parse_function_parameters(self) -> Optional[List[Identifier]]:
        identifiers: List[Identifier] = []
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenKind.IDENT):
            return None
        identifiers.append(self.parse_identifier())
        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            identifiers.append(self.parse_identifier())

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Optional[CallExpression]:
        token = self.cur_token
        arguments = self.parse_expression_list(TokenKind.RPAREN)
        if arguments is None:
            return None
        return CallExpression(function, arguments, token=token)

    def parse_index_expression(self, left: Expression) -> Optional[IndexExpression]:
        token = self.cur_token
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenKind.RBRACKET):
            return None
        return IndexExpression(left, index, token=token)

    def parse_array_literal(self) -> Optional[ArrayLiteral]:
        token = self.cur_token
        elements = self.parse_expression_list(TokenKind.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(elements, token=token)

    def parse_expression_list(self, end: TokenKind) -> Optional[List[Expression]]:
        """Parse `expr, expr, ...` up to `end`; cur_token is the opening delimiter."""
        items: List[Expression] = []
        if self.peek_token_is(end):
            self.next_token()
            return items

        self.next_token()
        items.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            items.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(end):
            return None
        return items

    def parse_hash_literal(self) -> Optional[HashLiteral]:
        token = self.cur_token
        pairs = []
        if self.peek_token_is(TokenKind.RBRACE):
            self.next_token()
            return HashLiteral(pairs, token=token)

        # a comma must be followed by another pair, as in array and argument lists
        while True:
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)
            if not self.expect_peek(TokenKind.COLON):
                return None
            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            pairs.append((key, value))
            if not self.peek_token_is(TokenKind.COMMA):
                break
            self.next_token()

        if not self.expect_peek(TokenKind.RBRACE):
            return None
        return HashLiteral(pairs, token=token)


def parse_program(source: str, filename: str = '<input>') -> Program:
    """Parse Monkey source code into a Program AST.

    Raises `ParseError` carrying every collected message if the parser
    reported any syntax errors.
    """
    parser = Parser(Lexer(source, filename))
    program = parser.parse_program()
    if parser.errors:
        raise ParseError(parser.errors)
    return program
