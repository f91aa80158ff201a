"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The parser builds these nodes once and never mutates them afterwards.
Every node renders a canonical, source-like string through `str()`;
infix and prefix expressions are fully parenthesised so the rendering
shows how the parser grouped operators, and every statement ends with a
semicolon so a rendered program can be lexed and parsed again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .tokens import Token


@dataclass
class Node:
    """Base class for all AST nodes."""

    def token_literal(self) -> str:
        token = getattr(self, 'token', None)
        return token.value if token is not None else ''


class Statement(Node):
    pass


class Expression(Node):
    pass


def _token_field():
    return field(default=None, repr=False, compare=False)


@dataclass
class Program(Node):
    statements: List[Statement]

    def token_literal(self) -> str:
        if not self.statements:
            return ''
        return self.statements[0].token_literal()

    def __str__(self) -> str:
        return '\n'.join(str(stmt) for stmt in self.statements)


@dataclass
class Identifier(Expression):
    name: str
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return self.name


@dataclass
class IntegerLiteral(Expression):
    value: int
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class BooleanLiteral(Expression):
    value: bool
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass
class StringLiteral(Expression):
    value: str
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class ArrayLiteral(Expression):
    elements: List[Expression]
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return '[' + ', '.join(str(el) for el in self.elements) + ']'


@dataclass
class HashLiteral(Expression):
    # (key, value) pairs in source order; keys are arbitrary expressions
    pairs: List[Tuple[Expression, Expression]]
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return '{' + ', '.join(f"{key}: {value}" for key, value in self.pairs) + '}'


@dataclass
class PrefixExpression(Expression):
    operator: str
    operand: Optional[Expression]
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return f"({self.operator}{self.operand})"


@dataclass
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Optional[Expression]
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class BlockStatement(Statement):
    statements: List[Statement]
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + ' '.join(str(stmt) for stmt in self.statements) + ' }'


@dataclass
class IfExpression(Expression):
    condition: Optional[Expression]
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    parameters: List[Identifier]
    body: BlockStatement
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral, usually
    arguments: List[Expression]
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass
class IndexExpression(Expression):
    left: Expression
    index: Optional[Expression]
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


@dataclass
class LetStatement(Statement):
    name: Identifier
    value: Optional[Expression]
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    value: Optional[Expression]
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass
class ExpressionStatement(Statement):
    expression: Optional[Expression]
    token: Optional[Token] = _token_field()

    def __str__(self) -> str:
        return f"{self.expression};"
