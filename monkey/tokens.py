"""Token definitions for the Monkey language.

Tokens are produced by the lexer and consumed by the parser. They are
built on `lark.Token`, so a token compares and prints as its literal text
while also carrying its kind (`type`) and the position where it starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import lark


class TokenKind(str, Enum):
    ILLEGAL = 'ILLEGAL'
    EOF = 'EOF'

    # Identifiers and literals
    IDENT = 'IDENT'
    NUMBER = 'NUMBER'
    STRING = 'STRING'

    # Operators
    ASSIGN = '='
    PLUS = '+'
    MINUS = '-'
    BANG = '!'
    ASTERISK = '*'
    SLASH = '/'
    LT = '<'
    GT = '>'
    EQ = '=='
    NOT_EQ = '!='

    # Delimiters
    COMMA = ','
    SEMICOLON = ';'
    COLON = ':'
    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'
    LBRACKET = '['
    RBRACKET = ']'

    # Keywords
    FUNCTION = 'FUNCTION'
    LET = 'LET'
    TRUE = 'TRUE'
    FALSE = 'FALSE'
    IF = 'IF'
    ELSE = 'ELSE'
    RETURN = 'RETURN'

    def __str__(self) -> str:
        return self.value


KEYWORDS = {
    'fn': TokenKind.FUNCTION,
    'let': TokenKind.LET,
    'true': TokenKind.TRUE,
    'false': TokenKind.FALSE,
    'if': TokenKind.IF,
    'else': TokenKind.ELSE,
    'return': TokenKind.RETURN,
}


def lookup_ident(ident: str) -> TokenKind:
    """Return the keyword kind for `ident`, or IDENT if it is not a keyword."""
    return KEYWORDS.get(ident, TokenKind.IDENT)


@dataclass(frozen=True)
class Position:
    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class Token(lark.Token):
    """A lexical token: kind, literal text and starting source position."""

    def __new__(cls, kind: TokenKind, literal: str, start_pos: Optional[int] = None,
                line: Optional[int] = None, column: Optional[int] = None,
                file: str = '<input>') -> 'Token':
        inst = super().__new__(cls, kind, literal, start_pos, line, column)
        inst.file = file
        return inst

    @property
    def kind(self) -> TokenKind:
        return self.type

    @property
    def literal(self) -> str:
        return self.value

    @property
    def position(self) -> Position:
        return Position(self.file, self.line, self.column)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
