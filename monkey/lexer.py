"""Lexer for the Monkey language.

The lexer walks the source one character at a time with a single
character of lookahead and never backtracks. `next_token` is called
repeatedly by the parser; once the end of input is reached it keeps
returning EOF tokens.
"""

from __future__ import annotations

from typing import Iterator

from .tokens import Token, TokenKind, lookup_ident

EOF_CHAR = '\0'

SINGLE_CHAR_TOKENS = {
    '+': TokenKind.PLUS,
    '-': TokenKind.MINUS,
    '*': TokenKind.ASTERISK,
    '/': TokenKind.SLASH,
    '<': TokenKind.LT,
    '>': TokenKind.GT,
    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    '{': TokenKind.LBRACE,
    '}': TokenKind.RBRACE,
    '[': TokenKind.LBRACKET,
    ']': TokenKind.RBRACKET,
    ';': TokenKind.SEMICOLON,
    ':': TokenKind.COLON,
    ',': TokenKind.COMMA,
}

# Two-character operators keyed by their first character.
DOUBLE_CHAR_TOKENS = {
    '=': ('==', TokenKind.EQ, TokenKind.ASSIGN),
    '!': ('!=', TokenKind.NOT_EQ, TokenKind.BANG),
}


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def is_letter(ch: str) -> bool:
    return 'a' <= ch <= 'z' or 'A' <= ch <= 'Z' or ch == '_'


def is_ident_char(ch: str) -> bool:
    return is_letter(ch) or is_digit(ch)


class Lexer:
    def __init__(self, source: str, filename: str = '<input>'):
        self.source = source
        self.filename = filename
        self.position = 0       # index of self.ch
        self.read_position = 0  # index of the lookahead character
        self.ch = EOF_CHAR
        self.line = 1
        self.column = 0
        self.read_char()

    def read_char(self):
        if self.ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        if self.read_position >= len(self.source):
            self.ch = EOF_CHAR
        else:
            self.ch = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def peek_char(self) -> str:
        if self.read_position >= len(self.source):
            return EOF_CHAR
        return self.source[self.read_position]

    def skip_whitespace(self):
        while self.ch in (' ', '\t', '\r', '\n'):
            self.read_char()

    def read_while(self, predicate) -> str:
        start = self.position
        while self.ch != EOF_CHAR and predicate(self.ch):
            self.read_char()
        return self.source[start:self.position]

    def make_token(self, kind: TokenKind, literal: str, start: int, line: int, column: int) -> Token:
        return Token(kind, literal, start, line, column, self.filename)

    def read_string(self, start: int, line: int, column: int) -> Token:
        """Read a string literal; the current character is the opening quote."""
        self.read_char()
        begin = self.position
        escaped = False
        while self.ch != EOF_CHAR:
            if self.ch == '"' and not escaped:
                literal = self.source[begin:self.position]
                self.read_char()
                return self.make_token(TokenKind.STRING, literal, start, line, column)
            escaped = self.ch == '\\' and not escaped
            self.read_char()
        # unterminated: hand the rest of the input to the parser as ILLEGAL
        return self.make_token(TokenKind.ILLEGAL, self.source[start:self.position], start, line, column)

    def next_token(self) -> Token:
        self.skip_whitespace()
        start, line, column = self.position, self.line, self.column
        ch = self.ch

        if is_digit(ch):
            return self.make_token(TokenKind.NUMBER, self.read_while(is_digit), start, line, column)
        if is_letter(ch):
            ident = self.read_while(is_ident_char)
            return self.make_token(lookup_ident(ident), ident, start, line, column)
        if ch == '"':
            return self.read_string(start, line, column)
        if ch in DOUBLE_CHAR_TOKENS:
            pair, double_kind, single_kind = DOUBLE_CHAR_TOKENS[ch]
            if ch + self.peek_char() == pair:
                self.read_char()
                self.read_char()
                return self.make_token(double_kind, pair, start, line, column)
            self.read_char()
            return self.make_token(single_kind, ch, start, line, column)
        if ch in SINGLE_CHAR_TOKENS:
            self.read_char()
            return self.make_token(SINGLE_CHAR_TOKENS[ch], ch, start, line, column)
        if ch == EOF_CHAR:
            return self.make_token(TokenKind.EOF, '', start, line, column)

        self.read_char()
        return self.make_token(TokenKind.ILLEGAL, ch, start, line, column)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenKind.EOF:
                return


def tokenize(source: str, filename: str = '<input>') -> Iterator[Token]:
    """Lazily yield the tokens of `source`, ending with a single EOF token."""
    return iter(Lexer(source, filename))
