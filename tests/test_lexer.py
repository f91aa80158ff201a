from monkey.lexer import Lexer, tokenize
from monkey.tokens import Position, TokenKind


def kinds_and_literals(source):
    return [(tok.type, tok.value) for tok in tokenize(source)]


def test_next_token_full_program():
    source = '''let five = 5;
let add = fn(x, y) {
  x + y;
};
let result = add(five, 10);
!-/*5;
5 < 10 > 5;
if (5 < 10) { return true; } else { return false; }
10 == 10; 10 != 9;
"foobar" "foo bar"
[1, 2];
{"foo": "bar"}
'''
    expected = [
        (TokenKind.LET, 'let'), (TokenKind.IDENT, 'five'), (TokenKind.ASSIGN, '='),
        (TokenKind.NUMBER, '5'), (TokenKind.SEMICOLON, ';'),
        (TokenKind.LET, 'let'), (TokenKind.IDENT, 'add'), (TokenKind.ASSIGN, '='),
        (TokenKind.FUNCTION, 'fn'), (TokenKind.LPAREN, '('), (TokenKind.IDENT, 'x'),
        (TokenKind.COMMA, ','), (TokenKind.IDENT, 'y'), (TokenKind.RPAREN, ')'),
        (TokenKind.LBRACE, '{'), (TokenKind.IDENT, 'x'), (TokenKind.PLUS, '+'),
        (TokenKind.IDENT, 'y'), (TokenKind.SEMICOLON, ';'), (TokenKind.RBRACE, '}'),
        (TokenKind.SEMICOLON, ';'),
        (TokenKind.LET, 'let'), (TokenKind.IDENT, 'result'), (TokenKind.ASSIGN, '='),
        (TokenKind.IDENT, 'add'), (TokenKind.LPAREN, '('), (TokenKind.IDENT, 'five'),
        (TokenKind.COMMA, ','), (TokenKind.NUMBER, '10'), (TokenKind.RPAREN, ')'),
        (TokenKind.SEMICOLON, ';'),
        (TokenKind.BANG, '!'), (TokenKind.MINUS, '-'), (TokenKind.SLASH, '/'),
        (TokenKind.ASTERISK, '*'), (TokenKind.NUMBER, '5'), (TokenKind.SEMICOLON, ';'),
        (TokenKind.NUMBER, '5'), (TokenKind.LT, '<'), (TokenKind.NUMBER, '10'),
        (TokenKind.GT, '>'), (TokenKind.NUMBER, '5'), (TokenKind.SEMICOLON, ';'),
        (TokenKind.IF, 'if'), (TokenKind.LPAREN, '('), (TokenKind.NUMBER, '5'),
        (TokenKind.LT, '<'), (TokenKind.NUMBER, '10'), (TokenKind.RPAREN, ')'),
        (TokenKind.LBRACE, '{'), (TokenKind.RETURN, 'return'), (TokenKind.TRUE, 'true'),
        (TokenKind.SEMICOLON, ';'), (TokenKind.RBRACE, '}'), (TokenKind.ELSE, 'else'),
        (TokenKind.LBRACE, '{'), (TokenKind.RETURN, 'return'), (TokenKind.FALSE, 'false'),
        (TokenKind.SEMICOLON, ';'), (TokenKind.RBRACE, '}'),
        (TokenKind.NUMBER, '10'), (TokenKind.EQ, '=='), (TokenKind.NUMBER, '10'),
        (TokenKind.SEMICOLON, ';'), (TokenKind.NUMBER, '10'), (TokenKind.NOT_EQ, '!='),
        (TokenKind.NUMBER, '9'), (TokenKind.SEMICOLON, ';'),
        (TokenKind.STRING, 'foobar'), (TokenKind.STRING, 'foo bar'),
        (TokenKind.LBRACKET, '['), (TokenKind.NUMBER, '1'), (TokenKind.COMMA, ','),
        (TokenKind.NUMBER, '2'), (TokenKind.RBRACKET, ']'), (TokenKind.SEMICOLON, ';'),
        (TokenKind.LBRACE, '{'), (TokenKind.STRING, 'foo'), (TokenKind.COLON, ':'),
        (TokenKind.STRING, 'bar'), (TokenKind.RBRACE, '}'),
        (TokenKind.EOF, ''),
    ]
    assert kinds_and_literals(source) == expected


def test_eof_is_repeatable():
    lexer = Lexer('x')
    assert lexer.next_token().type == TokenKind.IDENT
    for _ in range(3):
        assert lexer.next_token().type == TokenKind.EOF


def test_positions_track_lines_and_columns():
    tokens = list(tokenize('let x = 1;\n  x + 22', filename='demo.monkey'))
    assert tokens[0].position == Position('demo.monkey', 1, 1)
    assert (tokens[1].line, tokens[1].column) == (1, 5)
    plus = tokens[6]
    assert plus.type == TokenKind.PLUS
    assert (plus.line, plus.column) == (2, 5)
    assert (tokens[7].line, tokens[7].column, tokens[7].value) == (2, 7, '22')
    assert tokens[0].start_pos == 0
    assert tokens[7].start_pos == 17


def test_illegal_character_does_not_stop_scan():
    assert kinds_and_literals('1 @ 2') == [
        (TokenKind.NUMBER, '1'),
        (TokenKind.ILLEGAL, '@'),
        (TokenKind.NUMBER, '2'),
        (TokenKind.EOF, ''),
    ]


def test_string_keeps_escaped_quote_without_processing():
    assert kinds_and_literals(r'"say \"hi\""') == [
        (TokenKind.STRING, r'say \"hi\"'),
        (TokenKind.EOF, ''),
    ]


def test_unterminated_string_is_illegal():
    tokens = list(tokenize('"abc'))
    assert tokens[0].type == TokenKind.ILLEGAL
    assert tokens[0].value == '"abc'
    assert tokens[1].type == TokenKind.EOF


def test_identifiers_with_digits_and_underscores():
    assert kinds_and_literals('_a1 b_2') == [
        (TokenKind.IDENT, '_a1'),
        (TokenKind.IDENT, 'b_2'),
        (TokenKind.EOF, ''),
    ]


def test_token_behaves_like_its_literal():
    tok = Lexer('return').next_token()
    assert tok == 'return'
    assert tok.kind is TokenKind.RETURN
    assert tok.literal == 'return'
