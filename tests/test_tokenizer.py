import pytest

from monkey.tokenizer import Token, Tokenizer, TokenType, lookup_ident, tokenize


def kinds_and_lexemes(code: str) -> list[tuple[TokenType, str]]:
    return [(t.type, t.lexeme) for t in tokenize(code)]


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param("=", [(TokenType.ASSIGN, "=")]),
        pytest.param("==", [(TokenType.EQ, "==")]),
        pytest.param("!", [(TokenType.BANG, "!")]),
        pytest.param("!=", [(TokenType.NOT_EQ, "!=")]),
        pytest.param("= =", [(TokenType.ASSIGN, "="), (TokenType.ASSIGN, "=")]),
        pytest.param("===", [(TokenType.EQ, "=="), (TokenType.ASSIGN, "=")]),
        pytest.param("!==", [(TokenType.NOT_EQ, "!="), (TokenType.ASSIGN, "=")]),
        pytest.param("!!", [(TokenType.BANG, "!"), (TokenType.BANG, "!")]),
        pytest.param("=!", [(TokenType.ASSIGN, "="), (TokenType.BANG, "!")]),
        pytest.param("<>", [(TokenType.LT, "<"), (TokenType.GT, ">")]),
        pytest.param(
            "=+(){},;",
            [
                (TokenType.ASSIGN, "="),
                (TokenType.PLUS, "+"),
                (TokenType.LPAREN, "("),
                (TokenType.RPAREN, ")"),
                (TokenType.LBRACE, "{"),
                (TokenType.RBRACE, "}"),
                (TokenType.COMMA, ","),
                (TokenType.SEMICOLON, ";"),
            ],
        ),
        pytest.param(
            "!-/*5",
            [
                (TokenType.BANG, "!"),
                (TokenType.MINUS, "-"),
                (TokenType.SLASH, "/"),
                (TokenType.ASTERISK, "*"),
                (TokenType.INT, "5"),
            ],
        ),
    ],
)
def test_operators(code: str, expected: list[tuple[TokenType, str]]) -> None:
    assert kinds_and_lexemes(code) == expected + [(TokenType.EOF, "")]


def test_program() -> None:
    code = """let five = 5;
let add = fn(x, y) {
  x + y;
};
let result = add(five, 10);
if (5 < 10) {
\treturn true;
} else {
\treturn false;
}
10 != 9;
"foobar"
"foo bar"
"""
    assert kinds_and_lexemes(code) == [
        (TokenType.LET, "let"),
        (TokenType.IDENT, "five"),
        (TokenType.ASSIGN, "="),
        (TokenType.INT, "5"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.LET, "let"),
        (TokenType.IDENT, "add"),
        (TokenType.ASSIGN, "="),
        (TokenType.FUNCTION, "fn"),
        (TokenType.LPAREN, "("),
        (TokenType.IDENT, "x"),
        (TokenType.COMMA, ","),
        (TokenType.IDENT, "y"),
        (TokenType.RPAREN, ")"),
        (TokenType.LBRACE, "{"),
        (TokenType.IDENT, "x"),
        (TokenType.PLUS, "+"),
        (TokenType.IDENT, "y"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.RBRACE, "}"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.LET, "let"),
        (TokenType.IDENT, "result"),
        (TokenType.ASSIGN, "="),
        (TokenType.IDENT, "add"),
        (TokenType.LPAREN, "("),
        (TokenType.IDENT, "five"),
        (TokenType.COMMA, ","),
        (TokenType.INT, "10"),
        (TokenType.RPAREN, ")"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.IF, "if"),
        (TokenType.LPAREN, "("),
        (TokenType.INT, "5"),
        (TokenType.LT, "<"),
        (TokenType.INT, "10"),
        (TokenType.RPAREN, ")"),
        (TokenType.LBRACE, "{"),
        (TokenType.RETURN, "return"),
        (TokenType.TRUE, "true"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.RBRACE, "}"),
        (TokenType.ELSE, "else"),
        (TokenType.LBRACE, "{"),
        (TokenType.RETURN, "return"),
        (TokenType.FALSE, "false"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.RBRACE, "}"),
        (TokenType.INT, "10"),
        (TokenType.NOT_EQ, "!="),
        (TokenType.INT, "9"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.STRING, "foobar"),
        (TokenType.STRING, "foo bar"),
        (TokenType.EOF, ""),
    ]


@pytest.mark.parametrize(
    "word, expected_type",
    [
        pytest.param("fn", TokenType.FUNCTION),
        pytest.param("let", TokenType.LET),
        pytest.param("true", TokenType.TRUE),
        pytest.param("false", TokenType.FALSE),
        pytest.param("if", TokenType.IF),
        pytest.param("else", TokenType.ELSE),
        pytest.param("return", TokenType.RETURN),
        pytest.param("Let", TokenType.IDENT),
        pytest.param("lets", TokenType.IDENT),
        pytest.param("fn_", TokenType.IDENT),
        pytest.param("_", TokenType.IDENT),
        pytest.param("foobar", TokenType.IDENT),
    ],
)
def test_keywords(word: str, expected_type: TokenType) -> None:
    assert lookup_ident(word) is expected_type
    assert kinds_and_lexemes(word) == [(expected_type, word), (TokenType.EOF, "")]


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param("foo_bar", [(TokenType.IDENT, "foo_bar")]),
        pytest.param("abc123", [(TokenType.IDENT, "abc"), (TokenType.INT, "123")]),
        pytest.param("123abc", [(TokenType.INT, "123"), (TokenType.IDENT, "abc")]),
        pytest.param(" \t\r\n 42 \n", [(TokenType.INT, "42")]),
        pytest.param('"a\\nb"', [(TokenType.STRING, "a\\nb")]),
        pytest.param('""', [(TokenType.STRING, "")]),
        pytest.param('"unterminated', [(TokenType.STRING, "unterminated")]),
        pytest.param("@", [(TokenType.ILLEGAL, "@")]),
        pytest.param("1 # 2", [(TokenType.INT, "1"), (TokenType.ILLEGAL, "#"), (TokenType.INT, "2")]),
        pytest.param("", []),
    ],
)
def test_literals(code: str, expected: list[tuple[TokenType, str]]) -> None:
    assert kinds_and_lexemes(code) == expected + [(TokenType.EOF, "")]


def test_eof_repeats() -> None:
    tokenizer = Tokenizer("x")
    assert tokenizer.next_token() == Token(TokenType.IDENT, "x")
    assert tokenizer.next_token() == Token(TokenType.EOF, "")
    assert tokenizer.next_token() == Token(TokenType.EOF, "")


def test_iteration_is_lazy_and_not_restartable() -> None:
    tokenizer = Tokenizer("1 2 3")
    iterator = iter(tokenizer)
    assert next(iterator).lexeme == "1"
    assert tokenizer.i == 1
    assert [t.lexeme for t in tokenizer] == ["2", "3", ""]
    assert [t.type for t in tokenizer] == [TokenType.EOF]
