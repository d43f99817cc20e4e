import enum
from dataclasses import dataclass
from typing import Iterator

from monkey.utils import PrintableEnum


class TokenType(PrintableEnum):
    ILLEGAL = enum.auto()
    EOF = enum.auto()

    IDENT = enum.auto()
    INT = enum.auto()
    STRING = enum.auto()

    ASSIGN = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    BANG = enum.auto()
    ASTERISK = enum.auto()
    SLASH = enum.auto()
    LT = enum.auto()
    GT = enum.auto()
    EQ = enum.auto()
    NOT_EQ = enum.auto()

    COMMA = enum.auto()
    SEMICOLON = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()

    FUNCTION = enum.auto()
    LET = enum.auto()
    TRUE = enum.auto()
    FALSE = enum.auto()
    IF = enum.auto()
    ELSE = enum.auto()
    RETURN = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


KEYWORDS = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}


SINGLE_CHAR_TOKENS = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "!": TokenType.BANG,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

# first char -> token type when followed by "="
TWO_CHAR_TOKENS = {
    "=": TokenType.EQ,
    "!": TokenType.NOT_EQ,
}

WHITESPACE = " \t\n\r"


def lookup_ident(word: str) -> TokenType:
    return KEYWORDS.get(word, TokenType.IDENT)


def _is_valid_in_identifier(s: str) -> bool:
    return ("a" <= s <= "z") or ("A" <= s <= "Z") or s == "_"


def _is_valid_in_number(s: str) -> bool:
    return "0" <= s <= "9"


class Tokenizer:
    """Pull-based scanner: every call to next_token() consumes just enough source for one token.

    Scanning never fails, characters outside the language come back as ILLEGAL tokens
    and an exhausted source yields EOF on every further call.
    """

    def __init__(self, code: str):
        self.code = code
        self.i = 0

    def _peek_char(self) -> str:
        return self.code[self.i + 1] if self.i + 1 < len(self.code) else ""

    def _skip_whitespace(self) -> None:
        while self.i < len(self.code) and self.code[self.i] in WHITESPACE:
            self.i += 1

    def _read_while(self, predicate) -> str:
        start = self.i
        while self.i < len(self.code) and predicate(self.code[self.i]):
            self.i += 1
        return self.code[start : self.i]

    def _read_string(self) -> str:
        self.i += 1  # opening quote
        start = self.i
        while self.i < len(self.code) and self.code[self.i] != '"':
            self.i += 1
        content = self.code[start : self.i]
        self.i += 1  # closing quote, if any
        return content

    def next_token(self) -> Token:
        self._skip_whitespace()
        if self.i >= len(self.code):
            return Token(type=TokenType.EOF, lexeme="")

        char = self.code[self.i]
        if char in TWO_CHAR_TOKENS and self._peek_char() == "=":
            self.i += 2
            return Token(type=TWO_CHAR_TOKENS[char], lexeme=char + "=")
        elif char in SINGLE_CHAR_TOKENS:
            self.i += 1
            return Token(type=SINGLE_CHAR_TOKENS[char], lexeme=char)
        elif char == '"':
            return Token(type=TokenType.STRING, lexeme=self._read_string())
        elif _is_valid_in_identifier(char):
            word = self._read_while(_is_valid_in_identifier)
            return Token(type=lookup_ident(word), lexeme=word)
        elif _is_valid_in_number(char):
            return Token(type=TokenType.INT, lexeme=self._read_while(_is_valid_in_number))
        else:
            self.i += 1
            return Token(type=TokenType.ILLEGAL, lexeme=char)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return


def tokenize(code: str) -> Iterator[Token]:
    return iter(Tokenizer(code))
