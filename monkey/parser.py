import enum
from typing import Callable, Iterable

from monkey.ast import (
    AssignExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from monkey.tokenizer import Token, TokenType
from monkey.utils import Tracer

INT64_MAX = 2**63 - 1

EOF_TOKEN = Token(type=TokenType.EOF, lexeme="")


class Precedence(enum.IntEnum):
    LOWEST = enum.auto()
    ASSIGN = enum.auto()
    EQUALS = enum.auto()
    LESSGREATER = enum.auto()
    SUM = enum.auto()
    PRODUCT = enum.auto()
    PREFIX = enum.auto()
    CALL = enum.auto()


PRECEDENCES = {
    TokenType.ASSIGN: Precedence.ASSIGN,
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}


def get_precedence(token_type: TokenType) -> Precedence:
    return PRECEDENCES.get(token_type, Precedence.LOWEST)


def parse_int_literal(lexeme: str) -> int | None:
    """Digits with a leading 0 are octal (010 is 8), anything else decimal. None if the lexeme is not
    a valid literal or does not fit a signed 64-bit integer."""
    if not (lexeme.isascii() and lexeme.isdigit()):
        return None
    base = 8 if len(lexeme) > 1 and lexeme.startswith("0") else 10
    try:
        value = int(lexeme, base)
    except ValueError:
        return None
    return value if value <= INT64_MAX else None


class Parser:
    """Operator-precedence (Pratt) parser over a stream of tokens.

    The parser keeps two tokens in view, the one being parsed and the next one. Every token type
    that may start an expression has a prefix parse function and every token type that may continue
    one has an infix parse function; both live in constant tables at the bottom of the class.

    Problems are collected in ``errors`` as human-readable messages and never raised, a statement
    that could not be parsed is left out of the program.
    """

    def __init__(self, tokens: Iterable[Token], trace: bool = False):
        self._tokens = iter(tokens)
        self.errors: list[str] = []
        self.tracer = Tracer(enabled=trace)

        self.cur_token = self._pull()
        self.peek_token = self._pull()

    def _pull(self) -> Token:
        return next(self._tokens, EOF_TOKEN)

    def _next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self._pull()

    def _cur_token_is(self, token_type: TokenType) -> bool:
        return self.cur_token.type is token_type

    def _peek_token_is(self, token_type: TokenType) -> bool:
        return self.peek_token.type is token_type

    def _peek_error(self, token_type: TokenType) -> None:
        self.errors.append(f"expected next token to be {token_type}, got {self.peek_token.type} instead")

    def _expect_peek(self, token_type: TokenType) -> bool:
        if self._peek_token_is(token_type):
            self._next_token()
            return True
        self._peek_error(token_type)
        return False

    def _expect_terminator(self) -> bool:
        # end of input and the end of a block terminate a statement too
        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
            return True
        if self._peek_token_is(TokenType.EOF) or self._peek_token_is(TokenType.RBRACE):
            return True
        self._peek_error(TokenType.SEMICOLON)
        return False

    def _synchronize(self) -> None:
        """Skips the rest of a broken statement"""
        while not (
            self._cur_token_is(TokenType.SEMICOLON)
            or self._peek_token_is(TokenType.EOF)
            or self._peek_token_is(TokenType.RBRACE)
        ):
            self._next_token()

    def _cur_precedence(self) -> Precedence:
        return get_precedence(self.cur_token.type)

    def _peek_precedence(self) -> Precedence:
        return get_precedence(self.peek_token.type)

    def parse_program(self) -> Program:
        program = Program()
        while not self._cur_token_is(TokenType.EOF):
            statement = self.parse_statement()
            if statement is not None:
                program.statements.append(statement)
            self._next_token()
        return program

    def parse_statement(self) -> Statement | None:
        if self._cur_token_is(TokenType.LET):
            return self._parse_let_statement()
        elif self._cur_token_is(TokenType.RETURN):
            return self._parse_return_statement()
        else:
            return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStatement | None:
        with self.tracer.trace("let statement"):
            if not self._expect_peek(TokenType.IDENT):
                self._synchronize()
                return None
            name = Identifier(self.cur_token.lexeme)

            if not self._expect_peek(TokenType.ASSIGN):
                self._synchronize()
                return None
            self._next_token()

            value = self.parse_expression(Precedence.LOWEST)
            if value is None or not self._expect_terminator():
                self._synchronize()
                return None
            return LetStatement(name=name, value=value)

    def _parse_return_statement(self) -> ReturnStatement | None:
        with self.tracer.trace("return statement"):
            self._next_token()
            value = self.parse_expression(Precedence.LOWEST)
            if value is None or not self._expect_terminator():
                self._synchronize()
                return None
            return ReturnStatement(return_value=value)

    def _parse_expression_statement(self) -> ExpressionStatement | None:
        with self.tracer.trace("expression statement"):
            expression = self.parse_expression(Precedence.LOWEST)
            if self._peek_token_is(TokenType.SEMICOLON):
                self._next_token()
            if expression is None:
                return None
            return ExpressionStatement(expression=expression)

    def _parse_block_statement(self) -> BlockStatement | None:
        with self.tracer.trace("block statement"):
            block = BlockStatement()
            self._next_token()
            while not self._cur_token_is(TokenType.RBRACE):
                if self._cur_token_is(TokenType.EOF):
                    self.errors.append("unterminated block")
                    return None
                statement = self.parse_statement()
                if statement is not None:
                    block.statements.append(statement)
                self._next_token()
            return block

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        with self.tracer.trace(f"expression {self.cur_token.type} ({precedence.name})"):
            prefix = self.PREFIX_PARSE_FNS.get(self.cur_token.type)
            if prefix is None:
                self.errors.append(f"no prefix parse function for {self.cur_token.type} found")
                return None
            left = prefix(self)

            while (
                left is not None
                and not self._peek_token_is(TokenType.SEMICOLON)
                and precedence < self._peek_precedence()
            ):
                infix = self.INFIX_PARSE_FNS.get(self.peek_token.type)
                if infix is None:
                    return left
                self._next_token()
                left = infix(self, left)

            return left

    # prefix parse functions

    def _parse_identifier(self) -> Expression | None:
        return Identifier(self.cur_token.lexeme)

    def _parse_integer_literal(self) -> Expression | None:
        lexeme = self.cur_token.lexeme
        value = parse_int_literal(lexeme)
        if value is None:
            self.errors.append(f"could not parse {lexeme!r} as integer")
            return None
        return IntegerLiteral(value)

    def _parse_string_literal(self) -> Expression | None:
        return StringLiteral(self.cur_token.lexeme)

    def _parse_boolean(self) -> Expression | None:
        return BooleanLiteral(self._cur_token_is(TokenType.TRUE))

    def _parse_prefix_expression(self) -> Expression | None:
        operator = self.cur_token.lexeme
        self._next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(operator=operator, right=right)

    def _parse_grouped_expression(self) -> Expression | None:
        self._next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self._expect_peek(TokenType.RPAREN):
            return None
        return expression

    def _parse_if_expression(self) -> Expression | None:
        if not self._expect_peek(TokenType.LPAREN):
            return None
        self._next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None or not self._expect_peek(TokenType.RPAREN):
            return None

        if not self._expect_peek(TokenType.LBRACE):
            return None
        consequence = self._parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self._peek_token_is(TokenType.ELSE):
            self._next_token()
            if not self._expect_peek(TokenType.LBRACE):
                return None
            alternative = self._parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(condition=condition, consequence=consequence, alternative=alternative)

    def _parse_function_parameters(self) -> list[Identifier] | None:
        parameters: list[Identifier] = []
        if self._peek_token_is(TokenType.RPAREN):
            self._next_token()
            return parameters

        if not self._expect_peek(TokenType.IDENT):
            return None
        parameters.append(Identifier(self.cur_token.lexeme))
        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            if not self._expect_peek(TokenType.IDENT):
                return None
            parameters.append(Identifier(self.cur_token.lexeme))

        if not self._expect_peek(TokenType.RPAREN):
            return None
        return parameters

    def _parse_function_literal(self) -> Expression | None:
        if not self._expect_peek(TokenType.LPAREN):
            return None
        parameters = self._parse_function_parameters()
        if parameters is None or not self._expect_peek(TokenType.LBRACE):
            return None
        body = self._parse_block_statement()
        if body is None:
            return None
        return FunctionLiteral(parameters=parameters, body=body)

    # infix parse functions

    def _parse_infix_expression(self, left: Expression) -> Expression | None:
        operator = self.cur_token.lexeme
        precedence = self._cur_precedence()
        self._next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(left=left, operator=operator, right=right)

    def _parse_assign_expression(self, left: Expression) -> Expression | None:
        self._next_token()
        # one level below ASSIGN, so that a = b = c nests to the right
        value = self.parse_expression(Precedence.LOWEST)
        if not isinstance(left, Identifier):
            self.errors.append(f"invalid assignment target: {left}")
            return None
        if value is None:
            return None
        return AssignExpression(name=left, value=value)

    def _parse_expression_list(self, end: TokenType) -> list[Expression] | None:
        expressions: list[Expression] = []
        if self._peek_token_is(end):
            self._next_token()
            return expressions

        self._next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        expressions.append(expression)
        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            expression = self.parse_expression(Precedence.LOWEST)
            if expression is None:
                return None
            expressions.append(expression)

        if not self._expect_peek(end):
            return None
        return expressions

    def _parse_call_expression(self, function: Expression) -> Expression | None:
        arguments = self._parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return CallExpression(function=function, arguments=arguments)

    PREFIX_PARSE_FNS: dict[TokenType, Callable[["Parser"], Expression | None]] = {
        TokenType.IDENT: _parse_identifier,
        TokenType.INT: _parse_integer_literal,
        TokenType.STRING: _parse_string_literal,
        TokenType.TRUE: _parse_boolean,
        TokenType.FALSE: _parse_boolean,
        TokenType.BANG: _parse_prefix_expression,
        TokenType.MINUS: _parse_prefix_expression,
        TokenType.LPAREN: _parse_grouped_expression,
        TokenType.IF: _parse_if_expression,
        TokenType.FUNCTION: _parse_function_literal,
    }

    INFIX_PARSE_FNS: dict[TokenType, Callable[["Parser", Expression], Expression | None]] = {
        TokenType.PLUS: _parse_infix_expression,
        TokenType.MINUS: _parse_infix_expression,
        TokenType.ASTERISK: _parse_infix_expression,
        TokenType.SLASH: _parse_infix_expression,
        TokenType.EQ: _parse_infix_expression,
        TokenType.NOT_EQ: _parse_infix_expression,
        TokenType.LT: _parse_infix_expression,
        TokenType.GT: _parse_infix_expression,
        TokenType.LPAREN: _parse_call_expression,
        TokenType.ASSIGN: _parse_assign_expression,
    }


def parse_program(tokens: Iterable[Token], trace: bool = False) -> tuple[Program, list[str]]:
    parser = Parser(tokens, trace=trace)
    try:
        program = parser.parse_program()
    except RecursionError:
        parser.errors.append("expression nested too deeply")
        program = Program()
    return program, parser.errors
