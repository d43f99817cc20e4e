from dataclasses import dataclass
from typing import Type

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
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from monkey.builtins import BUILTIN_FUNCS
from monkey.environment import Environment, new_enclosed_environment
from monkey.value import (
    NULL,
    BinaryOperationImpl,
    BuiltinFunc,
    Error,
    Function,
    Integer,
    ReturnValue,
    String,
    UnaryOperationImpl,
    Value,
    is_truthy,
    native_bool_to_boolean,
)


@dataclass
class MonkeyRuntimeError(Exception):
    """Raised only for trees the parser can not produce, language-level errors are Error values"""

    errmsg: str


def is_error(value: Value | None) -> bool:
    return isinstance(value, Error)


def _interrupts(value: Value | None) -> bool:
    """Errors and the return signal both cut the evaluation of the enclosing construct short"""
    return isinstance(value, (Error, ReturnValue))


def evaluate(node: Node, env: Environment) -> Value | None:
    """Evaluates a program, statement or expression. None means "no value", e.g. for a let statement"""
    if isinstance(node, Program):
        return evaluate_program(node.statements, env)
    elif isinstance(node, Expression):
        return evaluate_expression(node, env)
    elif isinstance(node, ExpressionStatement):
        return evaluate_expression(node.expression, env)
    elif isinstance(node, BlockStatement):
        return evaluate_block(node.statements, env)
    elif isinstance(node, LetStatement):
        value = evaluate_expression(node.value, env)
        if _interrupts(value):
            return value
        env.define(node.name.name, value)
        return None
    elif isinstance(node, ReturnStatement):
        value = evaluate_expression(node.return_value, env)
        if _interrupts(value):
            return value
        return ReturnValue(value)
    else:
        raise MonkeyRuntimeError(f"Unexpected node type: {node!r}")


def evaluate_program(statements: list[Statement], env: Environment) -> Value | None:
    result: Value | None = None
    for statement in statements:
        result = evaluate(statement, env)
        if isinstance(result, ReturnValue):
            return result.value
        if is_error(result):
            return result
    return result


def evaluate_block(statements: list[Statement], env: Environment) -> Value | None:
    result: Value | None = None
    for statement in statements:
        result = evaluate(statement, env)
        # the return signal stays wrapped so that outer blocks stop too
        if _interrupts(result):
            return result
    return result


def evaluate_expression(expression: Expression, env: Environment) -> Value:
    if isinstance(expression, IntegerLiteral):
        return Integer(expression.value)
    elif isinstance(expression, StringLiteral):
        return String(expression.value)
    elif isinstance(expression, BooleanLiteral):
        return native_bool_to_boolean(expression.value)
    elif isinstance(expression, Identifier):
        return evaluate_identifier(expression, env)
    elif isinstance(expression, PrefixExpression):
        right = evaluate_expression(expression.right, env)
        if _interrupts(right):
            return right
        return eval_unary_operation(expression.operator, right)
    elif isinstance(expression, InfixExpression):
        left = evaluate_expression(expression.left, env)
        if _interrupts(left):
            return left
        right = evaluate_expression(expression.right, env)
        if _interrupts(right):
            return right
        return eval_binary_operation(expression.operator, left, right)
    elif isinstance(expression, AssignExpression):
        value = evaluate_expression(expression.value, env)
        if _interrupts(value):
            return value
        if not env.assign(expression.name.name, value):
            return Error(f"identifier not found: {expression.name.name}")
        return value
    elif isinstance(expression, IfExpression):
        return evaluate_if_expression(expression, env)
    elif isinstance(expression, FunctionLiteral):
        return Function(parameters=expression.parameters, body=expression.body, env=env)
    elif isinstance(expression, CallExpression):
        function = evaluate_expression(expression.function, env)
        if _interrupts(function):
            return function
        args: list[Value] = []
        for arg_expression in expression.arguments:
            arg = evaluate_expression(arg_expression, env)
            if _interrupts(arg):
                return arg
            args.append(arg)
        return apply_function(function, args)
    else:
        raise MonkeyRuntimeError(f"Unexpected expression type: {expression!r}")


def evaluate_identifier(identifier: Identifier, env: Environment) -> Value:
    value = env.get(identifier.name)
    if value is not None:
        return value
    elif identifier.name in BUILTIN_FUNCS:
        return BUILTIN_FUNCS[identifier.name]
    else:
        return Error(f"identifier not found: {identifier.name}")


def evaluate_if_expression(expression: IfExpression, env: Environment) -> Value:
    condition = evaluate_expression(expression.condition, env)
    if _interrupts(condition):
        return condition

    if is_truthy(condition):
        result = evaluate(expression.consequence, env)
    elif expression.alternative is not None:
        result = evaluate(expression.alternative, env)
    else:
        return NULL
    return NULL if result is None else result


def apply_function(function: Value, args: list[Value]) -> Value:
    if isinstance(function, Function):
        if len(args) != len(function.parameters):
            return Error(f"wrong number of arguments: want={len(function.parameters)}, got={len(args)}")
        call_env = new_enclosed_environment(function.env)
        for parameter, arg in zip(function.parameters, args):
            call_env.define(parameter.name, arg)
        result = evaluate(function.body, call_env)
        if isinstance(result, ReturnValue):
            return result.value
        return NULL if result is None else result
    elif isinstance(function, BuiltinFunc):
        return function.fn(*args)
    else:
        return Error(f"not a function: {function.type_name()}")


BinaryOperationImplTable = list[tuple[tuple[Type[Value], Type[Value]], BinaryOperationImpl]]


def eval_binary_operation(operator: str, a: Value, b: Value) -> Value:
    for (type_a, type_b), impl in binary_impls.get(operator, []):
        if isinstance(a, type_a) and isinstance(b, type_b):
            return impl(a, b)
    else:
        if operator not in binary_impls:
            return Error(f"unknown operator: {a.type_name()} {operator} {b.type_name()}")
        return Error(f"type mismatch: {a.type_name()} {operator} {b.type_name()}")


def _int_div(a: Integer, b: Integer) -> Value:
    if b.v == 0:
        return Error("division by zero")
    # truncates toward zero, unlike python's floor division
    quotient = abs(a.v) // abs(b.v)
    return Integer(quotient if (a.v < 0) == (b.v < 0) else -quotient)


binary_impls: dict[str, BinaryOperationImplTable] = {
    "+": [((Integer, Integer), lambda a, b: Integer(a.v + b.v))],  # type: ignore
    "-": [((Integer, Integer), lambda a, b: Integer(a.v - b.v))],  # type: ignore
    "*": [((Integer, Integer), lambda a, b: Integer(a.v * b.v))],  # type: ignore
    "/": [((Integer, Integer), _int_div)],  # type: ignore
    "<": [((Integer, Integer), lambda a, b: native_bool_to_boolean(a.v < b.v))],  # type: ignore
    ">": [((Integer, Integer), lambda a, b: native_bool_to_boolean(a.v > b.v))],  # type: ignore
    "==": [((Value, Value), lambda a, b: native_bool_to_boolean(a == b))],
    "!=": [((Value, Value), lambda a, b: native_bool_to_boolean(a != b))],
}

UnaryOperationImplTable = list[tuple[Type[Value], UnaryOperationImpl]]


def eval_unary_operation(operator: str, operand: Value) -> Value:
    if operator not in unary_impls:
        return Error(f"unknown operator: {operator}{operand.type_name()}")
    for operand_type, impl in unary_impls[operator]:
        if isinstance(operand, operand_type):
            return impl(operand)
    else:
        return Error(f"type mismatch: {operator}{operand.type_name()}")


unary_impls: dict[str, UnaryOperationImplTable] = {
    "-": [(Integer, lambda a: Integer(-a.v))],  # type: ignore
    "!": [(Value, lambda a: native_bool_to_boolean(not is_truthy(a)))],
}
