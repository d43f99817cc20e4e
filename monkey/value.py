import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from monkey.ast import BlockStatement, Identifier

if TYPE_CHECKING:
    from monkey.environment import Environment


class Value(abc.ABC):
    @classmethod
    @abc.abstractmethod
    def type_name(cls) -> str:
        ...

    @abc.abstractmethod
    def inspect(self) -> str:
        ...


UnaryOperationImpl = Callable[[Value], Value]
BinaryOperationImpl = Callable[[Value, Value], Value]


@dataclass(frozen=True)
class Integer(Value):
    v: int

    @classmethod
    def type_name(cls) -> str:
        return "INTEGER"

    def inspect(self) -> str:
        return str(self.v)


@dataclass(frozen=True)
class Boolean(Value):
    v: bool

    @classmethod
    def type_name(cls) -> str:
        return "BOOLEAN"

    def inspect(self) -> str:
        return "true" if self.v else "false"


@dataclass(frozen=True)
class String(Value):
    v: str

    @classmethod
    def type_name(cls) -> str:
        return "STRING"

    def inspect(self) -> str:
        return self.v


@dataclass(frozen=True)
class Null(Value):
    @classmethod
    def type_name(cls) -> str:
        return "NULL"

    def inspect(self) -> str:
        return "null"


@dataclass(frozen=True, eq=False)
class Function(Value):
    """User-defined function, closed over the environment it was defined in"""

    parameters: list[Identifier]
    body: BlockStatement
    env: "Environment"

    @classmethod
    def type_name(cls) -> str:
        return "FUNCTION"

    def inspect(self) -> str:
        return f"fn({', '.join(str(p) for p in self.parameters)}) {{\n{self.body}\n}}"


@dataclass(frozen=True, eq=False)
class BuiltinFunc(Value):
    name: str
    fn: Callable[..., Value]

    @classmethod
    def type_name(cls) -> str:
        return "BUILTIN"

    def inspect(self) -> str:
        return f"builtin function {self.name!r}"


@dataclass(frozen=True)
class ReturnValue(Value):
    """Carries the result of a return statement out of the enclosing blocks"""

    value: Value

    @classmethod
    def type_name(cls) -> str:
        return "RETURN_VALUE"

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Value):
    message: str

    @classmethod
    def type_name(cls) -> str:
        return "ERROR"

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(v: bool) -> Boolean:
    return TRUE if v else FALSE


def is_truthy(value: Value) -> bool:
    return value not in (FALSE, NULL)
