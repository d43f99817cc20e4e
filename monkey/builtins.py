from typing import Callable, Optional

from monkey.value import NULL, BuiltinFunc, Error, Integer, String, Value

BUILTIN_FUNCS: dict[str, BuiltinFunc] = dict()


def register_builtin_func(name: str, arity: int | None = None):
    """Registers fn under the given name. fn returns None for arguments it does not support,
    arity=None means any number of arguments."""

    def decorator(fn: Callable[..., Optional[Value]]) -> Callable[..., Value]:
        def decorated(*args: Value) -> Value:
            if arity is not None and len(args) != arity:
                return Error(f"wrong number of arguments: want={arity}, got={len(args)}")
            maybe_res = fn(*args)
            if maybe_res is None:
                arg_types = ", ".join(a.type_name() for a in args)
                return Error(f"argument to {name!r} not supported, got {arg_types}")
            else:
                return maybe_res

        BUILTIN_FUNCS[name] = BuiltinFunc(name=name, fn=decorated)
        return decorated

    return decorator


@register_builtin_func("len", arity=1)
def len_(arg: Value) -> Value | None:
    if isinstance(arg, String):
        return Integer(len(arg.v))
    else:
        return None


@register_builtin_func("type", arity=1)
def type_(arg: Value) -> Value:
    return String(arg.type_name())


@register_builtin_func("puts")
def puts_(*args: Value) -> Value:
    for arg in args:
        print(arg.inspect())
    return NULL
