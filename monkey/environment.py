from typing import Optional

from monkey.value import Value


class Environment:
    """Name bindings of one scope plus a link to the scope it is nested in.

    A function call gets a fresh environment enclosing the environment the function was
    *defined* in, closures keep that one alive for as long as they are referenced.
    """

    def __init__(self, outer: Optional["Environment"] = None):
        self.store: dict[str, Value] = {}
        self.outer = outer

    def get(self, name: str) -> Value | None:
        env: Environment | None = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def define(self, name: str, value: Value) -> Value:
        """Binds in this scope, shadowing any outer binding of the same name"""
        self.store[name] = value
        return value

    def assign(self, name: str, value: Value) -> bool:
        """Rebinds the name in the innermost scope that owns it, False if no scope does"""
        env: Environment | None = self
        while env is not None:
            if name in env.store:
                env.store[name] = value
                return True
            env = env.outer
        return False

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __repr__(self) -> str:
        return f"Environment(names={sorted(self.store)!r}, outer={self.outer!r})"


def new_environment() -> Environment:
    return Environment()


def new_enclosed_environment(outer: Environment) -> Environment:
    return Environment(outer=outer)
