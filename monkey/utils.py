import contextlib
import enum
import sys
from typing import Iterator, TextIO


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


class Tracer:
    """Indented BEGIN/END trace of nested routine calls, silent unless enabled"""

    INDENT = "\t"

    def __init__(self, enabled: bool = False, stream: TextIO | None = None):
        self.enabled = enabled
        self.stream = stream
        self._level = 0

    def _print(self, msg: str) -> None:
        print(self.INDENT * self._level + msg, file=self.stream or sys.stderr)

    @contextlib.contextmanager
    def trace(self, name: str) -> Iterator[None]:
        if not self.enabled:
            yield
            return
        self._print(f"BEGIN {name}")
        self._level += 1
        try:
            yield
        finally:
            self._level -= 1
            self._print(f"END {name}")
