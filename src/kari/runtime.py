## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import io
from pathlib import Path
from typing import Any, Callable, TextIO

from .span import Span
from .types import Expression, Bool, Number, List, String, Word, Symbol, Signature, NUMBER_MAX
from .stack import Stack
from .library import Library
from .builtins import load_builtins_library
from .parser import Parser, parse
from .interpreter import Context, interpret

STDIN = '<stdin>'


def iter_prelude_candidates():
    """Resolution order: `libs` next to the package first, then its parents."""
    base = Path(__file__).resolve().parent
    for d in (base, *base.parents[:2]):
        yield d / 'libs' / 'prelude.kr'


class Runtime:
    """Minimal runtime facade focused on embedding and extension.  It owns one evaluation
    context, so successive runs share the stack and the defined functions, and it keeps every
    source stream by name for the diagnostics to find spans again.
    """

    def __init__(self, library: Library | None = None, verbosity: int = 0):
        self.library = library or load_builtins_library()
        self.context = Context(self.library, verbosity=verbosity)
        self.streams: dict[str, TextIO] = {}

    @property
    def stack(self) -> Stack:
        return self.context.stack

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, program: str | TextIO, filename: str | None = None, stats: dict | None = None) -> Stack:
        stream = io.StringIO(program) if isinstance(program, str) else program
        name = filename or getattr(stream, "name", None) or f"<input-{len(self.streams) + 1}>"
        self.streams[name] = stream
        return interpret(stream, name, self.context, stats=stats)

    def load(self, path: str | Path) -> None:
        path = Path(path)
        self.run(path.read_text(encoding='utf-8'), filename=str(path))

    def load_prelude(self) -> Path | None:
        for path in iter_prelude_candidates():
            if not path.exists(): continue
            self.load(path)
            return path
        return None

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register_operation(self, name: str, func: Callable) -> None:
        self.library.add_function(name, func)

    def define(self, name: str, source: str) -> None:
        body = list(self.parse(source, filename=f"<{name}>"))
        self.library.define(name, List(body, _covering(body)))

    def parse(self, source: str, filename: str | None = None) -> Parser:
        name = filename or f"<input-{len(self.streams) + 1}>"
        self.streams[name] = io.StringIO(source)
        return parse(source, name)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def get_signatures(self, name: str) -> list[Signature]:
        return self.library.signatures(name)

    def list_operations(self) -> list[str]:
        return sorted({sig.name for sig in self.library.functions})

    def to_stack(self, values: list) -> Stack:
        return Stack([to_expression(v) for v in values])

    def from_stack(self, stack: Stack | None = None) -> list:
        """Plain Python values, top of the stack first."""
        return [from_expression(e) for e in (self.stack if stack is None else stack).peek()]


def _covering(items: list[Expression]) -> Span | None:
    span = None
    for it in items:
        span = it.span if span is None else span.merge(it.span)
    return span


def to_expression(value: Any, span: Span | None = None) -> Expression:
    match value:
        case Expression(): return value
        case bool(): return Bool(value, span)
        case int() if 0 <= value <= NUMBER_MAX: return Number(value, span)
        case str(): return String(value, span)
        case list(): return List([to_expression(v, span) for v in value], span)
    raise TypeError(f"No Kari expression for Python value {value!r}.")


def from_expression(expr: Expression) -> Any:
    match expr:
        case List(): return [from_expression(e) for e in expr]
        case Word() | Symbol(): return expr
    return expr.value
