## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Iterable, TextIO

from .span import Span
from .types import Expression, Word, List, Builtin
from .stack import Stack
from .errors import KariError
from .library import Library
from .parser import Parser
from .tokenizer import Tokenizer
from .formatting import show_step


class Context:
    """Evaluation state of one run: the operand stack and the functions registry.  Function
    bodies run against the same stack as their caller, there are no call frames.
    """

    def __init__(self, library: Library, stack: Stack | None = None, verbosity: int = 0):
        self.library = library
        self.stack = Stack() if stack is None else stack
        self.verbosity = verbosity
        self.steps = 0
        self.depth = 0

    def define(self, name: str, body: List) -> None:
        self.library.define(name, body)

    def evaluate(self, operator: Span | None, expressions: Iterable[Expression]) -> None:
        """Run expressions in order until exhausted or the first error.  When the expressions
        come from calling `operator`, its span is added to the trace of any error passing by.
        """
        self.depth += 1
        try:
            for expr in expressions:
                self.step(expr)
        except KariError as exc:
            if operator is not None:
                exc.stack_trace.append(operator)
            raise
        finally:
            self.depth -= 1

    def step(self, expr: Expression) -> None:
        if self.verbosity == 2 or (self.verbosity == 1 and self.depth == 1):
            show_step(self.steps, self.depth, expr, self.stack)
        self.steps += 1

        if not isinstance(expr, Word):
            self.stack.push(expr)
            return

        function = self.library.get(expr.value, self.stack, expr.span)
        if isinstance(function, Builtin):
            try:
                function(self, expr.span)
            except KariError as exc:
                if exc.span is None: exc.span = expr.span
                raise
        else:
            self.evaluate(expr.span, function)


def interpret(stream: TextIO, name: str | None, context: Context, stats: dict | None = None) -> Stack:
    start = context.steps
    try:
        context.evaluate(None, Parser(Tokenizer(stream, name)))
    finally:
        if stats is not None:
            stats['steps'] = stats.get('steps', 0) + context.steps - start
    return context.stack
