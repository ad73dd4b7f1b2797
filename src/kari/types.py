## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable
from dataclasses import dataclass

from .span import Span
from .errors import KariTypeError, KariOverflowError


class Type:
    """Runtime type descriptor of an expression, as used by dispatch.  The wildcard `ANY`
    is equal to every other descriptor, all the others compare by name.
    """

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other):
        if not isinstance(other, Type): return NotImplemented
        return self is ANY or other is ANY or self.name == other.name

    __hash__ = None

    def __repr__(self):
        return f"<{self.name}>"


ANY = Type('any')
BOOL, NUMBER, LIST, STRING, WORD, SYMBOL = (Type(n) for n in ('bool', 'number', 'list', 'string', 'word', 'symbol'))

# Numbers are 32-bit unsigned integers.
NUMBER_MAX = 2**32 - 1


@dataclass(eq=False)
class Expression:
    """Generic form of every Kari value: a payload with the span it came from."""
    NAME = 'expression'
    TYPE = ANY

    value: Any
    span: Span

    def check(self, kind: type["Expression"]) -> "Expression":
        """Downcast into a specific variant, or fail with the original expression attached."""
        if isinstance(self, kind):
            return self
        raise KariTypeError(f"Type error: Expected `{kind.NAME}`, found `{self}`.", expected=kind.NAME, actual=self)

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    __hash__ = None

    def __str__(self):
        return str(self.value)


class Bool(Expression):
    NAME, TYPE = 'bool', BOOL

    def __str__(self):
        return 'true' if self.value else 'false'


class Number(Expression):
    NAME, TYPE = 'number', NUMBER

    def __add__(self, other: "Number") -> "Number":
        return self._combine(self.value + other.value, other)

    def __mul__(self, other: "Number") -> "Number":
        return self._combine(self.value * other.value, other)

    def _combine(self, value: int, other: "Number") -> "Number":
        span = self.span.merge(other.span)
        if value > NUMBER_MAX:
            raise KariOverflowError(f"Arithmetic overflow: `{value}` does not fit in a number.", span=span)
        return Number(value, span)


class List(Expression):
    NAME, TYPE = 'list', LIST

    def __iter__(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    def __str__(self):
        return '[ ' + ''.join(f"{it} " for it in self.value) + ']'


class String(Expression):
    NAME, TYPE = 'string', STRING


class Word(Expression):
    NAME, TYPE = 'word', WORD


class Symbol(Expression):
    NAME, TYPE = 'symbol', SYMBOL

    def __str__(self):
        return f":{self.value}"


VARIANTS = (Bool, Number, List, String, Word, Symbol)


class Signature:
    """Dispatch key of a function: its name and the types of the arguments it takes.

    The hash only covers the name, so every overload of a name shares a bucket and the
    wildcard-aware equality picks the actual entry during lookup.
    """
    __slots__ = ('name', 'types')

    def __init__(self, name: str, types: tuple = ()):
        self.name = name
        self.types = tuple(types)

    def __hash__(self):
        return hash(self.name)

    def __eq__(self, other):
        if not isinstance(other, Signature): return NotImplemented
        return self.name == other.name and len(self.types) == len(other.types) \
            and all(a == b for a, b in zip(self.types, other.types))

    def __repr__(self):
        return f"{self.name}({' '.join(t.name for t in self.types)})"


class Builtin:
    """Natively implemented function; called with the evaluation context and call-site span."""

    def __init__(self, ptr: Callable, name: str, meta: dict):
        self.ptr = ptr
        self.name = name
        self.meta = meta

    def __call__(self, ctx, this: Span) -> None:
        self.ptr(ctx, this)

    def __repr__(self):
        return f"{self.name}"
