## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable
from itertools import islice
from dataclasses import dataclass, field

from .span import Span
from .types import Signature, Builtin, List
from .stack import Stack
from .errors import KariNameError
from .loader import get_stack_effects


@dataclass
class Library:
    """Functions registry, mapping signatures to builtins or to user-defined bodies."""
    functions: dict[Signature, Builtin | List] = field(default_factory=dict)
    arities: dict[str, int] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)

    # Registration helpers
    def add_function(self, name: str, fn: Callable[..., Any]) -> None:
        fn, meta = _make_wrapper(fn, name)
        self._insert(Signature(name, meta['types']), Builtin(fn, name, meta))

    def define(self, name: str, body: List) -> None:
        self._insert(Signature(self.aliases.get(name, name)), body)

    def _insert(self, signature: Signature, function: Builtin | List) -> None:
        # Dict assignment would keep an equal but wider key, e.g. `f(any)` for a new `f(number)`.
        self.functions.pop(signature, None)
        self.functions[signature] = function
        self.arities[signature.name] = max(self.arities.get(signature.name, 0), len(signature.types))

    # Lookup
    def get(self, name: str, stack: Stack, span: Span | None = None) -> Builtin | List:
        """Resolve a call by trying every arity in ascending order against the types on top of
        the stack.  The first match wins, even if a longer signature would also match.
        """
        resolved_name = self.aliases.get(name, name)
        for n in range(self.arities.get(resolved_name, -1) + 1):
            args = list(islice(stack.peek(), n))
            if len(args) < n: break
            signature = Signature(resolved_name, (a.TYPE for a in reversed(args)))
            if (function := self.functions.get(signature)) is not None:
                return function
        raise KariNameError(f"Unknown function: `{name}`.", name=name, span=span)

    def signatures(self, name: str) -> list[Signature]:
        resolved_name = self.aliases.get(name, name)
        return [sig for sig in self.functions if sig.name == resolved_name]

    def __contains__(self, name: str) -> bool:
        return self.aliases.get(name, name) in self.arities


def _make_wrapper(fn: Callable[..., Any], name: str) -> tuple[Callable, dict]:
    meta = get_stack_effects(fn=fn, name=name)
    roles, inputs = meta['roles'], meta['inputs']

    match meta['valency']:
        case 0:
            def push(stack, _): pass
        case 1:
            def push(stack, res): stack.push(res)
        case _:
            def push(stack, res): stack.push_all(res)

    def wrapper(ctx, this: Span):
        args = iter(ctx.stack.pop_args(*inputs))
        params = {'context': lambda: ctx, 'span': lambda: this, 'input': lambda: next(args)}
        push(ctx.stack, fn(*[params[r]() for r in roles]))

    return wrapper, meta
