## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Iterator

from .types import Expression
from .errors import KariStackEmpty


class Stack:
    """Operand stack shared by the whole evaluation run; mutated only at the top."""

    def __init__(self, items=None):
        self._items: list[Expression] = list(items or [])

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        """Bottom to top."""
        return iter(self._items)

    def __repr__(self):
        return "< " + " ".join(str(it) for it in self._items) + " >"

    def push(self, value: Expression) -> None:
        self._items.append(value)

    def push_all(self, values) -> None:
        self._items.extend(values)

    def pop_raw(self) -> Expression:
        if not self._items:
            raise KariStackEmpty("Stack is empty.")
        return self._items.pop()

    def pop(self, kind: type[Expression] = Expression) -> Expression:
        """Pop the top item and downcast it.  A mismatched item is consumed all the same,
        there is no rollback.
        """
        return self.pop_raw().check(kind)

    def pop_args(self, *kinds: type[Expression]) -> tuple:
        """Pop one item per kind, right-most kind from the top, returned in call order."""
        return tuple(reversed([self.pop(k) for k in reversed(kinds)]))

    def peek(self) -> Iterator[Expression]:
        """Top to bottom, without consuming anything."""
        return reversed(self._items)

    def to_list(self) -> list[Expression]:
        return list(self._items)
