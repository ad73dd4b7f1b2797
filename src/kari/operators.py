## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any

from .span import Span
from .types import Expression, Bool, Number


## ARITHMETIC
def op_add(a: Number, b: Number) -> Number: return a + b
def op_mul(a: Number, b: Number) -> Number: return a * b
## BOOLEAN LOGIC
def op_true(this: Span) -> Bool: return Bool(True, this)
def op_false(this: Span) -> Bool: return Bool(False, this)
def op_equal_q(a: Any, b: Any) -> Bool: return Bool(a == b, a.span.merge(b.span))
# STACK OPERATIONS
def op_dup(x: Any) -> tuple[Expression, Expression]: return (x, x)
def op_swap(a: Any, b: Any) -> tuple[Expression, Expression]: return (b, a)
def op_drop(_: Any) -> None: return None
# INPUT/OUTPUT
def op_print(x: Any) -> None:
    print(x, end='', flush=True)
