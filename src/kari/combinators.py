## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .span import Span
from .types import Bool, List, Word
from .errors import KariTypeError, KariFailure


def _function_name(quotation: List) -> Word | None:
    if len(quotation) == 1 and isinstance(quotation.value[0], Word):
        return quotation.value[0]
    return None


def comb_define(ctx: 'Context', below: List, top: List) -> None:
    """Registers a zero-argument function.  One list holds the single word naming it, the other
    is the body; when both could be a name, the top one is.
    """
    if (name := _function_name(top)) is not None:
        body = below
    elif (name := _function_name(below)) is not None:
        body = top
    else:
        actual = top.value[0] if len(top) == 1 else top
        raise KariTypeError(f"Type error: Expected `{Word.NAME}`, found `{actual}`.", expected=Word.NAME, actual=actual)
    ctx.define(name.value, body)

def comb_eval(ctx: 'Context', this: Span, program: List) -> None:
    """Evaluates a list in the current context, as if its content was written in place."""
    ctx.evaluate(this, program)

def comb_if_(ctx: 'Context', this: Span, condition: Bool, then: List, otherwise: List) -> None:
    ctx.evaluate(this, then if condition.value else otherwise)

def comb_fail(this: Span) -> None:
    """Aborts the whole run, pointing at the word that called it."""
    raise KariFailure("Explicit failure.", span=this)
