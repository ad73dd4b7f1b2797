## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import inspect
from typing import Any, ForwardRef, Callable, get_origin, get_args

from .span import Span
from .types import Expression
from .errors import KariTypeMissing, KariSignatureError


def get_kari_name(py_name: str) -> str:
    """Map a Python builtin name to its Kari name, e.g. `op_equal_q` to `equal?`."""
    prefix, sep, rest = py_name.partition('_')
    if not sep or prefix not in ('op', 'comb'):
        raise KariSignatureError(f"Builtin function `{py_name}` requires prefix `op_` or `comb_` by convention.")
    return rest.rstrip('_').replace('_b', '!').replace('_q', '?').replace('_', '-')


def _annotation_name(annotation: Any) -> str | None:
    if isinstance(annotation, ForwardRef) or hasattr(annotation, '__forward_arg__'):
        annotation = annotation.__forward_arg__
    if isinstance(annotation, str):
        return annotation.rsplit('.', 1)[-1]
    return getattr(annotation, '__name__', None)


def _is_context_annotation(annotation: Any) -> bool:
    return _annotation_name(annotation) == 'Context'


def _normalize_expected_type(tp, op_name: str) -> type[Expression]:
    if tp is Any: return Expression
    if isinstance(tp, type) and issubclass(tp, Expression): return tp
    raise KariSignatureError(f"Operation `{op_name}` uses unsupported type annotation {tp!r}.")


def get_stack_effects(*, fn: Callable, name: str = None) -> dict:
    """Parse the type annotations from Python to determine how a builtin uses the stack.

    Parameter conventions:
        `Span`:     receives the span of the word that called the builtin.
        `Context`:  receives the evaluation context, for builtins that evaluate or define.
        otherwise:  an `Expression` type, popped from the stack as a typed argument.

    Return conventions:
        None:       nothing is pushed.
        Expression: the value is pushed.
        tuple[...]: every value is pushed, in order.
    """
    assert fn is not None, "Must specify the function to inspect."

    sig = inspect.signature(fn)
    params = list(sig.parameters.values())
    op_name = name or getattr(fn, '__name__', '<unnamed>')

    if any(p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD) for p in params):
        raise KariSignatureError(f"Operation `{op_name}` can not take variadic arguments.")

    missing_inputs = [p.name for p in params if p.annotation is inspect.Parameter.empty]
    if missing_inputs:
        missing = ', '.join(missing_inputs)
        raise KariTypeMissing(f"Operation `{op_name}` must annotate parameters: {missing}.")

    ret_ann = sig.return_annotation
    if ret_ann is inspect.Signature.empty:
        raise KariTypeMissing(f"Operation `{op_name}` must declare a return annotation.")

    roles, inputs = [], []
    for p in params:
        if _is_context_annotation(p.annotation):
            roles.append('context')
        elif p.annotation is Span or _annotation_name(p.annotation) == 'Span':
            roles.append('span')
        else:
            roles.append('input')
            inputs.append(_normalize_expected_type(p.annotation, op_name))

    returns_none = (ret_ann is type(None) or ret_ann is None)
    returns_tuple = (ret_ann is tuple or get_origin(ret_ann) is tuple)
    if returns_none:
        outputs = []
    else:
        outputs = [_normalize_expected_type(t, op_name) for t in (get_args(ret_ann) if returns_tuple else (ret_ann,))]

    return {
        'arity': len(inputs),
        'valency': len(outputs) if returns_tuple else (0 if returns_none else 1),
        'inputs': inputs,
        'outputs': outputs,
        'types': tuple(k.TYPE for k in inputs),
        'roles': roles,
    }
