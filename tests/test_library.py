## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any

import pytest

from kari.span import Span
from kari.stack import Stack
from kari.types import Builtin, Signature, NUMBER, Number, List, String, Word
from kari.library import Library
from kari.interpreter import Context
from kari.builtins import load_builtins_library
from kari.errors import KariNameError


def zero(this: Span) -> String: return String("zero", this)
def one(a: Number) -> String: return String("one", a.span)
def two(a: Number, b: Number) -> String: return String("two", a.span)
def two_lists(a: List, b: List) -> String: return String("lists", a.span)


def _numbers(*values):
    return Stack([Number(v, None) for v in values])


def test_lower_arity_overload_wins_even_if_higher_one_matches():
    lib = Library()
    lib.add_function('f', zero)
    lib.add_function('f', two)
    fn = lib.get('f', _numbers(1, 2))
    assert fn.meta['arity'] == 0


def test_overload_selected_by_argument_types():
    lib = Library()
    lib.add_function('g', two)
    lib.add_function('g', two_lists)
    assert lib.get('g', _numbers(1, 2)).meta['types'] == (NUMBER, NUMBER)
    stack = Stack([List([], None), List([], None)])
    assert lib.get('g', stack).meta['arity'] == 2
    assert len(lib.signatures('g')) == 2


def test_only_top_of_stack_is_inspected():
    lib = Library()
    lib.add_function('h', one)
    stack = Stack([String("below", None), Number(1, None)])
    assert lib.get('h', stack).meta['arity'] == 1


def test_unknown_name_fails():
    lib = Library()
    span = object()
    with pytest.raises(KariNameError) as info:
        lib.get('nope', Stack(), span)
    assert info.value.name == 'nope'
    assert info.value.span is span


def test_mismatched_types_fail_as_unknown_function():
    lib = Library()
    lib.add_function('f', two)
    with pytest.raises(KariNameError):
        lib.get('f', Stack([String("a", None), Number(1, None)]))


def test_not_enough_arguments_fails():
    lib = Library()
    lib.add_function('f', two)
    with pytest.raises(KariNameError):
        lib.get('f', _numbers(1))


def test_define_registers_a_zero_argument_body():
    lib = Library()
    body = List([Number(5, None)], None)
    lib.define('five', body)
    assert lib.get('five', Stack()) is body
    assert lib.arities['five'] == 0
    assert 'five' in lib


def test_define_overwrites_only_the_same_signature():
    lib = Library()
    lib.add_function('f', one)
    first, second = List([Number(1, None)], None), List([Number(2, None)], None)
    lib.define('f', first)
    lib.define('f', second)
    assert lib.get('f', Stack()) is second
    assert lib.arities['f'] == 1
    assert len(lib.signatures('f')) == 2
    assert isinstance(lib.functions[Signature('f', (NUMBER,))], Builtin)


def test_aliases_resolve_to_builtins():
    lib = load_builtins_library()
    assert lib.get('+', _numbers(3, 4)) is lib.get('add', _numbers(3, 4))
    assert '*' in lib and 'mul' in lib
    with pytest.raises(KariNameError) as info:
        lib.get('+', Stack())
    assert info.value.name == '+'


def test_builtin_surface():
    lib = load_builtins_library()
    for name in ('print', 'define', 'add', 'mul', 'true', 'false', 'dup', 'swap', 'drop', 'equal?', 'eval', 'if', 'fail'):
        assert name in lib, name


def test_narrower_overload_replaces_the_wildcard_key():
    def anything(x: Any) -> String: return String("any", x.span)
    def number(x: Number) -> String: return String("number", x.span)
    lib = Library()
    lib.add_function('f', anything)
    lib.add_function('f', number)
    [sig] = lib.signatures('f')
    assert sig.types[0] is NUMBER

    with pytest.raises(KariNameError):
        lib.get('f', Stack([String("s", None)]))
    ctx = Context(lib, Stack([Number(1, None)]))
    lib.get('f', ctx.stack)(ctx, None)
    assert ctx.stack.to_list() == [String("number", None)]
