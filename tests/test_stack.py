## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from kari.stack import Stack
from kari.types import Number, String, List
from kari.errors import KariTypeError, KariStackEmpty


def test_push_and_pop_are_last_in_first_out():
    stack = Stack()
    stack.push(Number(1, None))
    stack.push(Number(2, None))
    assert stack.pop().value == 2
    assert stack.pop().value == 1
    assert len(stack) == 0


def test_pop_from_empty_stack():
    with pytest.raises(KariStackEmpty):
        Stack().pop()
    with pytest.raises(KariStackEmpty):
        Stack().pop_raw()


def test_typed_pop_checks_the_tag():
    stack = Stack([String("a", None), Number(1, None)])
    assert stack.pop(Number) == Number(1, None)
    assert len(stack) == 1


def test_failed_typed_pop_consumes_the_item():
    offender = String("oops", None)
    stack = Stack([Number(1, None), offender])
    with pytest.raises(KariTypeError) as info:
        stack.pop(Number)
    assert info.value.expected == "number"
    assert info.value.actual is offender
    assert stack.to_list() == [Number(1, None)]


def test_pop_args_returns_call_order():
    stack = Stack([Number(1, None), List([], None), Number(3, None)])
    a, b, c = stack.pop_args(Number, List, Number)
    assert (a.value, b.value, c.value) == (1, [], 3)
    assert len(stack) == 0


def test_peek_goes_top_down_without_consuming():
    stack = Stack([Number(1, None), Number(2, None), Number(3, None)])
    assert [e.value for e in stack.peek()] == [3, 2, 1]
    assert [e.value for e in stack] == [1, 2, 3]
    assert len(stack) == 3
