from collections import deque

import pytest
from hypothesis import given, strategies as st

from kitbag.deque import RingDeque


def test_initial_capacity_is_four():
    d = RingDeque()
    assert d.capacity() == 4
    assert len(d) == 0


def test_grows_by_doubling():
    d = RingDeque(range(5))
    assert d.capacity() == 8
    assert list(d) == [0, 1, 2, 3, 4]


def test_empty_operations_raise():
    d = RingDeque()
    for op in (d.pop, d.shift, d.first, d.last):
        with pytest.raises(IndexError):
            op()


def test_indexing():
    d = RingDeque("abc")
    d.unshift("z")
    assert d[0] == "z"
    assert d[-1] == "c"
    assert d.first() == "z"
    assert d.last() == "c"
    with pytest.raises(IndexError):
        d[4]


def test_resize_too_small_keeps_items():
    d = RingDeque(range(5))
    bits = d.resize(1)
    assert (1 << bits) > len(d)
    assert (1 << (bits - 1)) <= len(d)
    assert d.capacity() == 1 << bits
    assert list(d) == list(range(5))


def test_resize_grow_and_shrink_wrapped():
    d = RingDeque()
    for i in range(3):
        d.push(i)
    d.unshift(-1)
    assert d.resize(6) == 6
    assert list(d) == [-1, 0, 1, 2]
    assert d.resize(2) == 2
    assert list(d) == [-1, 0, 1, 2]
    assert d.resize(2) == 2


@given(st.lists(st.tuples(st.integers(0, 3), st.integers()), max_size=200))
def test_matches_collections_deque(ops):
    d = RingDeque()
    model = deque()
    for op, value in ops:
        if op == 0:
            d.push(value)
            model.append(value)
        elif op == 1:
            d.unshift(value)
            model.appendleft(value)
        elif op == 2 and model:
            assert d.pop() == model.pop()
        elif op == 3 and model:
            assert d.shift() == model.popleft()
        assert len(d) == len(model)
        assert d.capacity() >= len(d)
    assert list(d) == list(model)