import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from kitbag.btree import BTree


def test_degree_below_two_rejected():
    with pytest.raises(ValueError):
        BTree(1)


def test_from_node_size_default():
    assert BTree.from_node_size(512, 4).t == 21


def test_from_node_size_too_small():
    with pytest.raises(ValueError):
        BTree.from_node_size(16, 8)


@pytest.mark.parametrize("t", [2, 3, 5])
def test_insert_iterates_sorted(t):
    rng = random.Random(t)
    keys = rng.sample(range(10000), 500)
    tree = BTree(t)
    for k in keys:
        tree.put(k)
    assert len(tree) == len(keys)
    assert list(tree) == sorted(keys)
    assert tree.first() == min(keys)
    assert all(k in tree for k in keys)
    assert 10001 not in tree


@pytest.mark.parametrize("t", [2, 3, 4])
def test_delete_all_random_order(t):
    rng = random.Random(100 + t)
    keys = rng.sample(range(5000), 300)
    tree = BTree(t)
    for k in keys:
        tree.put(k)
    remaining = sorted(keys)
    order = keys[:]
    rng.shuffle(order)
    for k in order:
        assert tree.delete(k) == k
        remaining.remove(k)
        assert k not in tree
        assert len(tree) == len(remaining)
    assert list(tree) == []
    assert tree.n_nodes() == 1


def test_node_count_grows_and_shrinks():
    tree = BTree(2)
    assert tree.n_nodes() == 1
    for k in range(50):
        tree.put(k)
    assert tree.n_nodes() > 1
    for k in range(50):
        tree.delete(k)
    assert tree.n_nodes() == 1


def test_get_returns_stored_key():
    tree = BTree(2)
    for word in ["pear", "apple", "fig"]:
        tree.put(word)
    assert tree.get("fig") == "fig"
    assert tree.get("kiwi") is None


def test_interval():
    tree = BTree(2)
    for k in [10, 20, 30]:
        tree.put(k)
    assert tree.interval(25) == (20, 30)
    assert tree.interval(20) == (20, 20)
    assert tree.interval(5) == (None, 10)
    assert tree.interval(35) == (30, None)


def test_interval_empty():
    assert BTree(3).interval(7) == (None, None)


def test_interval_large_tree():
    tree = BTree(2)
    for k in range(0, 400, 4):
        tree.put(k)
    for q in range(-3, 402):
        lower, upper = tree.interval(q)
        expected_lower = max((k for k in range(0, 400, 4) if k <= q), default=None)
        expected_upper = min((k for k in range(0, 400, 4) if k >= q), default=None)
        assert lower == expected_lower
        assert upper == expected_upper


def test_delete_missing_raises():
    tree = BTree(2)
    tree.put(1)
    with pytest.raises(KeyError):
        tree.delete(2)
    assert len(tree) == 1


def test_first_empty_raises():
    with pytest.raises(KeyError):
        BTree(2).first()


def test_duplicates_kept():
    tree = BTree(2)
    for k in [5, 5, 3, 5]:
        tree.put(k)
    assert list(tree) == [3, 5, 5, 5]
    tree.delete(5)
    assert list(tree) == [3, 5, 5]
    assert len(tree) == 3


def test_iter_from():
    tree = BTree(2)
    keys = list(range(0, 200, 3))
    for k in keys:
        tree.put(k)
    for q in range(-1, 202):
        assert list(tree.iter_from(q)) == [k for k in keys if k >= q]


@settings(max_examples=60, deadline=None)
@given(
    st.integers(min_value=2, max_value=4),
    st.lists(st.tuples(st.booleans(), st.integers(min_value=0, max_value=60)), max_size=200),
)
def test_matches_sorted_list_model(t, ops):
    tree = BTree(t)
    model = []
    for is_put, k in ops:
        if is_put:
            tree.put(k)
            model.append(k)
        elif k in model:
            tree.delete(k)
            model.remove(k)
        else:
            with pytest.raises(KeyError):
                tree.delete(k)
    assert list(tree) == sorted(model)
    assert len(tree) == len(model)