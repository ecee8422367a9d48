"""Compact data structures and algorithms: AVL and B-trees, a ring deque, bit helpers, option parsing, an oriented graph and sequence alignment."""

__version__ = "0.1.0"

__all__ = [
    "align",
    "avl",
    "banded",
    "bits",
    "btree",
    "deque",
    "graph",
    "ketopt",
]