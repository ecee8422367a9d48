"""An in-memory B-tree of ordered keys.

Every node other than the root holds between ``t - 1`` and ``2t - 1`` keys,
where ``t`` is the minimum degree. Nodes that are full are split on the way
down during insertion. Nodes that are short are refilled from a sibling, or
merged with one, on the way down during deletion. Equal keys may be stored
more than once.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Any, Iterator, List, Optional, Tuple

_POINTER_SIZE = 8
DEFAULT_NODE_SIZE = 512


def _cmp(a: Any, b: Any) -> int:
    return (b < a) - (a < b)


class _Node:
    __slots__ = ("is_internal", "keys", "children")

    def __init__(self, is_internal: bool = False) -> None:
        self.is_internal = is_internal
        self.keys: List[Any] = []
        self.children: List[_Node] = []


class BTree:
    """A B-tree with minimum degree ``t``. Nodes hold at most ``2t - 1`` keys."""

    def __init__(self, t: int = 21) -> None:
        if t < 2:
            raise ValueError("minimum degree must be at least 2")
        self.t = t
        self._max_keys = 2 * t - 1
        self._root = _Node()
        self._n_keys = 0
        self._n_nodes = 1

    @classmethod
    def from_node_size(cls, size: int = DEFAULT_NODE_SIZE, key_size: int = 8) -> "BTree":
        """Build a tree whose degree fits nodes of ``size`` bytes holding keys of ``key_size`` bytes."""
        t = ((size - 4 - _POINTER_SIZE) // (_POINTER_SIZE + key_size) + 1) >> 1
        if t < 2:
            raise ValueError(f"node size {size} is too small for keys of {key_size} bytes")
        return cls(t)

    def __len__(self) -> int:
        return self._n_keys

    def __iter__(self) -> Iterator[Any]:
        stack: List[Tuple[_Node, int]] = []
        self._descend(stack, self._root)
        return self._walk(stack)

    def __contains__(self, key: Any) -> bool:
        return self._locate(key) is not None

    def n_nodes(self) -> int:
        """Return the number of nodes in the tree."""
        return self._n_nodes

    @staticmethod
    def _search(x: _Node, key: Any) -> Tuple[int, int]:
        """Return ``(i, r)``: the last key index not greater than ``key`` and the comparison there."""
        keys = x.keys
        if not keys:
            return -1, 0
        begin = bisect_left(keys, key)
        if begin == len(keys):
            return len(keys) - 1, 1
        r = _cmp(key, keys[begin])
        if r < 0:
            begin -= 1
        return begin, r

    def _locate(self, key: Any) -> Optional[Tuple[_Node, int]]:
        x = self._root
        while True:
            i, r = self._search(x, key)
            if i >= 0 and r == 0:
                return x, i
            if not x.is_internal:
                return None
            x = x.children[i + 1]

    def get(self, key: Any) -> Any:
        """Return the stored key equal to ``key``, or None if absent."""
        found = self._locate(key)
        if found is None:
            return None
        node, i = found
        return node.keys[i]

    def interval(self, key: Any) -> Tuple[Any, Any]:
        """Return ``(lower, upper)``: the nearest stored keys around ``key``.

        If ``key`` is present both are the stored key. A side with no stored
        key is None.
        """
        lower = upper = None
        x = self._root
        while True:
            i, r = self._search(x, key)
            if i >= 0 and r == 0:
                return x.keys[i], x.keys[i]
            if i >= 0:
                lower = x.keys[i]
            if i < len(x.keys) - 1:
                upper = x.keys[i + 1]
            if not x.is_internal:
                return lower, upper
            x = x.children[i + 1]

    def _split(self, x: _Node, i: int, y: _Node) -> None:
        """Split the full child ``y`` of ``x`` found at position ``i``."""
        t = self.t
        z = _Node(y.is_internal)
        z.keys = y.keys[t:]
        if y.is_internal:
            z.children = y.children[t:]
            del y.children[t:]
        middle = y.keys[t - 1]
        del y.keys[t - 1:]
        x.children.insert(i + 1, z)
        x.keys.insert(i, middle)
        self._n_nodes += 1

    def put(self, key: Any) -> Any:
        """Insert ``key`` (duplicates are kept) and return it."""
        self._n_keys += 1
        r = self._root
        if len(r.keys) == self._max_keys:
            s = _Node(True)
            s.children.append(r)
            self._root = s
            self._n_nodes += 1
            self._split(s, 0, r)
        x = self._root
        while x.is_internal:
            i = self._search(x, key)[0] + 1
            if len(x.children[i].keys) == self._max_keys:
                self._split(x, i, x.children[i])
                if _cmp(key, x.keys[i]) > 0:
                    i += 1
            x = x.children[i]
        i = self._search(x, key)[0]
        x.keys.insert(i + 1, key)
        return key

    def _delete_from(self, x: _Node, key: Any, s: int) -> Any:
        """Remove a key below ``x``: ``key`` if ``s`` is 0, the largest if 1, the smallest if 2."""
        t = self.t
        if s:
            r = 0 if not x.is_internal else (1 if s == 1 else -1)
            i = len(x.keys) - 1 if s == 1 else -1
        else:
            i, r = self._search(x, key)
        if not x.is_internal:
            if s == 2:
                i += 1
            return x.keys.pop(i)
        if r == 0:
            y = x.children[i]
            z = x.children[i + 1]
            if len(y.keys) >= t:
                found = x.keys[i]
                x.keys[i] = self._delete_from(y, None, 1)
                return found
            if len(z.keys) >= t:
                found = x.keys[i]
                x.keys[i] = self._delete_from(z, None, 2)
                return found
            if len(y.keys) == t - 1 and len(z.keys) == t - 1:
                y.keys.append(x.keys[i])
                y.keys.extend(z.keys)
                if y.is_internal:
                    y.children.extend(z.children)
                del x.keys[i]
                del x.children[i + 1]
                self._n_nodes -= 1
                return self._delete_from(y, key, s)
        i += 1
        xp = x.children[i]
        if len(xp.keys) == t - 1:
            left = x.children[i - 1] if i > 0 else None
            right = x.children[i + 1] if i < len(x.keys) else None
            if left is not None and len(left.keys) >= t:
                xp.keys.insert(0, x.keys[i - 1])
                x.keys[i - 1] = left.keys.pop()
                if xp.is_internal:
                    xp.children.insert(0, left.children.pop())
            elif right is not None and len(right.keys) >= t:
                xp.keys.append(x.keys[i])
                x.keys[i] = right.keys.pop(0)
                if xp.is_internal:
                    xp.children.append(right.children.pop(0))
            elif left is not None and len(left.keys) == t - 1:
                left.keys.append(x.keys[i - 1])
                left.keys.extend(xp.keys)
                if left.is_internal:
                    left.children.extend(xp.children)
                del x.keys[i - 1]
                del x.children[i]
                self._n_nodes -= 1
                xp = left
            elif right is not None and len(right.keys) == t - 1:
                xp.keys.append(x.keys[i])
                xp.keys.extend(right.keys)
                if xp.is_internal:
                    xp.children.extend(right.children)
                del x.keys[i]
                del x.children[i + 1]
                self._n_nodes -= 1
        return self._delete_from(xp, key, s)

    def delete(self, key: Any) -> Any:
        """Remove one key equal to ``key`` and return it; KeyError if absent."""
        if self._locate(key) is None:
            raise KeyError(key)
        removed = self._delete_from(self._root, key, 0)
        self._n_keys -= 1
        root = self._root
        if not root.keys and root.is_internal:
            self._root = root.children[0]
            self._n_nodes -= 1
        return removed

    def first(self) -> Any:
        """Return the smallest key; KeyError if the tree is empty."""
        if not self._n_keys:
            raise KeyError("first of an empty tree")
        x = self._root
        while x.is_internal:
            x = x.children[0]
        return x.keys[0]

    @staticmethod
    def _descend(stack: List[Tuple[_Node, int]], node: _Node) -> None:
        while True:
            stack.append((node, 0))
            if not node.is_internal:
                return
            node = node.children[0]

    @classmethod
    def _walk(cls, stack: List[Tuple[_Node, int]]) -> Iterator[Any]:
        while stack:
            node, i = stack.pop()
            if i < len(node.keys):
                yield node.keys[i]
                stack.append((node, i + 1))
                if node.is_internal:
                    cls._descend(stack, node.children[i + 1])

    def iter_from(self, key: Any) -> Iterator[Any]:
        """Iterate in order over the stored keys greater than or equal to ``key``."""
        stack: List[Tuple[_Node, int]] = []
        x = self._root
        while True:
            i = bisect_left(x.keys, key)
            stack.append((x, i))
            if not x.is_internal:
                break
            x = x.children[i]
        return self._walk(stack)