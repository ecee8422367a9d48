"""An AVL tree of distinct ordered items that also tracks subtree sizes.

Subtree sizes let the tree answer rank queries (how many items are less than
or equal to a value) in logarithmic time.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Optional


class _Node:
    __slots__ = ("data", "balance", "size", "child")

    def __init__(self, data: Any) -> None:
        self.data = data
        self.balance = 0  # height(right) - height(left)
        self.size = 1
        self.child: List[Optional[_Node]] = [None, None]


_FIRST = object()


def _size(node: Optional[_Node]) -> int:
    return node.size if node is not None else 0


def _cmp(x: Any, y: Any) -> int:
    return (y < x) - (x < y)


def _rotate1(p: _Node, direction: int) -> _Node:
    """One rotation: (a,(b,c)q)p => ((a,b)p,c)q."""
    opp = 1 - direction
    q = p.child[opp]
    size_p = p.size
    p.size -= q.size - _size(q.child[direction])
    q.size = size_p
    p.child[opp] = q.child[direction]
    q.child[direction] = p
    return q


def _rotate2(p: _Node, direction: int) -> _Node:
    """Two rotations: (a,((b,c)r,d)q)p => ((a,b)p,(c,d)q)r."""
    opp = 1 - direction
    q = p.child[opp]
    r = q.child[direction]
    size_r_dir = _size(r.child[direction])
    r.size = p.size
    p.size -= q.size - size_r_dir
    q.size -= size_r_dir + 1
    p.child[opp] = r.child[direction]
    r.child[direction] = p
    q.child[direction] = r.child[opp]
    r.child[opp] = q
    b1 = 1 if direction == 0 else -1
    if r.balance == b1:
        q.balance, p.balance = 0, -b1
    elif r.balance == 0:
        q.balance = p.balance = 0
    else:
        q.balance, p.balance = b1, 0
    r.balance = 0
    return r


class AvlTree:
    """A balanced binary search tree holding distinct items in sorted order."""

    def __init__(self, items: Optional[Iterable[Any]] = None) -> None:
        self._root: Optional[_Node] = None
        for item in items or ():
            self.insert(item)

    def __len__(self) -> int:
        return _size(self._root)

    def __iter__(self) -> Iterator[Any]:
        stack: List[_Node] = []
        p = self._root
        while p is not None:
            stack.append(p)
            p = p.child[0]
        return self._walk(stack)

    def __contains__(self, item: Any) -> bool:
        return self._locate(item)[0] is not None

    @staticmethod
    def _walk(stack: List[_Node]) -> Iterator[Any]:
        while stack:
            node = stack.pop()
            yield node.data
            p = node.child[1]
            while p is not None:
                stack.append(p)
                p = p.child[0]

    def _locate(self, item: Any) -> tuple:
        p = self._root
        count = 0
        while p is not None:
            c = _cmp(item, p.data)
            if c >= 0:
                count += _size(p.child[0]) + 1
            if c < 0:
                p = p.child[0]
            elif c > 0:
                p = p.child[1]
            else:
                break
        return p, count

    def find(self, item: Any) -> Any:
        """Return the stored item equal to ``item``, or None if absent."""
        node = self._locate(item)[0]
        return node.data if node is not None else None

    def rank(self, item: Any) -> int:
        """Return the number of stored items less than or equal to ``item``."""
        return self._locate(item)[1]

    def insert(self, item: Any) -> tuple:
        """Insert ``item``; return ``(stored_item, inserted)``.

        If an equal item is already present it is returned unchanged with
        ``inserted`` set to False.
        """
        stack: List[int] = []
        path: List[_Node] = []
        bp = self._root
        bq: Optional[_Node] = None
        p = bp
        q: Optional[_Node] = None
        which = 0
        while p is not None:
            c = _cmp(item, p.data)
            if c == 0:
                return p.data, False
            if p.balance != 0:
                bq, bp = q, p
                stack = []
            which = 1 if c > 0 else 0
            stack.append(which)
            path.append(p)
            q, p = p, p.child[which]
        x = _Node(item)
        if q is None:
            self._root = x
        else:
            q.child[which] = x
        if bp is None:
            return item, True
        for node in path:
            node.size += 1
        p = bp
        for step in stack:
            p.balance += 1 if step else -1
            p = p.child[step]
        if -2 < bp.balance < 2:
            return item, True
        which = 1 if bp.balance < 0 else 0
        b1 = 1 if which == 0 else -1
        q = bp.child[1 - which]
        if q.balance == b1:
            r = _rotate1(bp, which)
            q.balance = bp.balance = 0
        else:
            r = _rotate2(bp, which)
        if bq is None:
            self._root = r
        else:
            bq.child[0 if bp is bq.child[0] else 1] = r
        return item, True

    def erase(self, item: Any) -> Any:
        """Remove and return the stored item equal to ``item``.

        Raises KeyError if no such item is present.
        """
        return self._erase(item)

    def pop_first(self) -> Any:
        """Remove and return the smallest item; KeyError if the tree is empty."""
        if self._root is None:
            raise KeyError("pop_first from an empty tree")
        return self._erase(_FIRST)

    def _erase(self, item: Any) -> Any:
        fake = _Node(None)
        fake.child[0] = self._root
        path: List[Any] = []
        dirs: List[Any] = []
        if item is _FIRST:
            p: Optional[_Node] = fake
            while p is not None:
                dirs.append(0)
                path.append(p)
                p = p.child[0]
            dirs.pop()
            p = path.pop()
        else:
            c = -1
            p = fake
            while c:
                which = 1 if c > 0 else 0
                dirs.append(which)
                path.append(p)
                p = p.child[which]
                if p is None:
                    raise KeyError(item)
                c = _cmp(item, p.data)
        for node in path[1:]:
            node.size -= 1
        if p.child[1] is None:
            path[-1].child[dirs[-1]] = p.child[0]
        else:
            q = p.child[1]
            if q.child[0] is None:
                q.child[0] = p.child[0]
                q.balance = p.balance
                path[-1].child[dirs[-1]] = q
                path.append(q)
                dirs.append(1)
                q.size = p.size - 1
            else:
                e = len(path)
                path.append(None)
                dirs.append(None)
                while True:
                    dirs.append(0)
                    path.append(q)
                    r = q.child[0]
                    if r.child[0] is None:
                        break
                    q = r
                r.child[0] = p.child[0]
                q.child[0] = r.child[1]
                r.child[1] = p.child[1]
                r.balance = p.balance
                path[e - 1].child[dirs[e - 1]] = r
                path[e], dirs[e] = r, 1
                for node in path[e + 1:]:
                    node.size -= 1
                r.size = p.size - 1
        for d in range(len(path) - 1, 0, -1):
            q = path[d]
            which = dirs[d]
            other = 1 - which
            b1, b2 = (1, 2) if which == 0 else (-1, -2)
            q.balance += b1
            if q.balance == b1:
                break
            if q.balance == b2:
                r = q.child[other]
                if r.balance == -b1:
                    path[d - 1].child[dirs[d - 1]] = _rotate2(q, which)
                else:
                    path[d - 1].child[dirs[d - 1]] = _rotate1(q, which)
                    if r.balance == 0:
                        r.balance = -b1
                        q.balance = b1
                        break
                    r.balance = q.balance = 0
        self._root = fake.child[0]
        return p.data

    def iter_from(self, item: Any) -> Iterator[Any]:
        """Iterate in order over the stored items greater than or equal to ``item``."""
        stack: List[_Node] = []
        p = self._root
        while p is not None:
            c = _cmp(item, p.data)
            if c < 0:
                stack.append(p)
                p = p.child[0]
            elif c > 0:
                p = p.child[1]
            else:
                stack.append(p)
                break
        return self._walk(stack)

    def validate(self) -> int:
        """Check ordering, balance factors and sizes; return the tree height.

        Raises ValueError when an invariant is broken.
        """

        def check(node: Optional[_Node], low: Any, high: Any, bounded: tuple) -> tuple:
            if node is None:
                return 0, 0
            has_low, has_high = bounded
            if has_low and not low < node.data:
                raise ValueError("ordering violated")
            if has_high and not node.data < high:
                raise ValueError("ordering violated")
            hl, sl = check(node.child[0], low, node.data, (has_low, True))
            hr, sr = check(node.child[1], node.data, high, (True, has_high))
            if node.balance != hr - hl or abs(node.balance) > 1:
                raise ValueError("balance factor violated")
            if node.size != sl + sr + 1:
                raise ValueError("subtree size violated")
            return max(hl, hr) + 1, node.size

        return check(self._root, None, None, (False, False))[0]