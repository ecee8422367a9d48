"""A double-ended queue backed by a power-of-two ring buffer."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Optional


class RingDeque:
    """Deque whose storage grows by doubling; capacity is always ``2**bits``."""

    def __init__(self, items: Optional[Iterable[Any]] = None) -> None:
        self._bits = 2
        self._front = 0
        self._count = 0
        self._slots: List[Any] = [None] * (1 << self._bits)
        for item in items or ():
            self.push(item)

    @property
    def _mask(self) -> int:
        return (1 << self._bits) - 1

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        for i in range(self._count):
            yield self._slots[(self._front + i) & self._mask]

    def __getitem__(self, index: int) -> Any:
        if index < 0:
            index += self._count
        if not 0 <= index < self._count:
            raise IndexError("deque index out of range")
        return self._slots[(self._front + index) & self._mask]

    def capacity(self) -> int:
        """Return the number of slots currently allocated."""
        return 1 << self._bits

    def first(self) -> Any:
        """Return the front item; IndexError if empty."""
        if not self._count:
            raise IndexError("first of an empty deque")
        return self._slots[self._front]

    def last(self) -> Any:
        """Return the back item; IndexError if empty."""
        if not self._count:
            raise IndexError("last of an empty deque")
        return self._slots[(self._front + self._count - 1) & self._mask]

    def resize(self, new_bits: int) -> int:
        """Set capacity to ``2**new_bits``, enlarged if needed to hold every item.

        Returns the number of bits actually in effect.
        """
        if (1 << new_bits) < self._count:
            new_bits = 0
            while (1 << new_bits) <= self._count:
                new_bits += 1
        if new_bits == self._bits:
            return self._bits
        items = list(self)
        self._slots = items + [None] * ((1 << new_bits) - len(items))
        self._front = 0
        self._bits = new_bits
        return self._bits

    def _grow_if_full(self) -> None:
        if self._count == 1 << self._bits:
            self.resize(self._bits + 1)

    def push(self, value: Any) -> None:
        """Append ``value`` at the back."""
        self._grow_if_full()
        self._slots[(self._front + self._count) & self._mask] = value
        self._count += 1

    def pop(self) -> Any:
        """Remove and return the back item; IndexError if empty."""
        if not self._count:
            raise IndexError("pop from an empty deque")
        self._count -= 1
        pos = (self._front + self._count) & self._mask
        value, self._slots[pos] = self._slots[pos], None
        return value

    def unshift(self, value: Any) -> None:
        """Insert ``value`` at the front."""
        self._grow_if_full()
        self._count += 1
        self._front = self._front - 1 if self._front else (1 << self._bits) - 1
        self._slots[self._front] = value

    def shift(self) -> Any:
        """Remove and return the front item; IndexError if empty."""
        if not self._count:
            raise IndexError("shift from an empty deque")
        pos = self._front
        value, self._slots[pos] = self._slots[pos], None
        self._front = (pos + 1) & self._mask
        self._count -= 1
        return value