"""A growable open-addressing set of integers."""

from __future__ import annotations

import operator
from collections.abc import Iterator
from typing import Optional

GOLDEN_RATIO = 0.6180339887
MINIMUM_LOAD = 2
MAXIMUM_LOAD = 8


def _fraction(value: int) -> float:
    """Scramble ``value`` into a number in [0, 1)."""
    return (value * GOLDEN_RATIO) % 1.0


def _displaced(home: int, gap: int, slot: int) -> bool:
    """True if a value at ``slot`` whose home is ``home`` may move into ``gap``."""
    if gap < slot:
        return home <= gap or home > slot
    return slot < home <= gap


class IntSet:
    """A set of integers using multiplicative hashing and linear probing.

    The table doubles once it is more than half full and halves once it is
    at most one eighth full.
    """

    def __init__(self, capacity: int = 0) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._slots: list[Optional[int]] = [None] * capacity
        self._size = 0

    @property
    def capacity(self) -> int:
        """The number of slots in the table."""
        return len(self._slots)

    def _home(self, value: int) -> int:
        capacity = len(self._slots)
        return int(_fraction(value) * capacity) % capacity

    def _probe(self, value: int) -> Iterator[int]:
        capacity = len(self._slots)
        if not capacity:
            return
        start = self._home(value)
        for step in range(capacity):
            yield (start + step) % capacity

    def _find(self, value: int) -> Optional[int]:
        for index in self._probe(value):
            stored = self._slots[index]
            if stored is None:
                return None
            if stored == value:
                return index
        return None

    def _place(self, value: int) -> None:
        for index in self._probe(value):
            if self._slots[index] is None:
                self._slots[index] = value
                return

    def _rehash(self, capacity: int) -> None:
        old = self._slots
        self._slots = [None] * capacity
        for value in old:
            if value is not None:
                self._place(value)

    def add(self, value: int) -> bool:
        """Add ``value``; return False if it was already present."""
        value = operator.index(value)
        for index in self._probe(value):
            stored = self._slots[index]
            if stored is None:
                self._slots[index] = value
                self._size += 1
                break
            if stored == value:
                return False
        else:
            self._rehash(max(self.capacity, 1) * MINIMUM_LOAD)
            self._place(value)
            self._size += 1

        if self._size * MINIMUM_LOAD > self.capacity:
            self._rehash(self.capacity * MINIMUM_LOAD)
        return True

    def remove(self, value: int) -> None:
        """Remove ``value``; raise KeyError if it is not present."""
        index = self._find(value) if isinstance(value, int) else None
        if index is None:
            raise KeyError(value)
        self._slots[index] = None
        self._size -= 1
        if self._size * MAXIMUM_LOAD <= self.capacity:
            self._rehash(self.capacity // MINIMUM_LOAD)
        else:
            self._close_gap(index)

    def _close_gap(self, gap: int) -> None:
        capacity = len(self._slots)
        for step in range(1, capacity):
            index = (gap + step) % capacity
            stored = self._slots[index]
            if stored is None:
                break
            if _displaced(self._home(stored), gap, index):
                self._slots[gap] = stored
                self._slots[index] = None
                gap = index

    def clear(self) -> None:
        """Remove every value and release the table."""
        self._slots = []
        self._size = 0

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self._find(value) is not None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        return (value for value in self._slots if value is not None)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self)!r})"