"""An open-addressing hash map of nodes that carry their own keys."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from typing import Any, Generic, Optional, TypeVar

N = TypeVar("N")


def _displaced(home: int, gap: int, slot: int) -> bool:
    """True if a node at ``slot`` whose home is ``home`` may move into ``gap``."""
    if gap < slot:
        return home <= gap or home > slot
    return slot < home <= gap


class HashMap(Generic[N]):
    """A fixed-capacity hash table with linear probing.

    Nodes are stored whole; ``key`` extracts a node's key (the node itself
    when None) and ``hash_key`` hashes a key. Keys are compared with ``==``.
    """

    def __init__(
        self,
        capacity: int,
        key: Optional[Callable[[N], Hashable]] = None,
        hash_key: Callable[[Any], int] = hash,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._slots: list[Optional[N]] = [None] * capacity
        self._key_func = key
        self._hash_key = hash_key
        self._size = 0

    @property
    def capacity(self) -> int:
        """The number of slots in the table."""
        return len(self._slots)

    def _key(self, node: N) -> Any:
        if self._key_func is None:
            return node
        return self._key_func(node)

    def _home(self, key: Any) -> int:
        return self._hash_key(key) % len(self._slots)

    def _probe(self, start: int) -> Iterator[int]:
        capacity = len(self._slots)
        for step in range(capacity):
            yield (start + step) % capacity

    def _find(self, key: Any) -> Optional[int]:
        for index in self._probe(self._home(key)):
            node = self._slots[index]
            if node is None:
                return None
            if self._key(node) == key:
                return index
        return None

    def _place(self, node: N) -> None:
        for index in self._probe(self._home(self._key(node))):
            if self._slots[index] is None:
                self._slots[index] = node
                return

    def insert(self, node: N) -> tuple[Optional[N], bool]:
        """Insert ``node`` unless its key is present.

        Returns ``(node, True)`` when inserted, ``(existing, False)`` when a
        node with an equal key is already stored, and ``(None, False)`` when
        the table is full.
        """
        key = self._key(node)
        for index in self._probe(self._home(key)):
            stored = self._slots[index]
            if stored is None:
                self._slots[index] = node
                self._size += 1
                return node, True
            if self._key(stored) == key:
                return stored, False
        return None, False

    def get(self, key: Any) -> Optional[N]:
        """Return the node stored under ``key``, or None."""
        index = self._find(key)
        return None if index is None else self._slots[index]

    def remove(self, key: Any) -> N:
        """Remove and return the node stored under ``key``.

        Raises KeyError if no such node is stored.
        """
        index = self._find(key)
        if index is None:
            raise KeyError(key)
        node = self._slots[index]
        self._slots[index] = None
        self._size -= 1
        self._close_gap(index)
        return node  # type: ignore[return-value]

    def _close_gap(self, gap: int) -> None:
        capacity = len(self._slots)
        for step in range(1, capacity):
            index = (gap + step) % capacity
            node = self._slots[index]
            if node is None:
                break
            if _displaced(self._home(self._key(node)), gap, index):
                self._slots[gap] = node
                self._slots[index] = None
                gap = index

    def resize(self, capacity: int) -> None:
        """Rebuild the table with ``capacity`` slots, keeping every node."""
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if capacity < self._size:
            raise ValueError("capacity is smaller than the number of nodes")
        old = self._slots
        self._slots = [None] * capacity
        for node in old:
            if node is not None:
                self._place(node)

    def __contains__(self, key: object) -> bool:
        return self._find(key) is not None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[N]:
        return (node for node in self._slots if node is not None)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._size}, capacity={self.capacity})"