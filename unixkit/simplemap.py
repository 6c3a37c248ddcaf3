"""A tiny fixed-size string map that refuses colliding keys."""

from __future__ import annotations

from typing import Any, Optional

ARRAY_SIZE = 7


class KeyCollisionError(KeyError):
    """Raised when a new key hashes to a slot already in use."""


def simple_hash(key: str) -> int:
    """Sum the character codes of ``key`` and reduce them to a slot index."""
    return sum(ord(ch) for ch in key) % ARRAY_SIZE


class SimpleMap:
    """A map with seven slots and no collision handling.

    Every key lives in the slot its hash selects. Inserting a key whose slot
    is taken raises KeyCollisionError, so the map suits small fixed tables
    whose keys are known not to clash.
    """

    def __init__(self) -> None:
        self._slots: list[Optional[tuple[str, Any]]] = [None] * ARRAY_SIZE

    def insert(self, key: str, value: Any) -> int:
        """Store ``value`` under ``key`` and return the slot index used."""
        index = simple_hash(key)
        occupant = self._slots[index]
        if occupant is not None:
            raise KeyCollisionError(
                f"{key} {occupant[0]} keys collision in simplemap"
            )
        self._slots[index] = (key, value)
        return index

    def search(self, key: str) -> Optional[int]:
        """Return the slot index holding ``key``, or None."""
        index = simple_hash(key)
        occupant = self._slots[index]
        if occupant is not None and occupant[0] == key:
            return index
        return None

    def key_at(self, index: int) -> Optional[str]:
        """Return the key stored in slot ``index``, or None if it is empty."""
        occupant = self._slots[index]
        return None if occupant is None else occupant[0]

    def value_at(self, index: int) -> Any:
        """Return the value stored in slot ``index``, or None if it is empty."""
        occupant = self._slots[index]
        return None if occupant is None else occupant[1]

    def delete(self, key: str) -> Optional[int]:
        """Remove ``key`` and return the slot it held, or None if absent."""
        index = self.search(key)
        if index is not None:
            self._slots[index] = None
        return index

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``."""
        index = self.search(key)
        return default if index is None else self.value_at(index)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.search(key) is not None

    def __len__(self) -> int:
        return sum(occupant is not None for occupant in self._slots)

    def __repr__(self) -> str:
        items = {k: v for k, v in (o for o in self._slots if o is not None)}
        return f"{type(self).__name__}({items!r})"