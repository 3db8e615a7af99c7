"""Dense maps and sets keyed by objects that map onto small integers."""

from __future__ import annotations

import operator
from typing import Any, Callable, Generic, Iterator, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class IntMap(Generic[K, V]):
    """A map stored as a list, indexed by ``index(key)``.

    Slots must be reserved before they are read or written.
    """

    def __init__(self, index: Callable[[K], int] | None = None) -> None:
        self._index = index if index is not None else operator.index
        self._values: list[V] = []

    def _slot(self, key: K) -> int:
        return self._index(key)

    def has(self, key: K) -> bool:
        return 0 <= self._slot(key) < len(self._values)

    def _checked_slot(self, key: K) -> int:
        slot = self._slot(key)
        if not 0 <= slot < len(self._values):
            raise KeyError(key)
        return slot

    def __getitem__(self, key: K) -> V:
        return self._values[self._checked_slot(key)]

    def __setitem__(self, key: K, value: V) -> None:
        self._values[self._checked_slot(key)] = value

    def __iter__(self) -> Iterator[V]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def reserve(self, key: K, pad: Any = None) -> None:
        """Grow the map so that ``key`` has a slot, filling new slots with ``pad``."""
        slot = self._slot(key)
        if slot < 0:
            raise ValueError(f"key {key!r} maps to negative index {slot}")
        missing = slot + 1 - len(self._values)
        if missing > 0:
            self._values.extend([pad] * missing)

    def insert(self, key: K, value: V, pad: Any = None) -> None:
        self.reserve(key, pad)
        self[key] = value

    def clear(self) -> None:
        self._values.clear()

    def copy(self) -> "IntMap[K, V]":
        other: IntMap[K, V] = IntMap(self._index)
        other._values = list(self._values)
        return other


class IntSet(Generic[K]):
    """A set of integer-indexed keys that remembers insertion order."""

    def __init__(self, index: Callable[[K], int] | None = None) -> None:
        self._in_set: IntMap[K, bool] = IntMap(index)
        self._items: list[K] = []

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, position: int) -> K:
        return self._items[position]

    def insert(self, key: K) -> None:
        self._in_set.reserve(key, False)
        if not self._in_set[key]:
            self._in_set[key] = True
            self._items.append(key)

    def has(self, key: K) -> bool:
        self._in_set.reserve(key, False)
        return self._in_set[key]

    def clear(self) -> None:
        for key in self._items:
            self._in_set[key] = False
        self._items.clear()

    def to_list(self) -> list[K]:
        return list(self._items)