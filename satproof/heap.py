"""Binary min-heap over keys with decrease/increase-key support."""

from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterable, TypeVar

K = TypeVar("K", bound=Hashable)


class Heap(Generic[K]):
    """A minimum heap ordered by ``less`` that tracks each key's position.

    Keys must be distinct. Because positions are tracked, a key whose
    priority changed can be moved up or down without rebuilding the heap.
    """

    def __init__(self, less: Callable[[K, K], bool]) -> None:
        self._less = less
        self._heap: list[K] = []
        self._indices: dict[K, int] = {}

    @staticmethod
    def _left(i: int) -> int:
        return i * 2 + 1

    @staticmethod
    def _right(i: int) -> int:
        return (i + 1) * 2

    @staticmethod
    def _parent(i: int) -> int:
        return (i - 1) >> 1

    def _percolate_up(self, i: int) -> None:
        heap, indices, less = self._heap, self._indices, self._less
        x = heap[i]
        p = self._parent(i)
        while i != 0 and less(x, heap[p]):
            heap[i] = heap[p]
            indices[heap[p]] = i
            i = p
            p = self._parent(p)
        heap[i] = x
        indices[x] = i

    def _percolate_down(self, i: int) -> None:
        heap, indices, less = self._heap, self._indices, self._less
        x = heap[i]
        size = len(heap)
        while self._left(i) < size:
            left, right = self._left(i), self._right(i)
            child = right if right < size and less(heap[right], heap[left]) else left
            if not less(heap[child], x):
                break
            heap[i] = heap[child]
            indices[heap[i]] = i
            i = child
        heap[i] = x
        indices[x] = i

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, key: object) -> bool:
        return key in self._indices

    def __getitem__(self, index: int) -> K:
        if not 0 <= index < len(self._heap):
            raise IndexError(f"heap index {index} out of range")
        return self._heap[index]

    def _position(self, key: K) -> int:
        try:
            return self._indices[key]
        except KeyError:
            raise KeyError(f"key {key!r} is not in the heap") from None

    def decrease(self, key: K) -> None:
        """Restore order after ``key`` became smaller."""
        self._percolate_up(self._position(key))

    def increase(self, key: K) -> None:
        """Restore order after ``key`` became larger."""
        self._percolate_down(self._position(key))

    def update(self, key: K) -> None:
        """Insert ``key`` or move it to its right place, whichever applies."""
        if key not in self._indices:
            self.insert(key)
        else:
            self._percolate_up(self._indices[key])
            self._percolate_down(self._indices[key])

    def insert(self, key: K) -> None:
        if key in self._indices:
            raise ValueError(f"key {key!r} is already in the heap")
        self._indices[key] = len(self._heap)
        self._heap.append(key)
        self._percolate_up(self._indices[key])

    def remove(self, key: K) -> None:
        pos = self._position(key)
        del self._indices[key]
        last = self._heap.pop()
        if pos < len(self._heap):
            self._heap[pos] = last
            self._indices[last] = pos
            self._percolate_down(pos)

    def remove_min(self) -> K:
        if not self._heap:
            raise IndexError("remove_min from an empty heap")
        x = self._heap[0]
        last = self._heap.pop()
        del self._indices[x]
        if self._heap:
            self._heap[0] = last
            self._indices[last] = 0
            if len(self._heap) > 1:
                self._percolate_down(0)
        return x

    def build(self, keys: Iterable[K]) -> None:
        """Replace the contents with ``keys`` and heapify them in place."""
        new_keys = list(keys)
        if len(set(new_keys)) != len(new_keys):
            raise ValueError("heap keys must be distinct")
        self._indices.clear()
        self._heap = new_keys
        for i, key in enumerate(new_keys):
            self._indices[key] = i
        for i in range(len(new_keys) // 2 - 1, -1, -1):
            self._percolate_down(i)

    def clear(self) -> None:
        self._heap.clear()
        self._indices.clear()