"""FIFO queue backed by a growable ring buffer."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

T = TypeVar("T")


class RingQueue(Generic[T]):
    """A first-in first-out queue kept in a circular buffer.

    One slot of the buffer is always unused; when an insertion would fill
    it, the buffer grows by roughly half.
    """

    def __init__(self) -> None:
        self._buf: list[Any] = [None]
        self._first = 0
        self._end = 0

    def __len__(self) -> int:
        if self._end >= self._first:
            return self._end - self._first
        return self._end - self._first + len(self._buf)

    def _slot(self, index: int) -> int:
        if not 0 <= index < len(self):
            raise IndexError(f"queue index {index} out of range")
        return (self._first + index) % len(self._buf)

    def __getitem__(self, index: int) -> T:
        return self._buf[self._slot(index)]

    def __setitem__(self, index: int, value: T) -> None:
        self._buf[self._slot(index)] = value

    def clear(self) -> None:
        self._buf = [None]
        self._first = self._end = 0

    def peek(self) -> T:
        if self._first == self._end:
            raise IndexError("peek at an empty queue")
        return self._buf[self._first]

    def pop(self) -> T:
        """Remove and return the oldest item."""
        if self._first == self._end:
            raise IndexError("pop from an empty queue")
        item = self._buf[self._first]
        self._buf[self._first] = None
        self._first += 1
        if self._first == len(self._buf):
            self._first = 0
        return item

    def insert(self, item: T) -> None:
        self._buf[self._end] = item
        self._end += 1
        if self._end == len(self._buf):
            self._end = 0
        if self._first == self._end:
            old_size = len(self._buf)
            items = self._buf[self._first:] + self._buf[: self._end]
            new_size = (old_size * 3 + 1) >> 1
            self._buf = items + [None] * (new_size - old_size)
            self._first = 0
            self._end = old_size

    def capacity(self) -> int:
        """Size of the underlying buffer."""
        return len(self._buf)