"""In-place sorting: selection sort for short runs, quicksort otherwise."""

from __future__ import annotations

import operator
from typing import Callable, MutableSequence, TypeVar

T = TypeVar("T")

_SELECTION_LIMIT = 15


def _selection_range(
    items: MutableSequence[T], lo: int, hi: int, less: Callable[[T, T], bool]
) -> None:
    for i in range(lo, hi - 1):
        best = i
        for j in range(i + 1, hi):
            if less(items[j], items[best]):
                best = j
        items[i], items[best] = items[best], items[i]


def _sort_range(
    items: MutableSequence[T], lo: int, hi: int, less: Callable[[T, T], bool]
) -> None:
    while hi - lo > _SELECTION_LIMIT:
        pivot = items[lo + (hi - lo) // 2]
        i = lo - 1
        j = hi
        while True:
            i += 1
            while less(items[i], pivot):
                i += 1
            j -= 1
            while less(pivot, items[j]):
                j -= 1
            if i >= j:
                break
            items[i], items[j] = items[j], items[i]
        if i - lo < hi - i:
            _sort_range(items, lo, i, less)
            lo = i
        else:
            _sort_range(items, i, hi, less)
            hi = i
    _selection_range(items, lo, hi, less)


def selection_sort(
    items: MutableSequence[T], less: Callable[[T, T], bool] | None = None
) -> None:
    """Sort ``items`` in place by selection, ordered by ``less``."""
    _selection_range(items, 0, len(items), less or operator.lt)


def sort(
    items: MutableSequence[T], less: Callable[[T, T], bool] | None = None
) -> None:
    """Sort ``items`` in place; the order of equal items is not kept."""
    _sort_range(items, 0, len(items), less or operator.lt)