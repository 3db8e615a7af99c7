"""Helpers for searching, removing and copying list contents."""

from __future__ import annotations

from typing import Any, MutableSequence, Sequence


def remove(items: MutableSequence[Any], value: Any) -> None:
    """Remove the first occurrence of ``value``, keeping the order of the rest.

    Raises ``ValueError`` if ``value`` is absent.
    """
    for pos, item in enumerate(items):
        if item == value:
            del items[pos]
            return
    raise ValueError(f"{value!r} is not in the sequence")


def find(items: Sequence[Any], value: Any) -> bool:
    """Tell whether ``value`` occurs in ``items``."""
    return any(item == value for item in items)


def deep_copy(items: Any) -> Any:
    """Copy ``items``, copying nested lists at every depth."""
    if isinstance(items, list):
        return [deep_copy(item) for item in items]
    return items


def append(source: Sequence[Any], target: MutableSequence[Any]) -> None:
    """Append deep copies of the elements of ``source`` to ``target``."""
    target.extend(deep_copy(item) for item in list(source))