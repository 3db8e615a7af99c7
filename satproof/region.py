"""Region-based allocator handing out integer references into one array."""

from __future__ import annotations

from typing import Any

_MASK32 = 0xFFFFFFFF

REF_UNDEF = _MASK32


class OutOfMemoryError(MemoryError):
    """Raised when a region cannot grow any further."""


class RegionAllocator:
    """A growing array of units addressed by 32-bit references.

    Space is handed out from the end of the region and never reused;
    ``free`` only records how much has been abandoned.
    """

    def __init__(self, start_cap: int = 1024 * 1024) -> None:
        self._memory: list[Any] = []
        self._cap = 0
        self._wasted = 0
        self._reserve(start_cap)

    def _reserve(self, min_cap: int) -> None:
        if self._cap >= min_cap:
            return
        prev_cap = self._cap
        cap = self._cap
        while cap < min_cap:
            delta = ((cap >> 1) + (cap >> 3) + 2) & ~1
            cap = (cap + delta) & _MASK32
            if cap <= prev_cap:
                raise OutOfMemoryError("region capacity overflow")
        self._cap = cap

    def __len__(self) -> int:
        return len(self._memory)

    def _check(self, ref: int) -> None:
        if not 0 <= ref < len(self._memory):
            raise IndexError(f"reference {ref} out of range")

    def __getitem__(self, ref: int) -> Any:
        self._check(ref)
        return self._memory[ref]

    def __setitem__(self, ref: int, value: Any) -> None:
        self._check(ref)
        self._memory[ref] = value

    def capacity(self) -> int:
        return self._cap

    def wasted(self) -> int:
        return self._wasted

    def alloc(self, size: int) -> int:
        """Reserve ``size`` units and return the reference to the first."""
        if size <= 0:
            raise ValueError("allocation size must be positive")
        prev_sz = len(self._memory)
        self._reserve((prev_sz + size) & _MASK32)
        if prev_sz + size > _MASK32:
            raise OutOfMemoryError("region size overflow")
        self._memory.extend([0] * size)
        return prev_sz

    def free(self, size: int) -> None:
        """Record ``size`` units as no longer in use."""
        self._wasted += size

    def move_to(self, other: "RegionAllocator") -> None:
        """Give this region's contents to ``other`` and leave this one empty."""
        other._memory = self._memory
        other._cap = self._cap
        other._wasted = self._wasted
        self._memory = []
        self._cap = 0
        self._wasted = 0