from __future__ import annotations

from ..types.aliases import Handle, MediumIndex
from ..types.enums import AllocationStrategy
from .allocators import MemoryAllocator


class SerialAllocator(MemoryAllocator):
    """First-fit allocator handing out contiguous runs of cells."""

    __slots__ = ()

    strategy = AllocationStrategy.SERIAL

    def index_of(self, handle: Handle, offset: int) -> MediumIndex:
        return MediumIndex(handle + offset)

    def _place(self, n: int) -> Handle:
        medium = self._medium
        last_alloc = self._first_free - 1

        for i in range(self._first_free, len(medium)):
            if medium[i].allocated:
                last_alloc = i
                continue

            if i - last_alloc >= n:
                start = last_alloc + 1
                self._claim(range(start, i + 1))
                return Handle(start)

        # free tail is too short: claim it and grow by the remainder
        start = last_alloc + 1
        self._claim(range(start, len(medium)))
        medium.extend(n - (len(medium) - start), allocated=True)
        return Handle(start)
