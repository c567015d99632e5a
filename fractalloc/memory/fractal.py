from __future__ import annotations

from ..types.aliases import Handle, MediumIndex
from ..types.enums import AllocationStrategy
from .allocators import MemoryAllocator
from .sequence import OffsetSequence


class FractalAllocator(MemoryAllocator):
    """Sparse allocator placing offset ``k`` of a block at ``offsets[k] + handle``.

    Candidate handles are tried in increasing order and the medium grows on
    demand while a candidate is checked. Offsets strictly increase, so a
    check that reaches past the end accepts the candidate; rejected
    candidates never grow the medium.
    """

    __slots__ = ('_offsets',)

    strategy = AllocationStrategy.FRACTAL

    def __init__(self):
        super().__init__()
        self._offsets = OffsetSequence()

    @property
    def offsets(self) -> OffsetSequence:
        return self._offsets

    def index_of(self, handle: Handle, offset: int) -> MediumIndex:
        return MediumIndex(self._offsets[offset] + handle)

    def _place(self, n: int) -> Handle:
        candidate = self._first_free
        while not self._fits(candidate, n):
            candidate += 1

        self._claim(self.index_of(candidate, offset) for offset in range(n))
        return Handle(candidate)

    def _fits(self, candidate: int, n: int) -> bool:
        for offset in range(n):
            if self._medium.ensure(self.index_of(candidate, offset)).allocated:
                return False
        return True
