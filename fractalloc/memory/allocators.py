from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import ClassVar, Dict, Iterable, List, Optional

from ..exceptions import InvalidAllocationSize, OutOfBounds, UnallocatedAccess, UnknownHandle
from ..types.aliases import CellCount, Handle, MediumIndex
from ..types.enums import AllocationStrategy
from .medium import Cell, Medium

logger = logging.getLogger(__name__)


class MemoryAllocator(ABC):
    """Shared bookkeeping for allocators over a growable medium.

    Subclasses supply the address mapping (``index_of``) and the search
    for room (``_place``). Everything else - the allocation table, the
    access checks and the statistics - lives here.

    Every cell below ``_first_free`` is allocated, so placement searches
    may start there instead of at index 0.
    """

    __slots__ = ('_medium', '_allocated_blocks', '_first_free', '_lock',
                 '_allocation_count', '_deallocation_count')

    strategy: ClassVar[AllocationStrategy]

    def __init__(self):
        self._medium = Medium()
        self._allocated_blocks: Dict[Handle, CellCount] = {}
        self._first_free = 0
        self._lock = RLock()
        self._allocation_count = 0
        self._deallocation_count = 0

    @abstractmethod
    def index_of(self, handle: Handle, offset: int) -> MediumIndex: ...

    @abstractmethod
    def _place(self, n: int) -> Handle:
        """Find room for ``n`` cells, mark them allocated and return the handle."""

    def alloc(self, n: int) -> Handle:
        if n < 1:
            raise InvalidAllocationSize(f"Allocation size must be positive: {n}", requested_size=n)

        with self._lock:
            handle = self._place(n)
            self._allocated_blocks[handle] = CellCount(n)
            self._allocation_count += 1
            self._advance_first_free()

            logger.debug("%s alloc(%d) -> %d, high water mark %d",
                         self.strategy.label, n, handle, len(self._medium))
            return handle

    def free(self, handle: Handle) -> None:
        with self._lock:
            n = self._lookup(handle)
            if n is None:
                raise UnknownHandle(f"Freeing unallocated memory: handle {handle}", handle=handle)

            for offset in range(n):
                index = self.index_of(handle, offset)
                self._medium[index].release()
                self._first_free = min(self._first_free, index)

            del self._allocated_blocks[handle]
            self._deallocation_count += 1
            logger.debug("%s free(%d) released %d cells", self.strategy.label, handle, n)

    def get(self, handle: Handle, offset: int) -> int:
        with self._lock:
            return self._resolve(handle, offset).value

    def set(self, handle: Handle, offset: int, value: int) -> None:
        with self._lock:
            self._resolve(handle, offset).value = value

    def size(self, handle: Handle) -> CellCount:
        with self._lock:
            n = self._lookup(handle)
            if n is None:
                raise UnknownHandle(f"Unknown handle: {handle}", handle=handle)
            return n

    @property
    def high_water_mark(self) -> int:
        with self._lock:
            return len(self._medium)

    def indices_of(self, handle: Handle) -> List[MediumIndex]:
        """Medium indices covered by a live allocation, in offset order."""
        with self._lock:
            n = self.size(handle)
            return [self.index_of(handle, offset) for offset in range(n)]

    def live_handles(self) -> List[Handle]:
        with self._lock:
            return sorted(self._allocated_blocks)

    @property
    def held_cells(self) -> int:
        with self._lock:
            return sum(self._allocated_blocks.values())

    @property
    def allocation_count(self) -> int:
        return self._allocation_count

    @property
    def deallocation_count(self) -> int:
        return self._deallocation_count

    def get_fragmentation_ratio(self) -> float:
        """Share of the medium not held by any live allocation."""
        with self._lock:
            length = len(self._medium)
            if length == 0:
                return 0.0
            return 1.0 - (self.held_cells / length)

    def get_utilization_stats(self) -> Dict[str, float]:
        with self._lock:
            length = len(self._medium)
            held = self.held_cells
            return {
                'high_water_mark': float(length),
                'held_cells': float(held),
                'live_allocations': float(len(self._allocated_blocks)),
                'utilization': held / length if length > 0 else 0.0,
                'fragmentation': self.get_fragmentation_ratio(),
                'allocation_count': float(self._allocation_count),
                'deallocation_count': float(self._deallocation_count),
            }

    def __contains__(self, handle: object) -> bool:
        return handle in self._allocated_blocks

    def __len__(self) -> int:
        return len(self._allocated_blocks)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(live={len(self._allocated_blocks)}, "
                f"high_water_mark={len(self._medium)})")

    def _lookup(self, handle: Handle) -> Optional[CellCount]:
        return self._allocated_blocks.get(handle)

    def _resolve(self, handle: Handle, offset: int) -> Cell:
        if offset < 0:
            raise OutOfBounds(f"Negative offset {offset} for handle {handle}",
                              handle=handle, medium_length=len(self._medium))

        index = self.index_of(handle, offset)
        if index < 0 or index >= len(self._medium):
            raise OutOfBounds(f"Access out of bound: index {index}, medium length {len(self._medium)}",
                              handle=handle, index=index, medium_length=len(self._medium))

        cell = self._medium[index]
        if not cell.allocated:
            raise UnallocatedAccess(f"Accessing unallocated memory at index {index}",
                                    handle=handle, index=index)
        return cell

    def _claim(self, indices: Iterable[int]) -> None:
        for index in indices:
            self._medium[index].allocated = True

    def _advance_first_free(self) -> None:
        medium = self._medium
        while self._first_free < len(medium) and medium[self._first_free].allocated:
            self._first_free += 1
