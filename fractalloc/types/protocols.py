from __future__ import annotations
from typing import Dict, List, Protocol, runtime_checkable

from .aliases import CellCount, Handle
from .enums import AllocationStrategy


@runtime_checkable
class IAllocator(Protocol):
    @property
    def strategy(self) -> AllocationStrategy:
        ...

    @property
    def high_water_mark(self) -> int:
        ...

    def alloc(self, n: int) -> Handle:
        ...

    def free(self, handle: Handle) -> None:
        ...

    def get(self, handle: Handle, offset: int) -> int:
        ...

    def set(self, handle: Handle, offset: int, value: int) -> None:
        ...

    def size(self, handle: Handle) -> CellCount:
        ...

    def live_handles(self) -> List[Handle]:
        ...

    def get_utilization_stats(self) -> Dict[str, float]:
        ...
