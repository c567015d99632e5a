from __future__ import annotations
import logging
from typing import List

logger = logging.getLogger(__name__)


class Cell:
    __slots__ = ('allocated', 'value')

    def __init__(self, allocated: bool = False, value: int = 0):
        self.allocated = allocated
        self.value = value

    def release(self) -> None:
        self.allocated = False
        self.value = 0

    def __repr__(self) -> str:
        return f"Cell(allocated={self.allocated}, value={self.value})"


class Medium:
    """Append-only sequence of cells; its length is the high-water mark."""

    __slots__ = ('_cells',)

    def __init__(self):
        self._cells: List[Cell] = []

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index: int) -> Cell:
        if index < 0:
            raise IndexError(f"Negative medium index: {index}")
        return self._cells[index]

    def extend(self, count: int, allocated: bool = False) -> int:
        """Append ``count`` zeroed cells and return the index of the first."""
        start = len(self._cells)
        if count > 0:
            self._cells.extend(Cell(allocated) for _ in range(count))
            logger.debug("medium grew %d -> %d", start, len(self._cells))
        return start

    def ensure(self, index: int) -> Cell:
        """Grow with free cells until ``index`` is addressable."""
        if index >= len(self._cells):
            self.extend(index - len(self._cells) + 1)
        return self._cells[index]

    def is_allocated(self, index: int) -> bool:
        return index < len(self._cells) and self._cells[index].allocated

    def allocated_indices(self) -> List[int]:
        return [i for i, cell in enumerate(self._cells) if cell.allocated]
