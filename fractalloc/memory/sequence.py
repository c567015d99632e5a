"""
Offset sequence for self-similar addressing.

``offset[0] = 0`` and ``offset[k] = offset[k - 1] + 3 ** z + 1`` where
``z`` is the position of the lowest zero bit of ``k - 1``. Values are
computed on first access and cached per instance.
"""

from __future__ import annotations
from typing import List


def lowest_zero_bit(n: int) -> int:
    """Position of the least significant 0 bit of a non-negative integer."""
    if n < 0:
        raise ValueError(f"Expected a non-negative integer: {n}")
    return (~n & (n + 1)).bit_length() - 1


class OffsetSequence:
    __slots__ = ('_cache',)

    def __init__(self):
        self._cache: List[int] = [0]

    def __getitem__(self, k: int) -> int:
        if k < 0:
            raise IndexError(f"Offset sequence index must be non-negative: {k}")
        self.extend_to(k)
        return self._cache[k]

    def __len__(self) -> int:
        """Number of cached terms."""
        return len(self._cache)

    def extend_to(self, k: int) -> None:
        while len(self._cache) <= k:
            self._compute_next()

    def take(self, count: int) -> List[int]:
        if count <= 0:
            return []
        self.extend_to(count - 1)
        return self._cache[:count]

    def _compute_next(self) -> None:
        idx = len(self._cache) - 1
        addend = 3 ** lowest_zero_bit(idx)
        self._cache.append(self._cache[-1] + addend + 1)
