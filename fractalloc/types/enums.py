"""
Enumeration types for fractalloc.

This module defines the allocation strategies under comparison and the
kinds of request a workload can issue.
"""

from enum import IntEnum


class AllocationStrategy(IntEnum):
    """Block allocation strategies over a simulated medium."""
    FRACTAL = 1
    SERIAL = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


class WorkloadAction(IntEnum):
    """Request kinds issued by a workload."""
    ALLOC = 1
    FREE = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()
