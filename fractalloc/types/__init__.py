"""
Type definitions and protocols for fractalloc.

This module provides the aliases, enums, protocols and frozen records
shared by the allocators and the comparison driver.
"""

from .aliases import (
    Handle,
    MediumIndex,
    CellCount
)
from .enums import (
    AllocationStrategy,
    WorkloadAction
)
from .protocols import IAllocator
from .descriptors import ComparisonConfig, Request, StepRecord

__all__ = [
    # Descriptors
    "ComparisonConfig",
    "Request",
    "StepRecord",

    # Enums
    "AllocationStrategy",
    "WorkloadAction",

    # Protocols
    "IAllocator",

    # Type aliases
    "Handle",
    "MediumIndex",
    "CellCount",
]
