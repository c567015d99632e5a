"""
fractalloc - Address-space comparison of block allocation strategies

A simulated memory medium with two interchangeable allocators over it:
a contiguous first-fit allocator and a sparse, self-similar allocator
whose placement follows a memoized number-theoretic offset sequence.

Key Features:
- Append-only medium whose length is the high-water mark
- Serial (first-fit) and fractal (offset-sequence) strategies
- Seeded random workloads applied to several strategies side by side
- Per-step CSV reports, optionally zstandard-compressed
- Operation timing for each strategy
"""

from __future__ import annotations

__version__ = "1.0.0"
__license__ = "MIT"

# Core components
from .memory.allocators import MemoryAllocator
from .memory.serial import SerialAllocator
from .memory.fractal import FractalAllocator
from .memory.medium import Cell, Medium
from .memory.sequence import OffsetSequence, lowest_zero_bit

# Construction
from .factory import (
    create_allocator,
    create_allocators,
    create_default_config,
    create_small_block_config,
    create_steady_state_config,
    parse_strategy
)

# Simulation and reporting
from .simulation.workload import WorkloadGenerator
from .simulation.runner import ComparisonRunner
from .simulation.report import ReportWriter, read_report, write_summary

# Performance and profiling
from .profiling.profiler import PerformanceProfiler

# Types and descriptors
from .types.descriptors import ComparisonConfig, Request, StepRecord
from .types.enums import AllocationStrategy, WorkloadAction
from .types.protocols import IAllocator
from .types.aliases import Handle, MediumIndex, CellCount

# Exceptions
from .exceptions import (
    FractallocError,
    AllocatorError,
    UnknownHandle,
    OutOfBounds,
    UnallocatedAccess,
    InvalidAllocationSize,
    SimulationError,
    MemoryCorruption,
    ConfigurationError
)

__all__ = [
    # Core components
    "MemoryAllocator",
    "SerialAllocator",
    "FractalAllocator",
    "Cell",
    "Medium",
    "OffsetSequence",
    "lowest_zero_bit",

    # Construction
    "create_allocator",
    "create_allocators",
    "create_default_config",
    "create_small_block_config",
    "create_steady_state_config",
    "parse_strategy",

    # Simulation and reporting
    "WorkloadGenerator",
    "ComparisonRunner",
    "ReportWriter",
    "read_report",
    "write_summary",

    # Performance
    "PerformanceProfiler",

    # Types
    "ComparisonConfig",
    "Request",
    "StepRecord",
    "AllocationStrategy",
    "WorkloadAction",
    "IAllocator",
    "Handle",
    "MediumIndex",
    "CellCount",

    # Exceptions
    "FractallocError",
    "AllocatorError",
    "UnknownHandle",
    "OutOfBounds",
    "UnallocatedAccess",
    "InvalidAllocationSize",
    "SimulationError",
    "MemoryCorruption",
    "ConfigurationError",
]
