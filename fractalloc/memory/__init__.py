"""
Memory components for fractalloc.

This module provides the simulated medium, the offset sequence and the
serial and fractal allocators built over them.
"""

from .medium import Cell, Medium
from .sequence import OffsetSequence, lowest_zero_bit
from .allocators import MemoryAllocator
from .serial import SerialAllocator
from .fractal import FractalAllocator

__all__ = [
    "Cell",
    "Medium",
    "OffsetSequence",
    "lowest_zero_bit",
    "MemoryAllocator",
    "SerialAllocator",
    "FractalAllocator",
]
