"""
Profiling components for fractalloc.

This module provides timing of allocator operations during strategy
comparisons.
"""

from .profiler import AggregatedProfile, OperationProfile, PerformanceProfiler

__all__ = [
    "AggregatedProfile",
    "OperationProfile",
    "PerformanceProfiler",
]
