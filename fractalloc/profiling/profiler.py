"""
Performance profiler for fractalloc.

This module times allocator operations so that strategies can be
compared on speed as well as on address-space usage.
"""

from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import RLock
from typing import Dict, Optional, Any, Iterator


@dataclass
class OperationProfile:
    """Profile data for a single operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AggregatedProfile:
    """Aggregated profile statistics for an operation type."""
    operation_name: str
    call_count: int = 0
    total_duration: float = 0.0
    min_duration: float = float('inf')
    max_duration: float = 0.0
    avg_duration: float = 0.0

    def update(self, profile: OperationProfile) -> None:
        """Update aggregated statistics with a new profile."""
        self.call_count += 1
        self.total_duration += profile.duration
        self.min_duration = min(self.min_duration, profile.duration)
        self.max_duration = max(self.max_duration, profile.duration)
        self.avg_duration = self.total_duration / self.call_count

    def as_dict(self) -> Dict[str, Any]:
        return {
            'call_count': self.call_count,
            'total_duration': self.total_duration,
            'min_duration': self.min_duration if self.call_count else 0.0,
            'max_duration': self.max_duration,
            'avg_duration': self.avg_duration,
        }


class PerformanceProfiler:
    """Aggregates wall-clock durations of named operations."""

    def __init__(self):
        self._aggregated: Dict[str, AggregatedProfile] = {}
        self._lock = RLock()

    @contextmanager
    def profile_operation(
        self,
        operation_name: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Iterator[OperationProfile]:
        """Context manager for profiling operations."""
        start_time = time.perf_counter()

        profile = OperationProfile(
            operation_name=operation_name,
            start_time=start_time,
            end_time=0.0,
            duration=0.0,
            metadata=metadata or {}
        )

        try:
            yield profile
        finally:
            end_time = time.perf_counter()
            profile.end_time = end_time
            profile.duration = end_time - start_time
            self._record(profile)

    def _record(self, profile: OperationProfile) -> None:
        with self._lock:
            name = profile.operation_name
            if name not in self._aggregated:
                self._aggregated[name] = AggregatedProfile(name)
            self._aggregated[name].update(profile)

    def get_summary(self) -> Dict[str, Any]:
        """Get a JSON-friendly summary keyed by operation name."""
        with self._lock:
            return {
                name: aggregate.as_dict()
                for name, aggregate in sorted(self._aggregated.items())
            }
