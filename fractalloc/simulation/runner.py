"""
Side-by-side comparison of allocation strategies.

Every request from the workload is applied to each allocator in turn and
a StepRecord captures the resulting high-water marks.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from ..exceptions import MemoryCorruption, SimulationError
from ..factory import create_allocators
from ..memory.allocators import MemoryAllocator
from ..profiling.profiler import PerformanceProfiler
from ..types.aliases import Handle
from ..types.descriptors import ComparisonConfig, Request, StepRecord
from ..types.enums import AllocationStrategy, WorkloadAction
from .workload import WorkloadGenerator

logger = logging.getLogger(__name__)


class ComparisonRunner:
    __slots__ = ('_config', '_allocators', '_workload', '_profiler',
                 '_live', '_holding', '_peak_holding', '_records')

    def __init__(
        self,
        config: ComparisonConfig,
        allocators: Optional[Mapping[AllocationStrategy, MemoryAllocator]] = None,
        workload: Optional[WorkloadGenerator] = None,
        profiler: Optional[PerformanceProfiler] = None
    ):
        self._config = config
        self._allocators: Dict[AllocationStrategy, MemoryAllocator] = (
            dict(allocators) if allocators else create_allocators(config.strategies)
        )
        self._workload = workload or WorkloadGenerator(config)
        self._profiler = profiler or PerformanceProfiler()

        # one entry per live allocation, holding its handle in every allocator
        self._live: List[Dict[AllocationStrategy, Handle]] = []
        self._holding = 0
        self._peak_holding = 0
        self._records: List[StepRecord] = []

    @property
    def strategies(self) -> Tuple[AllocationStrategy, ...]:
        return tuple(self._allocators)

    @property
    def allocators(self) -> Dict[AllocationStrategy, MemoryAllocator]:
        return dict(self._allocators)

    @property
    def records(self) -> List[StepRecord]:
        return list(self._records)

    @property
    def holding(self) -> int:
        return self._holding

    @property
    def live_count(self) -> int:
        return len(self._live)

    @property
    def profiler(self) -> PerformanceProfiler:
        return self._profiler

    def run(self) -> List[StepRecord]:
        logger.info("Comparing %s over %d steps (seed=%s)",
                    ", ".join(s.label for s in self.strategies),
                    self._config.steps, self._config.seed)

        for request in self._workload.requests(lambda: len(self._live)):
            self.apply(request)

        logger.info("Finished: %s",
                    ", ".join(f"{s.label}={a.high_water_mark}" for s, a in self._allocators.items()))
        return self.records

    def apply(self, request: Request) -> StepRecord:
        if request.action == WorkloadAction.FREE:
            if request.victim is None:
                raise SimulationError(f"Free request at step {request.step} names no victim")
            size, handles = self._free(request.victim)
        else:
            size, handles = request.size, self._alloc(request.size)

        record = StepRecord(
            step=request.step,
            action=request.action,
            size=size,
            holding=self._holding,
            handles=handles,
            high_water_marks={s: a.high_water_mark for s, a in self._allocators.items()}
        )
        self._records.append(record)
        return record

    def _alloc(self, n: int) -> Dict[AllocationStrategy, Handle]:
        handles: Dict[AllocationStrategy, Handle] = {}

        for strategy, allocator in self._allocators.items():
            with self._profiler.profile_operation(f"{strategy.label}.alloc", {'size': n}):
                handle = allocator.alloc(n)
            handles[strategy] = handle

            if self._config.verify:
                for offset in range(n):
                    allocator.set(handle, offset, handle)

        self._live.append(handles)
        self._holding += n
        self._peak_holding = max(self._peak_holding, self._holding)
        return handles

    def _free(self, victim: int) -> Tuple[int, Dict[AllocationStrategy, Handle]]:
        if not 0 <= victim < len(self._live):
            raise SimulationError(f"Victim {victim} out of range for {len(self._live)} live allocations")

        handles = self._live[victim]
        first = self.strategies[0]
        n = self._allocators[first].size(handles[first])

        for strategy, allocator in self._allocators.items():
            handle = handles[strategy]
            if self._config.verify:
                self._verify(strategy, allocator, handle, n)

            with self._profiler.profile_operation(f"{strategy.label}.free", {'size': n}):
                allocator.free(handle)

        del self._live[victim]
        self._holding -= n
        return n, handles

    @staticmethod
    def _verify(strategy: AllocationStrategy, allocator: MemoryAllocator, handle: Handle, n: int) -> None:
        for offset in range(n):
            actual = allocator.get(handle, offset)
            if actual != handle:
                raise MemoryCorruption(
                    f"{strategy.label}: memory corrupted at handle {handle} offset {offset}",
                    strategy=strategy.label, handle=handle, offset=offset,
                    expected=handle, actual=actual
                )

    def summary(self) -> Dict[str, Any]:
        """JSON-serialisable comparison of the strategies so far."""
        per_strategy: Dict[str, Any] = {}

        for strategy, allocator in self._allocators.items():
            series = np.array([r.high_water_marks[strategy] for r in self._records], dtype=np.int64)
            final = allocator.high_water_mark
            per_strategy[strategy.label] = {
                'final_high_water_mark': final,
                'peak_high_water_mark': int(series.max()) if series.size else final,
                'mean_high_water_mark': float(series.mean()) if series.size else 0.0,
                'overhead_ratio': final / self._peak_holding if self._peak_holding else 0.0,
                'utilization': allocator.get_utilization_stats(),
            }

        actions = [r.action for r in self._records]
        return {
            'config': {
                'steps': self._config.steps,
                'warmup_steps': self._config.warmup_steps,
                'free_probability': self._config.free_probability,
                'seed': self._config.seed,
                'verify': self._config.verify,
            },
            'steps_run': len(self._records),
            'allocations': actions.count(WorkloadAction.ALLOC),
            'frees': actions.count(WorkloadAction.FREE),
            'final_holding': self._holding,
            'peak_holding': self._peak_holding,
            'strategies': per_strategy,
            'timing': self._profiler.get_summary(),
        }
