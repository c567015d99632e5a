from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..exceptions import ConfigurationError
from .aliases import Handle
from .enums import AllocationStrategy, WorkloadAction


@dataclass(frozen=True)
class ComparisonConfig:
    steps: int = 1000
    warmup_steps: int = 200
    warmup_size_range: Tuple[int, int] = (1, 20)
    size_range: Tuple[int, int] = (10, 20)
    free_probability: float = 0.5
    seed: Optional[int] = None
    strategies: Tuple[AllocationStrategy, ...] = (
        AllocationStrategy.FRACTAL,
        AllocationStrategy.SERIAL,
    )
    verify: bool = True

    def __post_init__(self):
        if self.steps <= 0:
            raise ConfigurationError(f"Step count must be positive: {self.steps}")

        if self.warmup_steps < 0:
            raise ConfigurationError(f"Warmup step count must not be negative: {self.warmup_steps}")

        for name in ('warmup_size_range', 'size_range'):
            low, high = getattr(self, name)
            if low < 1 or high <= low:
                raise ConfigurationError(f"Invalid {name}: [{low}, {high})")

        if not 0.0 <= self.free_probability <= 1.0:
            raise ConfigurationError(f"Free probability must be within [0, 1]: {self.free_probability}")

        if not self.strategies:
            raise ConfigurationError("At least one strategy is required")

        if len(set(self.strategies)) != len(self.strategies):
            raise ConfigurationError(f"Duplicate strategies: {self.strategies}")

    def size_range_for(self, step: int) -> Tuple[int, int]:
        return self.warmup_size_range if step < self.warmup_steps else self.size_range


@dataclass(frozen=True)
class Request:
    step: int
    action: WorkloadAction
    size: int
    victim: Optional[int] = None

    @property
    def is_free(self) -> bool:
        return self.action == WorkloadAction.FREE


@dataclass(frozen=True)
class StepRecord:
    step: int
    action: WorkloadAction
    size: int
    holding: int
    handles: Dict[AllocationStrategy, Handle] = field(default_factory=dict)
    high_water_marks: Dict[AllocationStrategy, int] = field(default_factory=dict)

    def as_row(self, strategies: Tuple[AllocationStrategy, ...]) -> list:
        row = [self.step, self.action.label, self.size, self.holding]
        row.extend(self.handles[s] for s in strategies)
        row.extend(self.high_water_marks[s] for s in strategies)
        return row
