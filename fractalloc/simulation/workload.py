from __future__ import annotations
from typing import Callable, Iterator, Optional

import numpy as np

from ..exceptions import SimulationError
from ..types.descriptors import ComparisonConfig, Request
from ..types.enums import WorkloadAction


class WorkloadGenerator:
    """Random allocate/free request stream.

    Warmup steps only allocate. Later steps free a uniformly chosen live
    allocation with probability ``free_probability``; the caller passes
    the live count because victims are positions in the caller's list.
    """

    __slots__ = ('_config', '_rng', '_step')

    def __init__(self, config: ComparisonConfig, rng: Optional[np.random.Generator] = None):
        self._config = config
        self._rng = rng if rng is not None else np.random.default_rng(config.seed)
        self._step = 0

    @property
    def step(self) -> int:
        return self._step

    @property
    def exhausted(self) -> bool:
        return self._step >= self._config.steps

    def draw(self, live_count: int) -> Request:
        if self.exhausted:
            raise SimulationError(f"Workload exhausted after {self._config.steps} steps")
        if live_count < 0:
            raise ValueError(f"Live count must not be negative: {live_count}")

        step = self._step
        self._step += 1

        low, high = self._config.size_range_for(step)
        size = int(self._rng.integers(low, high))

        if step >= self._config.warmup_steps and live_count > 0 \
                and self._rng.random() < self._config.free_probability:
            victim = int(self._rng.integers(0, live_count))
            return Request(step=step, action=WorkloadAction.FREE, size=0, victim=victim)

        return Request(step=step, action=WorkloadAction.ALLOC, size=size)

    def requests(self, live_count: Callable[[], int]) -> Iterator[Request]:
        """Yield requests, asking ``live_count()`` before each draw."""
        while not self.exhausted:
            yield self.draw(live_count())
