from __future__ import annotations
from typing import Dict, Iterable, Optional, Type

from .exceptions import ConfigurationError
from .memory.allocators import MemoryAllocator
from .memory.fractal import FractalAllocator
from .memory.serial import SerialAllocator
from .types.descriptors import ComparisonConfig
from .types.enums import AllocationStrategy

ALLOCATOR_TYPES: Dict[AllocationStrategy, Type[MemoryAllocator]] = {
    AllocationStrategy.FRACTAL: FractalAllocator,
    AllocationStrategy.SERIAL: SerialAllocator,
}


def create_allocator(strategy: AllocationStrategy) -> MemoryAllocator:
    try:
        return ALLOCATOR_TYPES[strategy]()
    except KeyError:
        raise ConfigurationError(f"Unknown allocation strategy: {strategy!r}") from None


def create_allocators(strategies: Iterable[AllocationStrategy]) -> Dict[AllocationStrategy, MemoryAllocator]:
    return {strategy: create_allocator(strategy) for strategy in strategies}


def parse_strategy(name: str) -> AllocationStrategy:
    try:
        return AllocationStrategy[name.upper()]
    except KeyError:
        raise ConfigurationError(f"Unknown allocation strategy: {name}") from None


def create_default_config(seed: Optional[int] = None, **overrides) -> ComparisonConfig:
    return ComparisonConfig(seed=seed, **overrides)


def create_steady_state_config(seed: Optional[int] = None) -> ComparisonConfig:
    return ComparisonConfig(
        steps=5000,
        warmup_steps=200,
        size_range=(10, 20),
        free_probability=0.5,
        seed=seed
    )


def create_small_block_config(seed: Optional[int] = None) -> ComparisonConfig:
    return ComparisonConfig(
        steps=1000,
        warmup_steps=100,
        size_range=(1, 4),
        free_probability=0.5,
        seed=seed
    )
