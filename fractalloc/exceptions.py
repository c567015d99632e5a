from __future__ import annotations
from typing import Optional


class FractallocError(Exception):
    def __init__(self, message: str, **kwargs):
        super().__init__(message)
        self.message = message
        self.context = kwargs


class AllocatorError(FractallocError):
    def __init__(self, message: str, handle: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.handle = handle


class UnknownHandle(AllocatorError, KeyError):
    def __str__(self) -> str:
        return self.message


class OutOfBounds(AllocatorError, IndexError):
    def __init__(self, message: str, handle: Optional[int] = None,
                 index: Optional[int] = None,
                 medium_length: Optional[int] = None, **kwargs):
        super().__init__(message, handle=handle, **kwargs)
        self.index = index
        self.medium_length = medium_length


class UnallocatedAccess(AllocatorError):
    def __init__(self, message: str, handle: Optional[int] = None,
                 index: Optional[int] = None, **kwargs):
        super().__init__(message, handle=handle, **kwargs)
        self.index = index


class InvalidAllocationSize(AllocatorError, ValueError):
    def __init__(self, message: str, requested_size: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.requested_size = requested_size


class SimulationError(FractallocError):
    pass


class MemoryCorruption(SimulationError):
    def __init__(self, message: str, strategy: Optional[str] = None,
                 handle: Optional[int] = None, offset: Optional[int] = None,
                 expected: Optional[int] = None, actual: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.strategy = strategy
        self.handle = handle
        self.offset = offset
        self.expected = expected
        self.actual = actual


class ConfigurationError(FractallocError, ValueError):
    pass
