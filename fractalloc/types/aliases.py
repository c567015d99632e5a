"""
Type aliases for fractalloc.

This module defines the integer identities passed between allocators
and their callers.
"""

from typing import NewType

# Core type aliases
Handle = NewType('Handle', int)
MediumIndex = NewType('MediumIndex', int)
CellCount = NewType('CellCount', int)
