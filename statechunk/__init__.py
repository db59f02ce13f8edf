"""
statechunk

Declare a nested state shape once and derive reducers, action creators,
selectors and input sanitization from it.
"""

from .chunk import StoreChunk, build_store_chunk
from .compiler import build_reducers, compile_structure
from .core import (
    Action,
    CombinedAction,
    StructureError,
    Types,
    ValidationConfigError,
    combine_reducers,
    create_combined_action,
)

__version__ = "0.1.0"

__all__ = [
    "StoreChunk",
    "build_store_chunk",
    "build_reducers",
    "compile_structure",
    "Action",
    "CombinedAction",
    "StructureError",
    "Types",
    "ValidationConfigError",
    "combine_reducers",
    "create_combined_action",
]
