"""
Replay: fold actions through a compiled reducer.

Must be deterministic: same actions -> same state.
"""

from .runner import ReplayResult, replay

__all__ = [
    "ReplayResult",
    "replay",
]
