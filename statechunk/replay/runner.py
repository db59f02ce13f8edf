"""
Replay runner: reconstruct state from a sequence of actions.

Replay is pure: applies the reducer to each action in order.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..core.actions import INIT_ACTION
from ..core.compiled import ReducerFn


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Final state after applying actions
        applied: Number of actions applied (the seeding action not included)
    """
    state: Any
    applied: int


def replay(
    reducer: ReducerFn,
    actions: Iterable[Any],
    state: Optional[Any] = None,
) -> ReplayResult:
    """
    Replay actions to reconstruct state.

    Args:
        reducer: Compiled or combined reducer
        actions: Actions (plain or combined) in dispatch order
        state: Starting state (None = seed with defaults)

    Returns:
        ReplayResult with final state and count
    """
    st = reducer(None, INIT_ACTION) if state is None else state
    count = 0

    for action in actions:
        st = reducer(st, action)
        count += 1

    return ReplayResult(state=st, applied=count)
