"""
Combined (batch) actions.

A combined action carries an ordered sequence of atomic actions. Dispatching
it yields the same final state as dispatching each action in turn.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Tuple, Union

from .actions import Action

BATCH_ACTION_TYPE = "@@statechunk/BATCH"


@dataclass(frozen=True)
class CombinedAction:
    """
    Ordered batch of actions dispatched as one.

    Fields:
        name: Descriptive label (not used for routing)
        actions: Actions in application order
    """
    name: str
    actions: Tuple[Any, ...] = ()
    type: str = field(default=BATCH_ACTION_TYPE, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "actions": [dict(a) if isinstance(a, Mapping) else a.to_dict() for a in self.actions],
        }


AnyAction = Union[Action, CombinedAction]


def create_combined_action(name: str, actions: Iterable[AnyAction]) -> CombinedAction:
    return CombinedAction(name=name, actions=tuple(actions))


def flatten_actions(action: AnyAction) -> Iterator[Action]:
    """
    Yield atomic actions in application order, expanding nested batches.

    Wire dicts inside a batch are parsed on the way out.
    """
    if isinstance(action, Mapping):
        action = action_from_dict(action)
    if isinstance(action, CombinedAction):
        for inner in action.actions:
            yield from flatten_actions(inner)
    else:
        yield action


def action_from_dict(data: Mapping[str, Any]) -> AnyAction:
    """
    Parse either wire shape (plain or combined action).

    Raises:
        ValueError: If data is not an action
    """
    if isinstance(data, Mapping) and data.get("type") == BATCH_ACTION_TYPE:
        inner = data.get("actions")
        if not isinstance(inner, list):
            raise ValueError("Combined action requires an 'actions' list")
        return create_combined_action(
            name=str(data.get("name", "")),
            actions=[action_from_dict(item) for item in inner],
        )
    return Action.from_dict(data)
