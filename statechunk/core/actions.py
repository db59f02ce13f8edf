"""
Action model.

Actions are immutable records addressed to one compiled leaf by type.
Wire shape: {"type": str, "payload": Any}, plus "index" for actions addressed
to array leaves.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

REPLACE = "REPLACE"
UPDATE = "UPDATE"
RESET = "RESET"
REMOVE_AT_INDEX = "REMOVE_AT_INDEX"
RESET_ALL = "RESET_ALL"

INIT_ACTION_TYPE = "@@statechunk/INIT"


def action_type(location_string: str, operation: str) -> str:
    """
    Action type for an operation at a structure location.

    Example:
        action_type("example.nested1", REPLACE) -> "example.nested1/REPLACE"
    """
    return f"{location_string}/{operation}"


@dataclass(frozen=True)
class Action:
    """
    Immutable action record.

    Fields:
        type: Action type (location string plus operation suffix)
        payload: Operation-specific data
        index: Target index for array removal (None otherwise)
        indexed: Addressed to an array leaf; the wire shape always carries "index"
    """
    type: str
    payload: Any = None
    index: Optional[int] = None
    indexed: bool = field(default=False, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        data = {"type": self.type, "payload": self.payload}
        if self.indexed or self.index is not None:
            data["index"] = self.index
        return data

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Action":
        if not isinstance(data, Mapping) or not isinstance(data.get("type"), str):
            raise ValueError(f"Action requires a string 'type': {data!r}")
        return Action(
            type=data["type"],
            payload=data.get("payload"),
            index=data.get("index"),
            indexed="index" in data,
        )


INIT_ACTION = Action(type=INIT_ACTION_TYPE)
