"""
Compiled structure tree.

Leaves own update logic; branches combine their children. The actions and
selectors trees are projections of the same compiled tree, so their key
sets match at every level.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional

from .actions import Action

ReducerFn = Callable[[Any, Any], Any]
Selector = Callable[[Any], Any]


@dataclass(frozen=True)
class CompiledNode:
    """
    One node of a compiled structure.

    Fields:
        location_string: Dot-joined path used to name action types
        reducer: Pure function (state, action) -> state
        actions: Action creators by operation name (leaves only)
        selector: Reads this node's value from the host state
        children: Compiled children by property name (branches only)
        action_types: Operation name -> action type handled here
        reset_all: Creator for this boundary's reset-all action (branches only)
        default: Declared default state (leaves only)
    """
    location_string: str
    reducer: ReducerFn
    actions: Dict[str, Callable[..., Action]] = field(default_factory=dict)
    selector: Optional[Selector] = None
    children: Optional[Dict[str, "CompiledNode"]] = None
    action_types: Dict[str, str] = field(default_factory=dict)
    reset_all: Optional[Callable[[], Action]] = None
    default: Any = None

    @property
    def is_leaf(self) -> bool:
        return self.children is None


def project(node: CompiledNode, leaf_value: Callable[[CompiledNode], Any]) -> Any:
    """Map leaves through leaf_value, keeping the branch nesting."""
    if node.is_leaf:
        return leaf_value(node)
    return {name: project(child, leaf_value) for name, child in node.children.items()}


def iter_leaves(node: CompiledNode) -> Iterator[CompiledNode]:
    if node.is_leaf:
        yield node
        return
    for child in node.children.values():
        yield from iter_leaves(child)


def iter_boundaries(node: CompiledNode) -> Iterator[CompiledNode]:
    """Yield every reducer boundary (branch) depth first, parents before children."""
    if node.is_leaf:
        return
    yield node
    for child in node.children.values():
        yield from iter_boundaries(child)
