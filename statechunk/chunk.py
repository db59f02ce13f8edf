"""
Store-chunk builder: the entry point for application code.

    chunk = build_store_chunk("example", {
        "title": Types.reducer(Types.string("untitled")),
        "tags": Types.reducer(Types.array_of(Types.string())),
    })
    reducer = combine_reducers(chunk.reducers)
    state = reducer(None, chunk.actions["title"]["replace"]("hello"))
    chunk.selectors["title"](state)  # "hello"
    state = reducer(state, chunk.boundaries["example"]())
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .compiler import compile_structure
from .core.actions import Action
from .core.compiled import ReducerFn, Selector, iter_boundaries, project


@dataclass(frozen=True)
class StoreChunk:
    """
    Reducers, actions and selectors for one named structure.

    Fields:
        reducers: {name: reducer} ready to merge into the host's root reducer
        actions: Leaf action creators, nested like the structure
        selectors: Leaf selectors, nested like the structure
        reset_all: Reset-all creator of the root boundary (nested chunks only)
        boundaries: Reset-all creator of every reducer boundary, keyed by
            location string, root first (empty for non-nested chunks)
    """
    reducers: Dict[str, ReducerFn]
    actions: Any
    selectors: Any
    reset_all: Optional[Callable[[], Action]] = None
    boundaries: Dict[str, Callable[[], Action]] = field(default_factory=dict)

    def keys(self) -> List[str]:
        keys = ["reducers", "actions", "selectors"]
        if self.reset_all is not None:
            keys.append("reset_all")
        return keys


def build_store_chunk(
    name: str,
    structure: Any = None,
    base_selector: Optional[Selector] = None,
    location_string: Optional[str] = None,
) -> StoreChunk:
    """
    Build the store chunk for a structure.

    Args:
        name: Key of the chunk in the host state
        structure: Mapping of reducer boundaries (nested chunk) or a single
            structure descriptor (non-nested chunk)
        base_selector: Reads the chunk's state from host state (default: state[name])
        location_string: Prefix for action types (default: name)

    Raises:
        StructureError: If structure is missing or malformed
    """
    root = compile_structure(
        name,
        structure,
        base_selector=base_selector,
        location_string=location_string,
    )
    return StoreChunk(
        reducers={name: root.reducer},
        actions=project(root, lambda node: node.actions),
        selectors=project(root, lambda node: node.selector),
        reset_all=root.reset_all,
        boundaries={node.location_string: node.reset_all for node in iter_boundaries(root)},
    )
