"""
Reducer compiler.

Walks a structure tree and emits a structurally identical tree of compiled
nodes. Properties whose structure contains a reducer boundary are compiled
recursively as branches; everything else becomes a leaf reducer owning its
whole value. Every branch is a reducer boundary with its own reset-all
action, named from its location string.
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, Optional

from .core.actions import RESET_ALL, Action, action_type
from .core.compiled import CompiledNode, Selector
from .core.errors import StructureError
from .core.reducer import combine_reducers, create_reducer
from .core.structure import WILDCARD_KEY, contains_reducers, shape_children, unwrap_boundary
from .logging_config import get_logger

# Delimiters inside action types; reducer property names cannot contain them.
LOCATION_SEPARATORS = (".", "/")


def _check_location_segment(location_string: str, prop_name: Any) -> None:
    if not isinstance(prop_name, str) or any(sep in prop_name for sep in LOCATION_SEPARATORS):
        raise StructureError(
            f"Reducer boundary {location_string!r} has property {prop_name!r}; "
            f"names of reducer properties cannot contain '.' or '/'"
        )


def _root_selector(name: str) -> Selector:
    def selector(state):
        return state[name]
    return selector


def _property_selector(parent: Selector, prop_name: str) -> Selector:
    # defined here, not in the child: the child does not know where it is mounted
    def selector(state):
        return parent(state)[prop_name]
    return selector


def build_reducers(
    name: str,
    structure: Any,
    base_selector: Optional[Selector] = None,
    location_string: Optional[str] = None,
    reset_all_types: Iterable[str] = (),
) -> CompiledNode:
    """
    Compile a shape-like structure into a reducer boundary.

    Args:
        name: Property name of this boundary
        structure: Mapping (or shape) of child structures
        base_selector: Reads this boundary's state (default: state[name])
        location_string: Dot-joined path (default: name)
        reset_all_types: Reset-all action types of enclosing boundaries

    Returns:
        Branch CompiledNode whose reducer combines its children

    Raises:
        StructureError: If structure has no named children, or a property
            name is not a string free of LOCATION_SEPARATORS
    """
    children = shape_children(structure)
    if children is None:
        raise StructureError(f"Reducer boundary {name!r} needs a mapping structure")
    if base_selector is None:
        base_selector = _root_selector(name)
    if location_string is None:
        location_string = name

    reset_all_type = action_type(location_string, RESET_ALL)
    scoped_reset_types = (*reset_all_types, reset_all_type)

    compiled: Dict[str, CompiledNode] = {}
    for prop_name, prop_structure in children.items():
        if prop_name is WILDCARD_KEY:
            raise StructureError(
                f"Reducer boundary {location_string!r} cannot use a wildcard key"
            )
        _check_location_segment(location_string, prop_name)
        child_location = f"{location_string}.{prop_name}"
        selector = _property_selector(base_selector, prop_name)
        inner = unwrap_boundary(prop_structure)

        if contains_reducers(inner):
            child = build_reducers(
                prop_name,
                inner,
                base_selector=selector,
                location_string=child_location,
                reset_all_types=scoped_reset_types,
            )
        else:
            child = replace(
                create_reducer(prop_structure, child_location, scoped_reset_types),
                selector=selector,
            )
        compiled[prop_name] = child

    def reset_all() -> Action:
        return Action(type=reset_all_type)

    get_logger(__name__, trace_id=location_string).debug(
        "Compiled reducer boundary with %d children", len(compiled)
    )
    return CompiledNode(
        location_string=location_string,
        reducer=combine_reducers({k: c.reducer for k, c in compiled.items()}),
        selector=base_selector,
        children=compiled,
        action_types={RESET_ALL: reset_all_type},
        reset_all=reset_all,
    )


def compile_structure(
    name: str,
    structure: Any,
    base_selector: Optional[Selector] = None,
    location_string: Optional[str] = None,
) -> CompiledNode:
    """
    Compile a whole structure mounted under name.

    A structure containing reducer boundaries compiles to a branch; anything
    else compiles to a single leaf.

    Raises:
        StructureError: If structure is missing or malformed
    """
    if structure is None:
        raise StructureError(f"A structure is required to build store chunk {name!r}")
    if base_selector is None:
        base_selector = _root_selector(name)
    if location_string is None:
        location_string = name
    if "/" in location_string:
        raise StructureError(
            f"Location string {location_string!r} cannot contain '/'"
        )

    if contains_reducers(structure):
        return build_reducers(
            name,
            structure,
            base_selector=base_selector,
            location_string=location_string,
        )
    leaf = create_reducer(structure, location_string)
    return replace(leaf, selector=base_selector)
