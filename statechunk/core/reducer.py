"""
Leaf reducers: pure state transition functions for one slice of state.

A leaf owns the whole value at its location (shape, array or scalar) and
handles replace/update/reset/remove_at_index for it. Leaves also react to
the reset-all action of every enclosing reducer boundary and to combined
actions. Reducers never mutate the state they are given.
"""

import copy
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable

from ..logging_config import get_logger
from .actions import (
    REMOVE_AT_INDEX,
    REPLACE,
    RESET,
    UPDATE,
    Action,
    action_type,
)
from .batch import BATCH_ACTION_TYPE, action_from_dict, flatten_actions
from .compiled import CompiledNode, ReducerFn
from .structure import PropType, default_value, resolve_structure
from .validation import validate_array, validate_shape, validate_value

# Handler signature: (current_state, action) -> new_state
Handler = Callable[[Any, Action], Any]


def _handlers_for(node, default: Any) -> Dict[str, Handler]:
    def reset(state, action):
        return copy.deepcopy(default)

    if node.type is PropType.ARRAY:
        def replace(state, action):
            return validate_array(node, action.payload)

        def remove_at_index(state, action):
            index = action.index
            if not isinstance(index, int) or isinstance(index, bool):
                return state
            if not 0 <= index < len(state):
                return state
            return list(state[:index]) + list(state[index + 1:])

        return {REPLACE: replace, RESET: reset, REMOVE_AT_INDEX: remove_at_index}

    if node.type is PropType.SHAPE:
        def replace(state, action):
            return validate_shape(node, action.payload)

        def update(state, action):
            merged = dict(state) if isinstance(state, Mapping) else {}
            merged.update(validate_shape(node, action.payload))
            return merged

        return {REPLACE: replace, UPDATE: update, RESET: reset}

    def replace(state, action):
        value = validate_value(node, action.payload)
        # invalid payloads leave the slice as it was
        return state if value is None else value

    return {REPLACE: replace, RESET: reset}


def _action_creators(types: Dict[str, str]) -> Dict[str, Callable[..., Action]]:
    creators: Dict[str, Callable[..., Action]] = {}
    # array leaves always put "index" on the wire
    indexed = REMOVE_AT_INDEX in types

    if REPLACE in types:
        def replace(payload: Any) -> Action:
            return Action(type=types[REPLACE], payload=payload, indexed=indexed)
        creators["replace"] = replace

    if UPDATE in types:
        def update(payload: Any) -> Action:
            return Action(type=types[UPDATE], payload=payload, indexed=indexed)
        creators["update"] = update

    def reset() -> Action:
        return Action(type=types[RESET], indexed=indexed)
    creators["reset"] = reset

    if REMOVE_AT_INDEX in types:
        def remove_at_index(index: int) -> Action:
            return Action(type=types[REMOVE_AT_INDEX], index=index, indexed=True)
        creators["remove_at_index"] = remove_at_index

    return creators


def create_reducer(
    structure: Any,
    location_string: str,
    reset_all_types: Iterable[str] = (),
) -> CompiledNode:
    """
    Compile a leaf reducer for one structure.

    Args:
        structure: Shape, array or scalar structure (reducer tags are looked through)
        location_string: Dot-joined path naming this leaf's action types
        reset_all_types: Reset-all action types of the enclosing boundaries

    Returns:
        Leaf CompiledNode (selector is filled in by the caller)
    """
    node = resolve_structure(structure)
    default = default_value(node)
    handlers = _handlers_for(node, default)

    types = {op: action_type(location_string, op) for op in handlers}
    routes: Dict[str, Handler] = {types[op]: handler for op, handler in handlers.items()}
    for reset_all_type in reset_all_types:
        routes[reset_all_type] = handlers[RESET]

    def apply(state, action):
        handler = routes.get(action.type)
        if handler is None:
            return state
        return handler(state, action)

    def reducer(state, action):
        if isinstance(action, Mapping):
            action = action_from_dict(action)
        if state is None:
            state = copy.deepcopy(default)
        if action.type == BATCH_ACTION_TYPE:
            for inner in flatten_actions(action):
                state = apply(state, inner)
            return state
        return apply(state, action)

    get_logger(__name__, trace_id=location_string).debug(
        "Compiled %s leaf reducer", node.type.value
    )
    return CompiledNode(
        location_string=location_string,
        reducer=reducer,
        actions=_action_creators(types),
        action_types=types,
        default=default,
    )


def combine_reducers(reducers: Dict[str, ReducerFn]) -> ReducerFn:
    """
    Combine sibling reducers into one reducer over a mapping of their states.

    Returns the previous state object when no child changed.
    """
    reducers = dict(reducers)

    def combination(state, action):
        previous = state if isinstance(state, Mapping) else {}
        changed = len(previous) != len(reducers)
        next_state = {}
        for key, reducer in reducers.items():
            before = previous.get(key)
            after = reducer(before, action)
            next_state[key] = after
            changed = changed or after is not before
        if not changed and state is not None:
            return state
        return next_state

    return combination
