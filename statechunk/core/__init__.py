"""
Core structure compilation primitives.

- Structure: declarative state shapes (Types, PropType, WILDCARD_KEY)
- Validation: sanitizing untrusted input against a structure
- Actions: immutable action records and combined (batch) actions
- Reducer: pure leaf reducers and reducer combination
"""

from .actions import Action, INIT_ACTION, action_type
from .batch import BATCH_ACTION_TYPE, CombinedAction, action_from_dict, create_combined_action
from .compiled import CompiledNode, iter_boundaries, iter_leaves, project
from .errors import ConfigurationError, StructureError, ValidationConfigError
from .reducer import combine_reducers, create_reducer
from .structure import WILDCARD_KEY, PropType, StructureNode, Types, default_value
from .validation import (
    get_type_validation,
    get_value_type,
    has_wildcard_key,
    validate_array,
    validate_shape,
    validate_value,
)

__all__ = [
    "Action",
    "INIT_ACTION",
    "action_type",
    "BATCH_ACTION_TYPE",
    "CombinedAction",
    "action_from_dict",
    "create_combined_action",
    "CompiledNode",
    "iter_boundaries",
    "iter_leaves",
    "project",
    "ConfigurationError",
    "StructureError",
    "ValidationConfigError",
    "combine_reducers",
    "create_reducer",
    "WILDCARD_KEY",
    "PropType",
    "StructureNode",
    "Types",
    "default_value",
    "get_type_validation",
    "get_value_type",
    "has_wildcard_key",
    "validate_array",
    "validate_shape",
    "validate_value",
]
