"""
Validation engine.

Sanitizes arbitrary input against a structure. Bad data never raises:
- scalar and custom mismatches are dropped (None means "drop this value")
- container mismatches inside a shape coerce to an empty container
- non-array input to validate_array yields []

Only a malformed structure (unknown type tag) raises.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional

from .errors import StructureError, ValidationConfigError
from .structure import (
    CONTAINER_TYPES,
    WILDCARD_KEY,
    PropType,
    StructureNode,
    resolve_structure,
    shape_children,
)

logger = logging.getLogger(__name__)

# (node, value) -> accepted?
TypeValidation = Callable[[StructureNode, Any], bool]


def _is_string(node: StructureNode, value: Any) -> bool:
    return isinstance(value, str)


def _is_number(node: StructureNode, value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_boolean(node: StructureNode, value: Any) -> bool:
    return isinstance(value, bool)


def _is_anything(node: StructureNode, value: Any) -> bool:
    return True


def _passes_custom(node: StructureNode, value: Any) -> bool:
    # raising counts as rejection
    try:
        return bool(node.validator(value))
    except Exception as e:
        logger.debug("Custom validator raised %s: %s", type(e).__name__, e)
        return False


def _is_mapping(node: StructureNode, value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_sequence(node: StructureNode, value: Any) -> bool:
    return isinstance(value, (list, tuple))


TYPE_VALIDATIONS: Dict[PropType, TypeValidation] = {
    PropType.STRING: _is_string,
    PropType.NUMBER: _is_number,
    PropType.BOOLEAN: _is_boolean,
    PropType.ANY: _is_anything,
    PropType.CUSTOM: _passes_custom,
    PropType.SHAPE: _is_mapping,
    PropType.ARRAY: _is_sequence,
}


def get_type_validation(type_tag: Any) -> TypeValidation:
    """
    Get the validation registered for a type tag.

    Raises:
        ValidationConfigError: If no validation is registered for the tag
    """
    try:
        return TYPE_VALIDATIONS[type_tag]
    except (KeyError, TypeError):
        raise ValidationConfigError(
            f"No validation registered for type: {type_tag!r}"
        ) from None


def _log_rejected(node: StructureNode, value: Any) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    if node.error_message is not None:
        reason = node.error_message(value)
    else:
        reason = f"expected {node.type.value}, got {type(value).__name__}"
    logger.debug("Rejected value: %s", reason)


def validate_value(structure: Any, value: Any) -> Any:
    """
    Validate a value against a structure.

    Returns:
        The value (sanitized recursively for containers) or None if it fails
    """
    node = resolve_structure(structure)
    validation = get_type_validation(node.type)
    if not validation(node, value):
        _log_rejected(node, value)
        return None
    if node.type is PropType.SHAPE:
        return validate_shape(node, value)
    if node.type is PropType.ARRAY:
        return validate_array(node, value)
    return value


def validate_array(structure: Any, value: Any = None) -> List[Any]:
    """
    Validate every element of an array, dropping the ones that fail.

    Never raises on bad data: non-array input yields []. Called without a
    value (validate_array(structure)) there is nothing to validate, so the
    result is [] whatever structure is.
    """
    if not isinstance(value, (list, tuple)):
        return []
    node = resolve_structure(structure)
    if node.type is not PropType.ARRAY:
        raise StructureError(f"validate_array needs an array structure, got {node.type.value}")

    result = []
    for position, item in enumerate(value):
        sanitized = validate_value(node.structure, item)
        if sanitized is None:
            logger.debug("Dropped array element at index %d", position)
            continue
        result.append(sanitized)
    return result


def validate_shape(structure: Any, value: Any) -> Dict[Any, Any]:
    """
    Validate a mapping against a shape.

    Keys without an exact or wildcard match are stripped. A container child
    given the wrong kind of value becomes an empty container; a scalar child
    that fails validation is omitted. Keys are never invented.
    """
    if not isinstance(value, Mapping):
        return {}
    node = resolve_structure(structure)
    if shape_children(node) is None:
        raise StructureError(f"validate_shape needs a shape structure, got {node.type.value}")

    wildcard = has_wildcard_key(node)
    result = {}
    for key, item in value.items():
        child = get_value_type(node, key, wildcard)
        if child is None:
            logger.debug("Stripped key not present in shape: %r", key)
            continue
        child_node = resolve_structure(child)
        sanitized = validate_value(child_node, item)
        if sanitized is None:
            if child_node.type not in CONTAINER_TYPES:
                continue
            sanitized = {} if child_node.type is PropType.SHAPE else []
        result[key] = sanitized
    return result


def has_wildcard_key(structure: Any) -> bool:
    children = shape_children(structure)
    return children is not None and WILDCARD_KEY in children


def get_value_type(structure: Any, key: Any, has_wildcard: bool) -> Optional[Any]:
    """
    Find the child structure for a key.

    An exact match wins over the wildcard. Returns None if neither applies.
    """
    children = shape_children(structure) or {}
    if key is not WILDCARD_KEY and key in children:
        return children[key]
    if has_wildcard:
        return children.get(WILDCARD_KEY)
    return None
