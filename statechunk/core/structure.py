"""
Structure definition language.

A structure is declared once, before any store exists. Every constructor
returns a descriptor: a zero-argument callable returning a StructureNode.
Calling a descriptor twice returns the same node.

Any zero-argument callable returning a node is a descriptor, so a shape can
reference itself (or a sibling declared later) through a lambda:

    TREE = Types.shape({
        "label": Types.string(),
        "children": Types.array_of(lambda: TREE()),
    })
"""

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .errors import StructureError


class PropType(Enum):
    """Type tag carried by every structure node."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ANY = "any"
    CUSTOM = "custom"
    SHAPE = "shape"
    ARRAY = "array"
    REDUCER = "reducer"


class WildcardKey(Enum):
    WILDCARD = "wildcard"


# Compared by identity; never equal to any property name.
WILDCARD_KEY = WildcardKey.WILDCARD

CONTAINER_TYPES = frozenset({PropType.SHAPE, PropType.ARRAY})

# Default for a leaf that declares none.
ZERO_VALUES: Dict[PropType, Any] = {
    PropType.STRING: "",
    PropType.NUMBER: 0,
    PropType.BOOLEAN: False,
    PropType.ANY: None,
    PropType.CUSTOM: None,
    PropType.ARRAY: [],
    PropType.SHAPE: {},
}

_UNSET = object()

Descriptor = Callable[[], "StructureNode"]


@dataclass(frozen=True, eq=False)
class StructureNode:
    """
    One node of a structure tree.

    Fields:
        type: PropType tag
        declared_default: Default given at definition time (unset if none)
        validator: Predicate for custom nodes
        structure: Children mapping (shape), element descriptor (array),
            or wrapped structure (reducer boundary)
        error_message: Optional callable describing a rejected value
    """
    type: PropType
    declared_default: Any = _UNSET
    validator: Optional[Callable[[Any], bool]] = None
    structure: Any = None
    error_message: Optional[Callable[[Any], str]] = None

    @property
    def default(self) -> Any:
        return default_value(self)

    @property
    def has_declared_default(self) -> bool:
        return self.declared_default is not _UNSET


def _descriptor(node: StructureNode) -> Descriptor:
    def descriptor() -> StructureNode:
        return node

    descriptor.__qualname__ = f"descriptor[{node.type.value}]"
    return descriptor


def _primitive(kind: PropType, default: Any) -> Descriptor:
    declared = _UNSET if default is None else copy.deepcopy(default)
    return _descriptor(StructureNode(type=kind, declared_default=declared))


def _check_child(key: Any, child: Any) -> None:
    if not (isinstance(key, str) or key is WILDCARD_KEY):
        raise StructureError(
            f"Shape keys must be strings or Types.wildcard_key(), got {key!r}"
        )
    if child is None or not (callable(child) or isinstance(child, (Mapping, StructureNode))):
        raise StructureError(f"Shape key {key!r} has no structure descriptor")


class Types:
    """Constructors for structure descriptors."""

    @staticmethod
    def string(default: Optional[str] = None) -> Descriptor:
        return _primitive(PropType.STRING, default)

    @staticmethod
    def number(default: Optional[float] = None) -> Descriptor:
        return _primitive(PropType.NUMBER, default)

    @staticmethod
    def boolean(default: Optional[bool] = None) -> Descriptor:
        return _primitive(PropType.BOOLEAN, default)

    @staticmethod
    def any(default: Any = None) -> Descriptor:
        return _primitive(PropType.ANY, default)

    @staticmethod
    def custom(
        validator: Callable[[Any], bool],
        validation_error_message: Optional[Callable[[Any], str]] = None,
        default: Any = None,
    ) -> Descriptor:
        """
        Leaf validated by a caller supplied predicate.

        Args:
            validator: Receives the raw value, returns True to accept it;
                an exception it raises rejects the value
            validation_error_message: Optional callable describing a rejected value
            default: Default value (None if omitted)
        """
        if not callable(validator):
            raise StructureError("Types.custom requires a callable validator")
        declared = _UNSET if default is None else copy.deepcopy(default)
        return _descriptor(StructureNode(
            type=PropType.CUSTOM,
            declared_default=declared,
            validator=validator,
            error_message=validation_error_message,
        ))

    @staticmethod
    def shape(mapping: Mapping[Any, Any]) -> Descriptor:
        if not isinstance(mapping, Mapping):
            raise StructureError(
                f"Types.shape requires a mapping structure, got {type(mapping).__name__}"
            )
        children = {}
        for key, child in mapping.items():
            _check_child(key, child)
            children[key] = child
        return _descriptor(StructureNode(type=PropType.SHAPE, structure=children))

    @staticmethod
    def array_of(element: Any, default: Optional[list] = None) -> Descriptor:
        if element is None:
            raise StructureError("Types.array_of requires an element structure")
        declared = _UNSET if default is None else list(copy.deepcopy(default))
        return _descriptor(StructureNode(
            type=PropType.ARRAY,
            declared_default=declared,
            structure=element,
        ))

    @staticmethod
    def reducer(inner: Any) -> Descriptor:
        """Mark a subtree as an independently dispatchable and resettable unit."""
        if inner is None:
            raise StructureError("Types.reducer requires a structure to wrap")
        if isinstance(inner, Mapping):
            for key, child in inner.items():
                _check_child(key, child)
        return _descriptor(StructureNode(type=PropType.REDUCER, structure=inner))

    @staticmethod
    def wildcard_key() -> WildcardKey:
        return WILDCARD_KEY


def structure_node(structure: Any) -> StructureNode:
    """
    Turn a descriptor, node or plain mapping into a StructureNode.

    Raises:
        StructureError: If structure is missing or not a structure
    """
    if structure is None:
        raise StructureError("A structure is required but none was given")
    if isinstance(structure, StructureNode):
        return structure
    if isinstance(structure, Mapping):
        return Types.shape(structure)()
    if callable(structure):
        node = structure()
        if not isinstance(node, StructureNode):
            raise StructureError(
                f"Structure descriptor returned {type(node).__name__}, not a StructureNode"
            )
        return node
    raise StructureError(f"Not a structure: {structure!r}")


def resolve_structure(structure: Any) -> StructureNode:
    """Like structure_node(), but looks through reducer boundaries."""
    node = structure_node(structure)
    while node.type is PropType.REDUCER:
        node = structure_node(node.structure)
    return node


def unwrap_boundary(structure: Any) -> Any:
    """Strip reducer boundary tags, returning the wrapped descriptor or mapping."""
    while not isinstance(structure, Mapping):
        node = structure_node(structure)
        if node.type is not PropType.REDUCER:
            break
        structure = node.structure
    return structure


def shape_children(structure: Any) -> Optional[Mapping[Any, Any]]:
    """Children of a shape-like structure, or None for anything else."""
    structure = unwrap_boundary(structure)
    if isinstance(structure, Mapping):
        return structure
    node = structure_node(structure)
    if node.type is PropType.SHAPE:
        return node.structure
    return None


def contains_reducers(structure: Any) -> bool:
    """True if a reducer boundary appears at any depth below a shape-like structure."""
    children = shape_children(structure)
    if children is None:
        return False
    seen: set = set()
    return any(_contains_reducers(child, seen) for child in children.values())


def _contains_reducers(structure: Any, seen: set) -> bool:
    if isinstance(structure, Mapping):
        return any(_contains_reducers(child, seen) for child in structure.values())
    node = structure_node(structure)
    if id(node) in seen:
        return False
    seen.add(id(node))
    if node.type is PropType.REDUCER:
        return True
    if node.type is not PropType.SHAPE:
        return False
    return any(_contains_reducers(child, seen) for child in node.structure.values())


def default_value(structure: Any) -> Any:
    """
    Default value for a structure, as a fresh copy.

    Uses the declared default, else the zero value for the node's kind. A
    shape's default maps each named child to that child's default.

    Raises:
        StructureError: If a shape contains itself outside of an array
    """
    return copy.deepcopy(_derive_default(resolve_structure(structure), ()))


def _derive_default(node: StructureNode, active: Tuple[StructureNode, ...]) -> Any:
    if node.has_declared_default:
        return node.declared_default
    if node.type is PropType.SHAPE:
        if any(node is n for n in active):
            raise StructureError(
                "Shape structure contains itself outside of an array; it has no finite default"
            )
        active = active + (node,)
        return {
            key: _derive_default(resolve_structure(child), active)
            for key, child in node.structure.items()
            if key is not WILDCARD_KEY
        }
    if node.type not in ZERO_VALUES:
        raise StructureError(f"No default known for structure type: {node.type!r}")
    return ZERO_VALUES[node.type]
