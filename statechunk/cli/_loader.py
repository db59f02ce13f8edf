"""
Load structure definitions named as "package.module:ATTRIBUTE".
"""

import importlib
from typing import Any

from ..core.errors import StructureError


def split_target(target: str):
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise StructureError(
            f"Structure target must look like 'package.module:ATTRIBUTE', got {target!r}"
        )
    return module_name, attribute


def load_structure(target: str) -> Any:
    """
    Import the structure a target names.

    Raises:
        StructureError: If target is malformed
        ImportError: If the module cannot be imported
        AttributeError: If the attribute does not exist
    """
    module_name, attribute = split_target(target)
    obj: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        obj = getattr(obj, part)
    return obj


def default_chunk_name(target: str) -> str:
    """Chunk name used when none is given: the attribute, lower-cased."""
    _, attribute = split_target(target)
    return attribute.rsplit(".", 1)[-1].lower()
