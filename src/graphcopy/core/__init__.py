"""Core functionalities: stateless classification, shapes and copy context.

Architecture Note:
    core/ contains pure building blocks with no knowledge of how a copy is
    orchestrated. The recursive engine lives in copier/.
"""

from graphcopy.core.context import MAX_RECURSION_DEPTH, ROOT_PATH, CopyContext
from graphcopy.core.shape import (
    IMMUTABLE_TYPES,
    CopyStrategy,
    PropertyMetadata,
    Reconstruction,
    Sensitive,
    ShapeRegistry,
    TypeShape,
    classify,
    get_registry,
    is_known_immutable,
)
from graphcopy.core.types import Copy, Transform

__all__ = [
    # Types
    "Copy",
    "Transform",
    # Context
    "CopyContext",
    "MAX_RECURSION_DEPTH",
    "ROOT_PATH",
    # Shape
    "CopyStrategy",
    "PropertyMetadata",
    "Reconstruction",
    "Sensitive",
    "ShapeRegistry",
    "TypeShape",
    "IMMUTABLE_TYPES",
    "classify",
    "get_registry",
    "is_known_immutable",
]
