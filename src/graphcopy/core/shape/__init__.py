"""Shape functionality: type classification, property metadata and registry."""

from graphcopy.core.shape.core import (
    IMMUTABLE_TYPES,
    PASSTHROUGH_TYPES,
    ShapeRegistry,
    classify,
    element_type,
    get_registry,
    is_abstract_mapping,
    is_abstract_sequence,
    is_abstract_set,
    is_known_immutable,
    type_name,
)
from graphcopy.core.shape.models import (
    CopyStrategy,
    PropertyMetadata,
    Reconstruction,
    Sensitive,
    ShapeKind,
    TypeShape,
)

__all__ = [
    # Models
    "CopyStrategy",
    "PropertyMetadata",
    "Reconstruction",
    "Sensitive",
    "ShapeKind",
    "TypeShape",
    # Core
    "IMMUTABLE_TYPES",
    "PASSTHROUGH_TYPES",
    "ShapeRegistry",
    "classify",
    "element_type",
    "get_registry",
    "is_abstract_mapping",
    "is_abstract_sequence",
    "is_abstract_set",
    "is_known_immutable",
    "type_name",
]
