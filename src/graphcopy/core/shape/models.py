"""Shape models: copy strategies, property metadata and per-type shapes.

A TypeShape captures everything about a composite class that does not depend
on a particular instance (declared fields, class-level properties, constructor
parameters). Instance attributes of plain classes are merged in per call.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from functools import cached_property
from types import MappingProxyType
from typing import Any

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class CopyStrategy(Enum):
    """How a runtime value is copied. Members are listed in classification order."""

    PASSTHROUGH = auto()  # Classes, functions, modules: referenced, never owned
    IMMUTABLE = auto()  # Immutable Type Set members
    ARRAY = auto()  # tuple, array.array, numpy-style arrays
    CUSTOM_SEQUENCE = auto()  # MutableSequence other than list
    MAPPING = auto()
    SET = auto()
    LIST = auto()  # list and any other Collection
    COMPOSITE = auto()


class ShapeKind(Enum):
    """Where a composite type's properties come from."""

    DATACLASS = auto()
    PYDANTIC = auto()
    NAMED_TUPLE = auto()
    PLAIN = auto()


class Reconstruction(Enum):
    """Strategy used to rebuild a composite once its property values are copied."""

    CONSTRUCTOR = auto()  # Constructor whose parameters match every property
    DEFAULT_THEN_SETTERS = auto()  # No-argument constructor, then setattr


class Sensitive:
    """Marker flagging a property as sensitive.

    Usage:
        @dataclass
        class Credentials:
            username: str
            password: Annotated[str, Sensitive()]
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "Sensitive()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Sensitive)

    def __hash__(self) -> int:
        return hash(Sensitive)


@dataclass(slots=True, frozen=True)
class PropertyMetadata:
    """Describes a property whose value is being copied and transformed.

    Attributes:
        name: Attribute name on the owning object.
        owner: Class that declares the property.
        declared_type: Resolved type hint with Annotated extras stripped, or None.
        readable: Whether the value can be read.
        writable: Whether the value can be assigned after construction.
        metadata: Field metadata (dataclass metadata, pydantic json_schema_extra).
        markers: Annotated extras attached to the type hint.
    """

    name: str
    owner: type
    declared_type: Any = None
    readable: bool = True
    writable: bool = True
    metadata: Mapping[str, Any] = field(default=_EMPTY, compare=False, hash=False)
    markers: tuple[Any, ...] = ()

    @property
    def sensitive(self) -> bool:
        """True when the property carries a sensitive marker in any supported form."""
        if self.metadata.get("sensitive"):
            return True
        return any(isinstance(marker, Sensitive) for marker in self.markers)


@dataclass(slots=True, frozen=True)
class TypeShape:
    """Class-level description of a composite type.

    Attributes:
        cls: The described class.
        kind: Where declared fields come from.
        fields: Declared fields, in declaration order (empty for PLAIN).
        class_properties: Public `property` descriptors walked in MRO order.
        parameters: Constructor parameters excluding *args/**kwargs, or None
            when the signature cannot be inspected.
        has_indexer: Whether the class defines `__getitem__`.
        slot_names: Public `__slots__` entries across the MRO.
        hints: Resolved type hints keyed by attribute name (Annotated kept).
    """

    cls: type
    kind: ShapeKind
    fields: tuple[PropertyMetadata, ...]
    class_properties: tuple[PropertyMetadata, ...]
    parameters: tuple[inspect.Parameter, ...] | None
    has_indexer: bool
    slot_names: tuple[str, ...] = ()
    hints: Mapping[str, Any] = field(default=_EMPTY, compare=False, hash=False)

    def properties_of(self, obj: Any) -> list[PropertyMetadata]:
        """List copyable properties of an instance of this shape.

        Args:
            obj: Instance whose properties are enumerated.

        Returns:
            Declared fields (or public instance attributes for plain classes),
            followed by class properties not already listed.
        """
        if self.kind is ShapeKind.PLAIN:
            props = self._instance_attributes(obj)
        else:
            props = list(self.fields)
        seen = {p.name for p in props}
        props.extend(p for p in self.class_properties if p.name not in seen)
        return props

    def _instance_attributes(self, obj: Any) -> list[PropertyMetadata]:
        from graphcopy.core.shape.core import property_from_hint

        names: list[str] = []
        for name in getattr(obj, "__dict__", {}):
            if not name.startswith("_") and not self._is_class_descriptor(name):
                names.append(name)
        for name in self.slot_names:
            if name not in names and hasattr(obj, name):
                names.append(name)
        return [property_from_hint(self.cls, name, self.hints.get(name)) for name in names]

    def _is_class_descriptor(self, name: str) -> bool:
        attr = inspect.getattr_static(self.cls, name, None)
        return isinstance(attr, (property, cached_property))
