"""Type classification and the composite shape registry.

Usage:
    from graphcopy.core.shape import CopyStrategy, classify, get_registry

    assert classify("text") is CopyStrategy.IMMUTABLE
    shape = get_registry().resolve(MyRecord)
"""

from __future__ import annotations

import array
import collections.abc as cabc
import dataclasses
import datetime
import decimal
import enum
import inspect
import types
import typing
import uuid
from collections import deque
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from graphcopy.core.shape.models import (
    CopyStrategy,
    PropertyMetadata,
    Reconstruction,
    ShapeKind,
    TypeShape,
)

IMMUTABLE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    enum.Enum,
    str,
    bytes,
    datetime.date,  # also covers datetime.datetime
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    decimal.Decimal,
)
"""Closed set of scalar kinds returned unchanged and never hash-checked."""

PASSTHROUGH_TYPES: tuple[type, ...] = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
    range,
    slice,
    types.EllipsisType,
    types.NotImplementedType,
)

_ABSTRACT_MAPPINGS = frozenset({cabc.Mapping, cabc.MutableMapping})
_ABSTRACT_SETS = frozenset({cabc.Set, cabc.MutableSet})
_ABSTRACT_SEQUENCES = frozenset(
    {
        cabc.Sequence,
        cabc.MutableSequence,
        cabc.Collection,
        cabc.Iterable,
        cabc.Reversible,
    }
)


def is_known_immutable(tp: type) -> bool:
    """Check whether a type belongs to the Immutable Type Set."""
    return isinstance(tp, type) and issubclass(tp, IMMUTABLE_TYPES)


def is_numpy_array(value: Any) -> bool:
    """Check if value is a numpy ndarray without importing numpy."""
    tp = type(value)
    return tp.__module__ == "numpy" and tp.__name__ == "ndarray" and hasattr(value, "ndim")


def is_named_tuple(tp: type) -> bool:
    """Check if a tuple subclass was produced by namedtuple or typing.NamedTuple."""
    return issubclass(tp, tuple) and hasattr(tp, "_fields") and hasattr(tp, "_make")


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic."""
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def classify(value: Any) -> CopyStrategy:
    """Choose the copy strategy for a non-None runtime value.

    Order matters: str/bytes are sequences, tuples are collections, and
    named tuples are records, so earlier rules must win.

    Args:
        value: Value to classify.

    Returns:
        The CopyStrategy used to copy the value.
    """
    tp = type(value)
    if isinstance(value, PASSTHROUGH_TYPES):
        return CopyStrategy.PASSTHROUGH
    if is_known_immutable(tp):
        return CopyStrategy.IMMUTABLE
    if isinstance(value, tuple):
        return CopyStrategy.COMPOSITE if is_named_tuple(tp) else CopyStrategy.ARRAY
    if isinstance(value, array.array) or is_numpy_array(value):
        return CopyStrategy.ARRAY
    if isinstance(value, cabc.MutableSequence) and tp is not list:
        return CopyStrategy.CUSTOM_SEQUENCE
    if isinstance(value, cabc.Mapping):
        return CopyStrategy.MAPPING
    if isinstance(value, cabc.Set):
        return CopyStrategy.SET
    if isinstance(value, cabc.Collection):
        return CopyStrategy.LIST
    return CopyStrategy.COMPOSITE


def new_custom_sequence(src: cabc.MutableSequence[Any]) -> cabc.MutableSequence[Any]:
    """Create an empty sequence of the same type as src.

    Raises:
        TypeError: If the type cannot be constructed without arguments.
    """
    if isinstance(src, deque):
        return type(src)(maxlen=src.maxlen)
    return type(src)()


# Declared-type helpers


def unwrap_optional(declared: Any) -> Any:
    """Strip `X | None` down to `X`; other unions are returned unchanged."""
    origin = get_origin(declared)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in get_args(declared) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return declared


def split_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split `Annotated[T, *extras]` into (T, extras).

    Optional wrappers around Annotated are looked through for the extras,
    while the returned type keeps the Optional.
    """
    if get_origin(hint) is Annotated:
        return hint.__origin__, tuple(hint.__metadata__)
    inner = unwrap_optional(hint)
    if inner is not hint and get_origin(inner) is Annotated:
        return hint, tuple(inner.__metadata__)
    return hint, ()


def _abstract_origin(declared: Any) -> Any:
    declared = unwrap_optional(declared)
    return get_origin(declared) or declared


def is_abstract_mapping(declared: Any) -> bool:
    return _abstract_origin(declared) in _ABSTRACT_MAPPINGS


def is_abstract_set(declared: Any) -> bool:
    return _abstract_origin(declared) in _ABSTRACT_SETS


def is_abstract_sequence(declared: Any) -> bool:
    return _abstract_origin(declared) in _ABSTRACT_SEQUENCES


def element_type(declared: Any, index: int | None = None) -> Any:
    """Declared type of a container's element, derived from its type arguments.

    Args:
        declared: Declared type of the container, e.g. `list[int]`.
        index: Element position, used for fixed-length `tuple[int, str]`.

    Returns:
        The element type, the value type for mappings, or None if unknown.
    """
    declared = unwrap_optional(declared)
    args = get_args(declared)
    if not args:
        return None
    origin = get_origin(declared)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        if index is not None and index < len(args):
            return args[index]
        return None
    if isinstance(origin, type) and issubclass(origin, cabc.Mapping):
        return args[1] if len(args) == 2 else None
    return args[0]


def type_name(tp: Any) -> str:
    """Readable name for a type or type hint, used in messages and tags."""
    if tp is None:
        return "unknown"
    if isinstance(tp, type) and get_origin(tp) is None:
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp).replace("typing.", "").replace("collections.abc.", "")


# Composite shapes


def property_from_hint(
    owner: type,
    name: str,
    hint: Any,
    *,
    writable: bool = True,
    metadata: cabc.Mapping[str, Any] | None = None,
    markers: tuple[Any, ...] = (),
) -> PropertyMetadata:
    """Build PropertyMetadata from a raw (possibly Annotated) type hint."""
    declared, extras = split_annotated(hint)
    return PropertyMetadata(
        name=name,
        owner=owner,
        declared_type=declared,
        readable=True,
        writable=writable,
        metadata=types.MappingProxyType(dict(metadata or {})),
        markers=markers + extras,
    )


def _resolve_hints(cls: type) -> dict[str, Any]:
    """Resolve type hints, keeping Annotated extras.

    Falls back to raw per-class annotations when forward references cannot be
    evaluated; declared types then stay unevaluated strings.
    """
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(inspect.get_annotations(klass))
        return hints


def _dataclass_fields(cls: type, hints: dict[str, Any]) -> tuple[PropertyMetadata, ...]:
    frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
    return tuple(
        property_from_hint(
            cls,
            f.name,
            hints.get(f.name, f.type),
            writable=not frozen,
            metadata=f.metadata,
        )
        for f in dataclasses.fields(cls)
    )


def _pydantic_fields(cls: type) -> tuple[PropertyMetadata, ...]:
    frozen = bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
    props = []
    for name, info in cls.model_fields.items():  # type: ignore[attr-defined]
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        props.append(
            property_from_hint(
                cls,
                name,
                info.annotation,
                writable=not (frozen or info.frozen),
                metadata=extra,
                markers=tuple(info.metadata),
            )
        )
    return tuple(props)


def _named_tuple_fields(cls: type, hints: dict[str, Any]) -> tuple[PropertyMetadata, ...]:
    return tuple(
        property_from_hint(cls, name, hints.get(name), writable=False)
        for name in cls._fields  # type: ignore[attr-defined]
    )


def _class_properties(cls: type, hints: dict[str, Any]) -> tuple[PropertyMetadata, ...]:
    props: list[PropertyMetadata] = []
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object or klass.__module__.startswith("pydantic"):
            continue
        for name, attr in vars(klass).items():
            if name in seen or name.startswith("_") or not isinstance(attr, property):
                continue
            seen.add(name)
            if attr.fget is None:
                continue
            hint = hints.get(name)
            if hint is None:
                hint = inspect.get_annotations(attr.fget).get("return")
            props.append(property_from_hint(cls, name, hint, writable=attr.fset is not None))
    return tuple(props)


def _constructor_parameters(cls: type) -> tuple[inspect.Parameter, ...] | None:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return None
    variadic = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    return tuple(p for p in signature.parameters.values() if p.kind not in variadic)


def _has_indexer(cls: type) -> bool:
    return any(
        "__getitem__" in vars(klass) for klass in cls.__mro__ if klass not in (object, tuple)
    )


def _slot_names(cls: type) -> tuple[str, ...]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if not s.startswith("_") and s not in names)
    return tuple(names)


class ShapeRegistry:
    """Process-local cache of composite TypeShapes.

    Shapes depend only on the class, so they are resolved once and reused.
    Concurrent resolution of the same class produces equal shapes, so the
    cache needs no locking.
    """

    def __init__(self) -> None:
        """Initialize empty shape registry."""
        self._shapes: dict[type, TypeShape] = {}
        self._reconstructions: dict[type, Reconstruction | None] = {}

    def resolve(self, cls: type) -> TypeShape:
        """Get the shape of a composite class, resolving it on first use.

        Args:
            cls: Composite class to describe.

        Returns:
            Cached TypeShape for the class.
        """
        shape = self._shapes.get(cls)
        if shape is None:
            shape = self._build(cls)
            self._shapes[cls] = shape
        return shape

    def _build(self, cls: type) -> TypeShape:
        hints = _resolve_hints(cls)
        if dataclasses.is_dataclass(cls):
            kind, fields = ShapeKind.DATACLASS, _dataclass_fields(cls, hints)
        elif _is_pydantic(cls):
            kind, fields = ShapeKind.PYDANTIC, _pydantic_fields(cls)
        elif is_named_tuple(cls):
            kind, fields = ShapeKind.NAMED_TUPLE, _named_tuple_fields(cls, hints)
        else:
            kind, fields = ShapeKind.PLAIN, ()
        return TypeShape(
            cls=cls,
            kind=kind,
            fields=fields,
            class_properties=_class_properties(cls, hints),
            parameters=_constructor_parameters(cls),
            has_indexer=_has_indexer(cls),
            slot_names=_slot_names(cls) if kind is ShapeKind.PLAIN else (),
            hints=types.MappingProxyType(hints),
        )

    def reconstruction(
        self, shape: TypeShape, properties: list[PropertyMetadata]
    ) -> Reconstruction | None:
        """Choose how to rebuild an instance with the given properties.

        Tries a constructor whose parameters match every property name
        (case-insensitively) first, then a no-argument constructor.

        The choice is cached per class for declared-field shapes, whose
        property set is fixed. Plain objects carry per-instance attributes,
        so their choice is recomputed on every call.

        Args:
            shape: Shape of the composite type.
            properties: Properties whose copied values must be restored.

        Returns:
            The chosen Reconstruction, or None if neither applies.
        """
        if shape.kind is ShapeKind.PLAIN:
            return _choose_reconstruction(shape, properties)
        if shape.cls not in self._reconstructions:
            self._reconstructions[shape.cls] = _choose_reconstruction(shape, properties)
        return self._reconstructions[shape.cls]

    def clear(self) -> None:
        """Drop all cached shapes."""
        self._shapes.clear()
        self._reconstructions.clear()


def _choose_reconstruction(
    shape: TypeShape, properties: list[PropertyMetadata]
) -> Reconstruction | None:
    params = shape.parameters
    if params is None:
        return None
    if len(params) == len(properties):
        param_names = {p.name.casefold() for p in params}
        if all(prop.name.casefold() in param_names for prop in properties):
            return Reconstruction.CONSTRUCTOR
    if all(p.default is not inspect.Parameter.empty for p in params):
        return Reconstruction.DEFAULT_THEN_SETTERS
    return None


# Module-level registry instance
_registry = ShapeRegistry()


def get_registry() -> ShapeRegistry:
    """Access the global shape registry.

    Returns:
        The process-local ShapeRegistry instance.
    """
    return _registry
