"""Collection copiers: per-shape reconstruction of arrays, sequences, mappings and sets.

Each copier recurses into every element first, then passes the copied element
to the transform together with the containing property's metadata.
"""

from __future__ import annotations

import array
from collections import defaultdict
from collections.abc import Callable, Mapping, MutableSequence, Set
from typing import TYPE_CHECKING, Any

from graphcopy.core.shape import (
    element_type,
    is_abstract_mapping,
    is_abstract_sequence,
    is_abstract_set,
    is_known_immutable,
    type_name,
)
from graphcopy.core.shape.core import is_numpy_array, new_custom_sequence
from graphcopy.diagnostics import WarningKind
from graphcopy.errors import UnsafeSetMutationError, UnsupportedShapeError

if TYPE_CHECKING:
    from graphcopy.copier.graph import GraphCopier
    from graphcopy.core.context import CopyContext

_ALLOWED_KEYS = (
    "bool, int, float, complex, Enum, str, bytes, date, datetime, time, timedelta, "
    "UUID, Decimal"
)


def _warn_fidelity_loss(
    copier: GraphCopier, ctx: CopyContext, is_abstract: Callable[[Any], bool], concrete: str
) -> None:
    """Emit TYPE_FIDELITY_LOSS when the declared (not runtime) type is abstract."""
    if ctx.declared_type is None or not is_abstract(ctx.declared_type):
        return
    declared = type_name(ctx.declared_type)
    tags = {"propertyName": ctx.prop.name} if ctx.prop is not None else {}
    label = f"Property '{ctx.prop.name}'" if ctx.prop is not None else "Value"
    copier.warn(
        f"{label} at path: {ctx.path} has interface type {declared} but contains {concrete}",
        WarningKind.TYPE_FIDELITY_LOSS,
        ctx.path,
        declaredType=declared,
        runtimeType=concrete,
        **tags,
    )


def _copy_elements(
    copier: GraphCopier, items: Any, ctx: CopyContext, subject: str
) -> list[Any]:
    """Copy then transform each element in iteration order."""
    result = []
    for index, item in enumerate(items):
        item_ctx = ctx.for_element(index, element_type(ctx.declared_type, index))
        copied = copier.copy_node(item, item_ctx)
        result.append(copier.apply(copied, item_ctx, subject))
    return result


def copy_array(copier: GraphCopier, src: Any, ctx: CopyContext) -> Any:
    """Copy a one-dimensional array: tuple, array.array or numpy ndarray.

    Raises:
        UnsupportedShapeError: If a numpy array has more than one dimension.
    """
    if is_numpy_array(src):
        if src.ndim != 1:
            raise UnsupportedShapeError(
                f"Multi-dimensional arrays are not supported at path: {ctx.path}. "
                f"Array has rank {src.ndim}.",
                ctx.path,
            )
        items = _copy_elements(copier, src.tolist(), ctx, "array element")
        result = src.copy()
        for index, item in enumerate(items):
            result[index] = item
        return result

    items = _copy_elements(copier, src, ctx, "array element")
    if isinstance(src, array.array):
        return array.array(src.typecode, items)
    if type(src) is tuple:
        return tuple(items)
    return type(src)(items)


def copy_custom_sequence(copier: GraphCopier, src: MutableSequence[Any], ctx: CopyContext) -> Any:
    """Copy a MutableSequence other than list, keeping its type.

    Raises:
        UnsupportedShapeError: If the type cannot be constructed without arguments.
    """
    try:
        result = new_custom_sequence(src)
    except TypeError as e:
        raise UnsupportedShapeError(
            f"Cannot create instance of sequence type '{type_name(type(src))}' "
            f"at path: {ctx.path}. The type must be constructible without arguments. "
            f"Inner exception: {e}",
            ctx.path,
        ) from e

    for item in _copy_elements(copier, src, ctx, "sequence element"):
        result.append(item)
    return result


def _new_mapping(copier: GraphCopier, src: Mapping[Any, Any], ctx: CopyContext) -> dict[Any, Any]:
    """Create an empty dict, preserving a dict subclass (and default_factory) if possible."""
    src_type = type(src)
    if src_type is dict or not isinstance(src, dict):
        return {}
    try:
        if isinstance(src, defaultdict):
            return src_type(src.default_factory)
        return src_type()
    except Exception as e:
        copier.warn(
            f"Dictionary comparer could not be preserved at path: {ctx.path}, "
            f"using default comparer",
            WarningKind.COMPARER_FALLBACK,
            ctx.path,
            sourceType=type_name(src_type),
            reason=repr(e),
        )
        return {}


def copy_mapping(copier: GraphCopier, src: Mapping[Any, Any], ctx: CopyContext) -> dict[Any, Any]:
    """Copy a mapping; keys are kept as-is, values are copied and transformed.

    Raises:
        UnsupportedShapeError: If any key's type is outside the Immutable Type Set.
    """
    for key in src:
        if not is_known_immutable(type(key)):
            raise UnsupportedShapeError(
                f"Dictionary key type '{type_name(type(key))}' is not supported "
                f"at path: {ctx.path}. Only immutable types ({_ALLOWED_KEYS}) are allowed "
                f"as dictionary keys to ensure correct equality semantics after deep copy.",
                ctx.path,
            )

    _warn_fidelity_loss(copier, ctx, is_abstract_mapping, "dict")
    result = _new_mapping(copier, src, ctx)
    value_type = element_type(ctx.declared_type)

    for key, value in src.items():
        value_ctx = ctx.for_element(key, value_type)
        copied = copier.copy_node(value, value_ctx)
        result[key] = copier.apply(copied, value_ctx, "dictionary value")
    return result


def _build_set(copier: GraphCopier, src: Set[Any], items: list[Any], ctx: CopyContext) -> Any:
    """Build the result set, preserving a set/frozenset subclass if possible."""
    src_type = type(src)
    if src_type is set or src_type is frozenset:
        return src_type(items)
    if not isinstance(src, (set, frozenset)):
        return set(items)
    try:
        return src_type(items)
    except Exception as e:
        fallback = frozenset if isinstance(src, frozenset) else set
        copier.warn(
            f"Set comparer could not be preserved at path: {ctx.path}, using default comparer",
            WarningKind.COMPARER_FALLBACK,
            ctx.path,
            sourceType=type_name(src_type),
            reason=repr(e),
        )
        return fallback(items)


def copy_set(copier: GraphCopier, src: Set[Any], ctx: CopyContext) -> Any:
    """Copy a set, guarding non-immutable elements against unsafe transforms.

    For elements outside the Immutable Type Set, the copied element's hash is
    taken before the transform runs. Returning a different object, or changing
    the hash of the same object, would corrupt set uniqueness and is rejected.

    Raises:
        UnsafeSetMutationError: If the guard is enabled and fires.
    """
    _warn_fidelity_loss(copier, ctx, is_abstract_set, "set")
    item_type = element_type(ctx.declared_type)
    items = []

    for index, item in enumerate(src):
        item_ctx = ctx.for_element(index, item_type)
        copied = copier.copy_node(item, item_ctx)

        guarded = (
            copier.check_set_mutations
            and copied is not None
            and not is_known_immutable(type(copied))
        )
        hash_before = hash(copied) if guarded else None

        transformed = copier.apply(copied, item_ctx, "set element")

        if guarded and transformed is not None:
            if transformed is not copied:
                problem = "returned a different object"
            elif hash(transformed) != hash_before:
                problem = "mutated the element in place"
            else:
                problem = None
            if problem is not None:
                raise UnsafeSetMutationError(
                    f"Set element transformation at path: {item_ctx.path} is potentially "
                    f"unsafe. Element type '{type_name(type(copied))}' is not immutable, "
                    f"and the transformer {problem}. This may break set equality semantics "
                    f"if the transformation affects __hash__ or __eq__, causing duplicate "
                    f"elements or loss of uniqueness. Use immutable element types or an "
                    f"identity transform for set elements.",
                    item_ctx.path,
                )

        items.append(transformed)

    return _build_set(copier, src, items, ctx)


def copy_list(copier: GraphCopier, src: Any, ctx: CopyContext) -> list[Any]:
    """Copy a list or any other collection into a new list."""
    _warn_fidelity_loss(copier, ctx, is_abstract_sequence, "list")
    return _copy_elements(copier, src, ctx, "list element")
