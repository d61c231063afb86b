"""Graph copier: the recursive entry point of the engine.

Usage:
    from graphcopy import deep_copy_and_apply

    def redact(prop, value):
        if prop is not None and prop.sensitive and isinstance(value, str):
            return "***"
        return value

    safe = deep_copy_and_apply(settings, redact)

Critical invariant:
    The transform runs once per property value and once per collection
    element, where the container references the value. The root itself is
    never passed to the transform.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from graphcopy.copier import collections as coll
from graphcopy.copier.composite import copy_composite
from graphcopy.core.context import MAX_RECURSION_DEPTH, CopyContext
from graphcopy.core.shape import CopyStrategy, classify, type_name
from graphcopy.core.types import Copy, Transform
from graphcopy.diagnostics import DiagnosticsSink, WarningKind, WarningsSink
from graphcopy.errors import (
    CycleDetectedError,
    MissingTransformError,
    RecursionDepthExceededError,
    TransformError,
)

_UNTRACKED = (CopyStrategy.PASSTHROUGH, CopyStrategy.IMMUTABLE)


class GraphCopier:
    """Deep-copies object graphs, applying a transform to every referenced value.

    A GraphCopier holds configuration only: every copy threads its own
    CopyContext, so one instance can serve concurrent calls provided the
    transform and sink are thread-safe.

    Args:
        transform: Called as `transform(prop, value)` for every property value
            and collection element.
        sink: Receives non-fatal warnings (default: WarningsSink).
        check_set_mutations: Reject transforms that replace or mutate
            non-immutable set elements.
        detect_cycles: Track ancestors and raise CycleDetectedError on the
            first revisit instead of relying on the depth bound alone.

    Raises:
        MissingTransformError: If transform is None or not callable.
    """

    def __init__(
        self,
        transform: Transform,
        sink: DiagnosticsSink | None = None,
        *,
        check_set_mutations: bool = True,
        detect_cycles: bool = False,
    ) -> None:
        if transform is None or not callable(transform):
            raise MissingTransformError("transform must be a callable, got None")
        self._transform = transform
        self._sink: DiagnosticsSink = sink if sink is not None else WarningsSink()
        self.check_set_mutations = check_set_mutations
        self.detect_cycles = detect_cycles
        self._copiers: dict[CopyStrategy, Callable[[GraphCopier, Any, CopyContext], Any]] = {
            CopyStrategy.ARRAY: coll.copy_array,
            CopyStrategy.CUSTOM_SEQUENCE: coll.copy_custom_sequence,
            CopyStrategy.MAPPING: coll.copy_mapping,
            CopyStrategy.SET: coll.copy_set,
            CopyStrategy.LIST: coll.copy_list,
            CopyStrategy.COMPOSITE: copy_composite,
        }

    def copy[T](self, source: T) -> Copy[T]:
        """Copy source, starting at depth 0 and path "root".

        Args:
            source: Root of the graph; returned as-is when None.

        Returns:
            A structurally independent copy of source.
        """
        if source is None:
            return None  # type: ignore[return-value]
        return self.copy_node(source, CopyContext())

    def copy_node(self, value: Any, ctx: CopyContext) -> Any:
        """Copy a single node and, recursively, its descendants.

        The node itself is not transformed; the caller that holds the
        reference applies the transform via `apply`.

        Raises:
            RecursionDepthExceededError: If ctx.depth reached MAX_RECURSION_DEPTH.
            CycleDetectedError: In cycle-detection mode, on revisiting an ancestor.
        """
        if ctx.depth >= MAX_RECURSION_DEPTH:
            raise RecursionDepthExceededError(
                f"Maximum recursion depth of {MAX_RECURSION_DEPTH} exceeded "
                f"during deep copy at path: {ctx.path}",
                ctx.path,
            )
        if value is None:
            return None

        strategy = classify(value)
        if strategy in _UNTRACKED:
            return value

        if self.detect_cycles:
            if id(value) in ctx.ancestors:
                raise CycleDetectedError(
                    f"Reference cycle detected during deep copy at path: {ctx.path}", ctx.path
                )
            ctx = ctx.entering(value)

        return self._copiers[strategy](self, value, ctx)

    def apply(
        self,
        value: Any,
        ctx: CopyContext,
        subject: str,
        name: str | None = None,
    ) -> Any:
        """Run the transform on an already-copied value.

        Args:
            value: Copied value referenced by a container.
            ctx: Context of the value (carries the containing property).
            subject: What is being transformed, for error messages
                ("property", "list element", ...).
            name: Property name, if the value is a property value.

        Raises:
            TransformError: Wrapping any exception raised by the transform.
        """
        try:
            return self._transform(ctx.prop, value)
        except Exception as e:
            declared = type_name(ctx.declared_type) if ctx.declared_type is not None else None
            detail = f"Property name: {name}, " if name is not None else ""
            raise TransformError(
                f"Transformer function threw an exception while processing {subject} "
                f"at path: {ctx.path}. {detail}Declared type: {declared or 'unknown'}. "
                f"See the chained exception for details.",
                path=ctx.path,
                name=name,
                declared_type=declared,
            ) from e

    def warn(self, message: str, kind: WarningKind, path: str, **tags: str) -> None:
        """Report a non-fatal condition to the sink; never raises by itself."""
        self._sink.add_warning(message, kind, {"type": kind.value, "path": path, **tags})


def deep_copy_and_apply[T](
    source: T,
    transform: Transform,
    *,
    sink: DiagnosticsSink | None = None,
    check_set_mutations: bool = True,
    detect_cycles: bool = False,
) -> Copy[T]:
    """Deep-copy source, applying transform to every property value and element.

    Useful for redacting passwords or encrypting selected properties without
    writing copy logic per model.

    Args:
        source: Object graph to copy. None yields None.
        transform: `(prop, value) -> value`. prop is the containing property's
            metadata; it is None only for elements of a root-level collection.
            Mapping keys are never transformed.
        sink: Receives non-fatal warnings (default: WarningsSink).
        check_set_mutations: Reject transforms that replace or mutate
            non-immutable set elements.
        detect_cycles: Raise CycleDetectedError on reference cycles instead of
            waiting for the depth bound.

    Returns:
        The copy. The root itself is never transformed.

    Raises:
        MissingTransformError: transform is None or not callable.
        RecursionDepthExceededError: Graph deeper than MAX_RECURSION_DEPTH.
        TransformError: transform raised.
        UnsafeSetMutationError: transform replaced or mutated a set element.
        NoUsableConstructorError: A composite type cannot be rebuilt.
        UnsupportedShapeError: Multi-dimensional array, non-immutable mapping
            key or custom sequence without an argless constructor.

    Note:
        Reference cycles and shared references are not preserved: shared
        nodes are copied once per reference, cycles fail.
    """
    copier = GraphCopier(
        transform,
        sink,
        check_set_mutations=check_set_mutations,
        detect_cycles=detect_cycles,
    )
    return copier.copy(source)
