"""Composite object builder: copies properties, then rebuilds the instance.

Reconstruction order:
    1. A constructor whose parameters match every property name
       (case-insensitive), e.g. dataclasses, pydantic models, named tuples.
    2. A constructor call needing no required arguments, followed by setattr
       for every writable property. Read-only fields the constructor accepts
       (frozen dataclass fields, named tuple fields) are passed to it; other
       read-only properties are dropped with a warning.
    3. Otherwise the type cannot be copied safely and the copy fails.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

from graphcopy.core.shape import (
    PropertyMetadata,
    Reconstruction,
    TypeShape,
    get_registry,
    type_name,
)
from graphcopy.diagnostics import WarningKind
from graphcopy.errors import NoUsableConstructorError

if TYPE_CHECKING:
    from graphcopy.copier.graph import GraphCopier
    from graphcopy.core.context import CopyContext


def copy_composite(copier: GraphCopier, src: Any, ctx: CopyContext) -> Any:
    """Copy a composite object (dataclass, pydantic model, named tuple, plain object).

    Raises:
        NoUsableConstructorError: If neither reconstruction strategy applies.
    """
    registry = get_registry()
    shape = registry.resolve(type(src))

    if shape.has_indexer:
        copier.warn(
            f"Indexed property '__getitem__' cannot be copied at path: {ctx.path}",
            WarningKind.INDEXED_PROPERTY_SKIPPED,
            ctx.path,
            propertyName="__getitem__",
            propertyType=type_name(shape.cls),
        )

    properties = shape.properties_of(src)
    values: dict[str, Any] = {}
    for prop in properties:
        prop_ctx = ctx.for_property(prop)
        copied = copier.copy_node(getattr(src, prop.name), prop_ctx)
        values[prop.name] = copier.apply(copied, prop_ctx, "property", name=prop.name)

    strategy = registry.reconstruction(shape, properties)
    if strategy is Reconstruction.CONSTRUCTOR:
        return _construct(shape, values)
    if strategy is Reconstruction.DEFAULT_THEN_SETTERS:
        return _construct_then_set(copier, shape, properties, values, ctx)
    raise NoUsableConstructorError(
        f"Type '{type_name(shape.cls)}' at path: {ctx.path} has no parameterless "
        f"constructor and no constructor matching all properties",
        ctx.path,
    )


def _construct(shape: TypeShape, values: dict[str, Any]) -> Any:
    by_folded_name = {name.casefold(): value for name, value in values.items()}
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    for param in shape.parameters or ():
        value = by_folded_name[param.name.casefold()]
        if param.kind is inspect.Parameter.POSITIONAL_ONLY:
            args.append(value)
        else:
            kwargs[param.name] = value
    return shape.cls(*args, **kwargs)


def _construct_then_set(
    copier: GraphCopier,
    shape: TypeShape,
    properties: list[PropertyMetadata],
    values: dict[str, Any],
    ctx: CopyContext,
) -> Any:
    # Read-only fields the constructor accepts are init-only; pass them as arguments.
    init_only = {p.name.casefold(): p.name for p in properties if not p.writable}
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    passed: set[str] = set()
    for param in shape.parameters or ():
        name = init_only.get(param.name.casefold())
        if name is None:
            if param.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(param.default)
            continue
        passed.add(name)
        if param.kind is inspect.Parameter.POSITIONAL_ONLY:
            args.append(values[name])
        else:
            kwargs[param.name] = values[name]

    instance = shape.cls(*args, **kwargs)
    for prop in properties:
        if prop.writable:
            setattr(instance, prop.name, values[prop.name])
        elif prop.name not in passed:
            copier.warn(
                f"Read-only property '{prop.name}' at path: {ctx.path} cannot be set "
                f"(no setter and no matching constructor)",
                WarningKind.READ_ONLY_PROPERTY_LOST,
                ctx.path,
                propertyName=prop.name,
                propertyType=type_name(prop.declared_type),
            )
    return instance
