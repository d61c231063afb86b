"""Per-node copy context, passed by value through every recursive call."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from graphcopy.core.shape.models import PropertyMetadata

MAX_RECURSION_DEPTH = 100
"""Depth bound for a single copy; the only default guard against reference cycles."""

ROOT_PATH = "root"


@dataclass(slots=True, frozen=True)
class CopyContext:
    """Location of the node currently being copied.

    Attributes:
        depth: Number of containers between the root and this node.
        path: Human-readable location, e.g. `root.users[3].name`.
        prop: Metadata of the containing property; None at the root and for
            elements of a root-level collection.
        declared_type: Declared type of this node, if known.
        ancestors: ids of containers on the path; only filled in
            cycle-detection mode.
    """

    depth: int = 0
    path: str = ROOT_PATH
    prop: PropertyMetadata | None = None
    declared_type: Any = None
    ancestors: frozenset[int] = frozenset()

    def for_property(self, prop: PropertyMetadata) -> CopyContext:
        """Context for the value of a composite's property."""
        return CopyContext(
            depth=self.depth + 1,
            path=f"{self.path}.{prop.name}",
            prop=prop,
            declared_type=prop.declared_type,
            ancestors=self.ancestors,
        )

    def for_element(self, segment: object, declared_type: Any = None) -> CopyContext:
        """Context for a collection element; keeps the containing property."""
        return CopyContext(
            depth=self.depth + 1,
            path=f"{self.path}[{segment}]",
            prop=self.prop,
            declared_type=declared_type,
            ancestors=self.ancestors,
        )

    def entering(self, node: object) -> CopyContext:
        """Same location, with node recorded as an ancestor of its children."""
        return replace(self, ancestors=self.ancestors | {id(node)})
