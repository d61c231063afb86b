"""Core type definitions for graphcopy."""

from collections.abc import Callable
from typing import Any

from graphcopy.core.shape.models import PropertyMetadata

type Copy[T] = T
"""Type alias indicating a value is a structurally independent deep copy.

Mutating a `Copy[T]` never affects the source graph it was produced from.
"""

type Transform = Callable[[PropertyMetadata | None, Any], Any]
"""Caller-supplied mapping applied to every copied value referenced by a container.

Receives the metadata of the containing property (None only for elements of a
root-level collection) and the already-copied value. Returns the value to embed
in the result.
"""
