"""Data models for copy diagnostics.

Warnings are plain data so any sink can store, log or forward them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class WarningKind(Enum):
    """Non-fatal conditions reported while copying."""

    TYPE_FIDELITY_LOSS = "TypeFidelityLoss"  # Abstract declared type copied as concrete
    COMPARER_FALLBACK = "ComparerFallback"  # Mapping/set subclass rebuilt as builtin
    READ_ONLY_PROPERTY_LOST = "ReadOnlyPropertyLost"  # No setter, no matching constructor
    INDEXED_PROPERTY_SKIPPED = "IndexedPropertySkipped"  # __getitem__ cannot be copied


@dataclass(slots=True)
class CopyWarning:
    """A single diagnostic emitted during a copy.

    Attributes:
        kind: Which condition occurred.
        message: Human-readable description.
        path: Location of the affected node.
        tags: Kind-specific details (propertyName, declaredType, ...).

    Example:
        warning = CopyWarning(
            kind=WarningKind.READ_ONLY_PROPERTY_LOST,
            message="Read-only property 'full_name' at path: root cannot be set",
            path="root",
            tags={"propertyName": "full_name", "propertyType": "str"},
        )
    """

    kind: WarningKind
    message: str
    path: str
    tags: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "path": self.path,
            "tags": dict(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CopyWarning:
        """Create from dictionary (for deserialization)."""
        return cls(
            kind=WarningKind(data["kind"]),
            message=data["message"],
            path=data["path"],
            tags=dict(data.get("tags", {})),
        )
