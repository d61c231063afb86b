"""Tests for diagnostics data models.

Why these tests exist:
- Warning kinds are part of the public contract: sinks and dashboards match
  on their string values
- CopyWarning must serialize to plain data for forwarding
"""

import pytest

from graphcopy.diagnostics import CopyWarning, WarningKind


@pytest.mark.parametrize(
    ("kind", "value"),
    [
        (WarningKind.TYPE_FIDELITY_LOSS, "TypeFidelityLoss"),
        (WarningKind.COMPARER_FALLBACK, "ComparerFallback"),
        (WarningKind.READ_ONLY_PROPERTY_LOST, "ReadOnlyPropertyLost"),
        (WarningKind.INDEXED_PROPERTY_SKIPPED, "IndexedPropertySkipped"),
    ],
    ids=["fidelity", "comparer", "read-only", "indexer"],
)
def test_warning_kind_values(kind, value) -> None:
    assert kind.value == value
    assert WarningKind(value) is kind


def test_copy_warning_to_dict() -> None:
    warning = CopyWarning(
        kind=WarningKind.READ_ONLY_PROPERTY_LOST,
        message="Read-only property 'total' at path: root cannot be set",
        path="root",
        tags={"propertyName": "total"},
    )

    assert warning.to_dict() == {
        "kind": "ReadOnlyPropertyLost",
        "message": "Read-only property 'total' at path: root cannot be set",
        "path": "root",
        "tags": {"propertyName": "total"},
    }


def test_copy_warning_from_dict_restores_warning() -> None:
    """from_dict accepts the output of to_dict; tags are optional."""
    original = CopyWarning(WarningKind.COMPARER_FALLBACK, "fallback", "root.items", {"a": "b"})

    assert CopyWarning.from_dict(original.to_dict()) == original
    restored = CopyWarning.from_dict(
        {"kind": "TypeFidelityLoss", "message": "m", "path": "root"}
    )
    assert restored.tags == {}
