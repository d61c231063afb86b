"""Diagnostics for non-fatal conditions raised during a copy.

The engine never raises for fidelity problems; it reports them to a
DiagnosticsSink. Callers that need strict fidelity inspect the sink.

Usage:
    from graphcopy.diagnostics import CollectingSink, WarningKind

    sink = CollectingSink()
    deep_copy_and_apply(model, transform, sink=sink)
    lost = sink.by_kind(WarningKind.READ_ONLY_PROPERTY_LOST)

    # OpenTelemetry span events (requires graphcopy[otel]):
    # from graphcopy.diagnostics.otel import SpanEventSink
"""

from graphcopy.diagnostics.models import CopyWarning, WarningKind
from graphcopy.diagnostics.protocol import DiagnosticsSink
from graphcopy.diagnostics.sinks import (
    CollectingSink,
    CopyFidelityWarning,
    LoggingSink,
    NullSink,
    WarningsSink,
)

__all__ = [
    "DiagnosticsSink",
    "CopyWarning",
    "WarningKind",
    "CopyFidelityWarning",
    "CollectingSink",
    "LoggingSink",
    "NullSink",
    "WarningsSink",
]
