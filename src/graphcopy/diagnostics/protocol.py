"""Protocol for diagnostics sinks.

The copy engine reports non-fatal conditions through this narrow interface
and never raises for them. Any logging or tracing backend can implement it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from graphcopy.diagnostics.models import WarningKind


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Receives warnings emitted while copying an object graph.

    Example implementations:
        - WarningsSink: Python warnings machinery (default)
        - LoggingSink: stdlib logging
        - CollectingSink: in-memory list (tests, strict callers)
        - SpanEventSink: OpenTelemetry span events

    Usage:
        sink = CollectingSink()
        copy = deep_copy_and_apply(settings, redact, sink=sink)
        if sink.warnings:
            ...

    Thread Safety:
        The engine calls the sink from the copying thread only. Sinks shared
        between concurrent copies must be thread-safe themselves.
    """

    def add_warning(self, message: str, kind: WarningKind, tags: Mapping[str, str]) -> None:
        """Record a warning.

        Args:
            message: Human-readable description.
            kind: Category of the warning.
            tags: Kind-specific details; always includes "path".
        """
        ...
