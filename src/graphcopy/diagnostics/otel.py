"""OpenTelemetry diagnostics sink.

Adds each copy warning as a "Warning" event on the current span, so warnings
show up next to the trace of the operation that triggered the copy.

Usage:
    from graphcopy.diagnostics.otel import SpanEventSink

    with tracer.start_as_current_span("save-settings"):
        deep_copy_and_apply(settings, encrypt, sink=SpanEventSink())
"""

from __future__ import annotations

from collections.abc import Mapping

try:
    from opentelemetry import trace
except ImportError as e:
    raise ImportError(
        "opentelemetry-api is required for SpanEventSink. "
        "Install with: pip install graphcopy[otel]"
    ) from e

from graphcopy.diagnostics.models import WarningKind

WARNING_EVENT_NAME = "Warning"
TAG_PREFIX = "warning."


class SpanEventSink:
    """Record warnings as events on the active OpenTelemetry span.

    Event attributes are `warning.type`, `warning.message` and one
    `warning.<tag>` per tag. Without an active recording span, events are
    dropped by the OpenTelemetry API.
    """

    def add_warning(self, message: str, kind: WarningKind, tags: Mapping[str, str]) -> None:
        attributes = {f"{TAG_PREFIX}{key}": value for key, value in tags.items()}
        attributes[f"{TAG_PREFIX}type"] = kind.value
        attributes[f"{TAG_PREFIX}message"] = message
        trace.get_current_span().add_event(WARNING_EVENT_NAME, attributes=attributes)
