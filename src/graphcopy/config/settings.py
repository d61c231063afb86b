"""Configuration settings using Pydantic Settings.

Provides typed configuration for the copy engine with environment variable support.

Usage:
    from graphcopy.config import CopySettings

    # Load from environment variables (GRAPHCOPY_*)
    settings = CopySettings()
    copier = settings.copier(transform)

    # Or override with explicit values
    settings = CopySettings(detect_cycles=True, diagnostics="collect")
"""

from __future__ import annotations

from typing import Literal

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install graphcopy[config]"
    ) from e

from graphcopy.copier import GraphCopier
from graphcopy.core.types import Transform
from graphcopy.diagnostics import (
    CollectingSink,
    DiagnosticsSink,
    LoggingSink,
    NullSink,
    WarningsSink,
)

DiagnosticsBackend = Literal["warnings", "logging", "collect", "none", "otel"]


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the deep copy engine.

    Attributes:
        check_set_mutations: Reject transforms that replace or mutate
            non-immutable set elements. Disable only for provably pure transforms.
        detect_cycles: Raise CycleDetectedError on reference cycles instead of
            relying on the recursion depth bound alone.
        diagnostics: Sink receiving non-fatal warnings.

    Environment Variables:
        GRAPHCOPY_CHECK_SET_MUTATIONS
        GRAPHCOPY_DETECT_CYCLES
        GRAPHCOPY_DIAGNOSTICS
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPHCOPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    check_set_mutations: bool = True
    detect_cycles: bool = False
    diagnostics: DiagnosticsBackend = "warnings"

    def create_sink(self) -> DiagnosticsSink:
        """Instantiate the configured diagnostics sink.

        Raises:
            ImportError: For "otel" when opentelemetry-api is not installed.
        """
        if self.diagnostics == "otel":
            from graphcopy.diagnostics.otel import SpanEventSink

            return SpanEventSink()
        sinks: dict[str, type[DiagnosticsSink]] = {
            "warnings": WarningsSink,
            "logging": LoggingSink,
            "collect": CollectingSink,
            "none": NullSink,
        }
        return sinks[self.diagnostics]()

    def copier(self, transform: Transform, sink: DiagnosticsSink | None = None) -> GraphCopier:
        """Build a GraphCopier from these settings.

        Args:
            transform: Transform applied to every referenced value.
            sink: Overrides the configured diagnostics sink.
        """
        return GraphCopier(
            transform,
            sink if sink is not None else self.create_sink(),
            check_set_mutations=self.check_set_mutations,
            detect_cycles=self.detect_cycles,
        )
