"""Stock diagnostics sinks."""

from __future__ import annotations

import logging
import os
import warnings
from collections.abc import Mapping

from graphcopy.diagnostics.models import CopyWarning, WarningKind

logger = logging.getLogger("graphcopy")

_PACKAGE_PREFIX = os.path.dirname(os.path.dirname(__file__)) + os.sep


class CopyFidelityWarning(UserWarning):
    """Warning category issued by WarningsSink.

    Filter it like any other warning:
        warnings.simplefilter("error", CopyFidelityWarning)
    """

    def __init__(self, message: str, kind: WarningKind, tags: Mapping[str, str]) -> None:
        super().__init__(message)
        self.kind = kind
        self.tags = dict(tags)


class WarningsSink:
    """Issue each warning through the `warnings` module.

    Args:
        stacklevel: Passed to warnings.warn. Frames inside the graphcopy package
            are skipped, so the default attributes the warning to the code that
            called the copier.
    """

    def __init__(self, stacklevel: int = 2) -> None:
        self._stacklevel = stacklevel

    def add_warning(self, message: str, kind: WarningKind, tags: Mapping[str, str]) -> None:
        warnings.warn(
            CopyFidelityWarning(f"[{kind.value}] {message}", kind, tags),
            stacklevel=self._stacklevel,
            skip_file_prefixes=(_PACKAGE_PREFIX,),
        )


class LoggingSink:
    """Log each warning at WARNING level with its tags in `extra`.

    Args:
        log: Logger to use (default: the "graphcopy" logger).
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def add_warning(self, message: str, kind: WarningKind, tags: Mapping[str, str]) -> None:
        self._logger.warning(
            "%s: %s",
            kind.value,
            message,
            extra={"warning_type": kind.value, "warning_tags": dict(tags)},
        )


class CollectingSink:
    """Keep warnings in memory for later inspection."""

    def __init__(self) -> None:
        self.warnings: list[CopyWarning] = []

    def add_warning(self, message: str, kind: WarningKind, tags: Mapping[str, str]) -> None:
        self.warnings.append(
            CopyWarning(kind=kind, message=message, path=tags.get("path", ""), tags=dict(tags))
        )

    def by_kind(self, kind: WarningKind) -> list[CopyWarning]:
        """Get collected warnings of a single kind, in emission order."""
        return [w for w in self.warnings if w.kind is kind]

    def clear(self) -> None:
        self.warnings.clear()


class NullSink:
    """Discard all warnings."""

    def add_warning(self, message: str, kind: WarningKind, tags: Mapping[str, str]) -> None:
        return None
