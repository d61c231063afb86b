"""Exceptions raised by the deep copy engine.

Every failure is fatal: a copy either completes or raises, no partial graph
is ever returned. Non-fatal conditions are reported to a DiagnosticsSink
instead (see graphcopy.diagnostics).
"""

from __future__ import annotations


class DeepCopyError(Exception):
    """Base class for all errors raised while copying an object graph."""

    pass


class RecursionDepthExceededError(DeepCopyError, RecursionError):
    """Raised when traversal goes deeper than MAX_RECURSION_DEPTH.

    Signals either a reference cycle or a legitimately deep acyclic graph;
    the two are indistinguishable in the default mode.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class CycleDetectedError(RecursionDepthExceededError):
    """Raised in cycle-detection mode when a node revisits one of its ancestors."""

    pass


class TransformError(DeepCopyError):
    """Raised when the caller-supplied transform raises.

    The original exception is chained as ``__cause__``.

    Attributes:
        path: Location of the value being transformed.
        name: Property name, or None for collection elements.
        declared_type: Human-readable declared type of the value, if known.
    """

    def __init__(
        self, message: str, path: str, name: str | None = None, declared_type: str | None = None
    ) -> None:
        super().__init__(message)
        self.path = path
        self.name = name
        self.declared_type = declared_type


class UnsafeSetMutationError(DeepCopyError):
    """Raised when a transform replaces or mutates a non-immutable set element."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class NoUsableConstructorError(DeepCopyError, TypeError):
    """Raised when a composite type can be rebuilt by neither strategy."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class UnsupportedShapeError(DeepCopyError, TypeError):
    """Raised for shapes the engine refuses to copy.

    Multi-dimensional arrays, mappings keyed by non-immutable types and custom
    sequences that cannot be constructed without arguments.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class MissingTransformError(DeepCopyError, TypeError):
    """Raised when no callable transform is supplied."""

    pass
