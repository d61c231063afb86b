"""graphcopy: deep copy of object graphs with a per-value transform.

Usage:
    from dataclasses import dataclass
    from graphcopy import deep_copy_and_apply, sensitive_field

    @dataclass
    class Login:
        name: str
        password: str = sensitive_field(default="")

    def encrypt_secrets(prop, value):
        if prop is not None and prop.sensitive and isinstance(value, str):
            return cipher.encrypt(value)
        return value

    stored = deep_copy_and_apply(Login("bob", "secret"), encrypt_secrets)
    # Login(name="bob", password=cipher.encrypt("secret"))
"""

__version__ = "0.1.0"

# Engine
from graphcopy.copier import GraphCopier, deep_copy_and_apply

# Core primitives
from graphcopy.core import (
    MAX_RECURSION_DEPTH,
    Copy,
    CopyStrategy,
    PropertyMetadata,
    Sensitive,
    Transform,
    classify,
    is_known_immutable,
)

# Diagnostics
from graphcopy.diagnostics import (
    CollectingSink,
    CopyFidelityWarning,
    CopyWarning,
    DiagnosticsSink,
    LoggingSink,
    NullSink,
    WarningKind,
    WarningsSink,
)

# Errors
from graphcopy.errors import (
    CycleDetectedError,
    DeepCopyError,
    MissingTransformError,
    NoUsableConstructorError,
    RecursionDepthExceededError,
    TransformError,
    UnsafeSetMutationError,
    UnsupportedShapeError,
)

# Sensitive-field helpers
from graphcopy.sensitive import (
    apply_to_sensitive,
    decrypt_sensitive,
    encrypt_sensitive,
    is_sensitive,
    redact_sensitive,
    sensitive_field,
)

__all__ = [
    # Version
    "__version__",
    # Engine
    "deep_copy_and_apply",
    "GraphCopier",
    # Core
    "Copy",
    "Transform",
    "PropertyMetadata",
    "CopyStrategy",
    "MAX_RECURSION_DEPTH",
    "classify",
    "is_known_immutable",
    # Diagnostics
    "DiagnosticsSink",
    "CopyWarning",
    "WarningKind",
    "CopyFidelityWarning",
    "WarningsSink",
    "LoggingSink",
    "CollectingSink",
    "NullSink",
    # Errors
    "DeepCopyError",
    "RecursionDepthExceededError",
    "CycleDetectedError",
    "TransformError",
    "UnsafeSetMutationError",
    "NoUsableConstructorError",
    "UnsupportedShapeError",
    "MissingTransformError",
    # Sensitive
    "Sensitive",
    "sensitive_field",
    "is_sensitive",
    "apply_to_sensitive",
    "redact_sensitive",
    "encrypt_sensitive",
    "decrypt_sensitive",
]
