"""Sensitive-field markers and transform builders.

The copy engine does not decide what to transform. These helpers build the
common policy "apply a primitive to values of properties marked sensitive";
the primitive itself (encryption, hashing, ...) is supplied by the caller.

Usage:
    @dataclass
    class Credentials:
        username: str
        password: str = sensitive_field(default="")
        token: Annotated[str | None, Sensitive()] = None

    stored = deep_copy_and_apply(creds, encrypt_sensitive(cipher.encrypt))
    logged = deep_copy_and_apply(creds, redact_sensitive())
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

from graphcopy.core.shape import PropertyMetadata, Sensitive
from graphcopy.core.types import Transform

REDACTED = "***"


def sensitive_field(**kwargs: Any) -> Any:
    """dataclasses.field() with `metadata={"sensitive": True}` merged in."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata["sensitive"] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def is_sensitive(prop: PropertyMetadata | None) -> bool:
    """Check whether a transform's property argument is marked sensitive."""
    return prop is not None and prop.sensitive


def apply_to_sensitive(
    func: Callable[[Any], Any], types: tuple[type, ...] = (str,)
) -> Transform:
    """Build a transform applying func to sensitive values of the given types.

    Elements of a sensitive collection receive the collection's property, so
    `tokens: Annotated[list[str], Sensitive()]` has each string transformed
    while the list itself, not being a str, passes through.

    Args:
        func: Primitive applied to matching values.
        types: Only values of these types are passed to func.

    Returns:
        Transform suitable for deep_copy_and_apply.
    """

    def transform(prop: PropertyMetadata | None, value: Any) -> Any:
        if value is not None and is_sensitive(prop) and isinstance(value, types):
            return func(value)
        return value

    return transform


def redact_sensitive(placeholder: str = REDACTED) -> Transform:
    """Build a transform replacing sensitive strings with placeholder."""
    return apply_to_sensitive(lambda _value: placeholder)


def encrypt_sensitive(encrypt: Callable[[str], str]) -> Transform:
    """Build a transform encrypting sensitive strings, e.g. before persisting settings."""
    return apply_to_sensitive(encrypt)


def decrypt_sensitive(decrypt: Callable[[str], str]) -> Transform:
    """Build a transform decrypting sensitive strings, e.g. after loading settings."""
    return apply_to_sensitive(decrypt)


__all__ = [
    "REDACTED",
    "Sensitive",
    "apply_to_sensitive",
    "decrypt_sensitive",
    "encrypt_sensitive",
    "is_sensitive",
    "redact_sensitive",
    "sensitive_field",
]
