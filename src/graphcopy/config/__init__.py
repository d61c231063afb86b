"""Configuration module using Pydantic Settings.

Provides typed configuration for the copy engine with environment variable support.

Usage:
    from graphcopy.config import CopySettings

    settings = CopySettings(detect_cycles=True)
    copy = settings.copier(transform).copy(source)
"""

from graphcopy.config.settings import CopySettings

__all__ = [
    "CopySettings",
]
