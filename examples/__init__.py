"""Example settings models for graphcopy.

This package demonstrates library usage but is not part of the core API.
"""

from .settings import ClientSettings, EncryptionSettings, HubSettings

__all__ = [
    "ClientSettings",
    "EncryptionSettings",
    "HubSettings",
]
