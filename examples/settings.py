from dataclasses import dataclass, field

from graphcopy import sensitive_field


@dataclass
class ClientSettings:
    endpoint: str
    username: str
    password: str = sensitive_field(default="")
    log_requests: bool = False


@dataclass
class EncryptionSettings:
    is_encrypted: bool = False


@dataclass
class HubSettings:
    """Settings file layout: one client section plus encryption state."""

    client: ClientSettings
    encryption: EncryptionSettings = field(default_factory=EncryptionSettings)
