"""Encrypt or decrypt the sensitive fields of a JSON settings file.

Usage:
    GRAPHCOPY_DIAGNOSTICS=logging python -m examples.encrypt_settings encrypt settings.json

The cipher below is a reversible demo encoding keyed by SETTINGS_PASSPHRASE;
replace it with a real cipher before protecting anything that matters.
"""

import base64
import hashlib
import json
import os
import sys
from dataclasses import asdict, replace
from itertools import cycle

from graphcopy import decrypt_sensitive, encrypt_sensitive, redact_sensitive
from graphcopy.config import CopySettings

from .settings import ClientSettings, EncryptionSettings, HubSettings


def _keystream(passphrase: str) -> bytes:
    return hashlib.sha256(passphrase.encode()).digest()


def demo_encrypt(passphrase: str):
    key = _keystream(passphrase)

    def encrypt(text: str) -> str:
        data = bytes(b ^ k for b, k in zip(text.encode(), cycle(key)))
        return base64.b64encode(data).decode()

    return encrypt


def demo_decrypt(passphrase: str):
    key = _keystream(passphrase)

    def decrypt(text: str) -> str:
        data = base64.b64decode(text)
        return bytes(b ^ k for b, k in zip(data, cycle(key))).decode()

    return decrypt


def load(path: str) -> HubSettings:
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    return HubSettings(
        client=ClientSettings(**raw["client"]),
        encryption=EncryptionSettings(**raw.get("encryption", {})),
    )


def main(argv: list[str]) -> int:
    if len(argv) != 2 or argv[0] not in ("encrypt", "decrypt"):
        print("Usage: encrypt_settings <encrypt|decrypt> <settings.json>")
        return 1
    operation, path = argv
    passphrase = os.environ.get("SETTINGS_PASSPHRASE", "")
    if len(passphrase) < 12:
        print("Error: SETTINGS_PASSPHRASE must be at least 12 characters long", file=sys.stderr)
        return 1

    current = load(path)
    if current.encryption.is_encrypted == (operation == "encrypt"):
        print(f"Error: settings are already {operation}ed", file=sys.stderr)
        return 1

    config = CopySettings()
    if operation == "encrypt":
        transform = encrypt_sensitive(demo_encrypt(passphrase))
    else:
        transform = decrypt_sensitive(demo_decrypt(passphrase))
    updated = config.copier(transform).copy(current)
    updated = replace(updated, encryption=EncryptionSettings(is_encrypted=operation == "encrypt"))

    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(updated), f, indent=2)

    safe = config.copier(redact_sensitive()).copy(updated)
    print(f"Wrote {path}: {asdict(safe)}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
