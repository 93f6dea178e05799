"""Generators for the accessory's long-term identity material."""

from __future__ import annotations

import secrets
from typing import Protocol

from cryptography.hazmat.primitives.asymmetric import ed25519

SALT_BYTES = 16


class SecretGenerator(Protocol):
    """Protocol for providers of fresh identity material."""

    def generate_device_id(self) -> str:
        """Generate a new MAC-like device identifier."""
        ...

    def generate_salt(self) -> int:
        """Generate a new non-negative SRP salt."""
        ...

    def generate_private_key(self) -> bytes:
        """Generate a new raw long-term private key."""
        ...


class DefaultSecretGenerator:
    """Random device id, 128-bit salt and Ed25519 long-term key."""

    def generate_device_id(self) -> str:
        octets = secrets.token_bytes(6)
        return ":".join(f"{b:02X}" for b in octets)

    def generate_salt(self) -> int:
        return int.from_bytes(secrets.token_bytes(SALT_BYTES), "big")

    def generate_private_key(self) -> bytes:
        return ed25519.Ed25519PrivateKey.generate().private_bytes_raw()


def public_key_for(private_key: bytes) -> bytes:
    """Derive the raw Ed25519 public key for a raw private key.

    Raises:
        ValueError: If private_key is not a 32-byte Ed25519 seed
    """
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(private_key)
    return sk.public_key().public_bytes_raw()
