"""Errors raised by the credential store."""

from __future__ import annotations


class CredentialStoreError(Exception):
    """Base class for credential store errors."""


class InitializationError(CredentialStoreError):
    """Stored identity material is unusable, so the store cannot be built."""


class CredentialDecodeError(CredentialStoreError):
    """A stored byte value could not be decoded."""

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(f"Stored value for {field} is corrupt: {reason}")
