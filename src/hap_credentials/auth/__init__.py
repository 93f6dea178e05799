"""Accessory identity and pairing record management.

This module provides the credential store consumed by the accessory server,
plus a high-level manager that builds it from configuration.
"""

from .auth_info import AuthInfo
from .errors import CredentialDecodeError, CredentialStoreError, InitializationError
from .manager import PairingManager, create_pairing_manager
from .models import IdentityRecord, PairingRecord
from .store import AuthInfoStore

__all__ = [
    "AuthInfo",
    "AuthInfoStore",
    "CredentialDecodeError",
    "CredentialStoreError",
    "IdentityRecord",
    "InitializationError",
    "PairingManager",
    "PairingRecord",
    "create_pairing_manager",
]
