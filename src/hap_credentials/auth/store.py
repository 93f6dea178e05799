"""Persistent accessory identity and pairing records.

This module handles:
- Bootstrapping the accessory identity (device id, salt, private key),
  generating and persisting whichever fields are missing
- Storing, looking up and removing paired clients' public keys
- Telling the server whether any client is paired yet

Everything is kept as strings in a generic key-value storage. Byte values
are stored as base64 and the salt as a decimal string.
"""

from __future__ import annotations

import base64
import binascii
from typing import List, Optional

from loguru import logger

from ..crypto.generators import DefaultSecretGenerator, SecretGenerator
from ..storage.base import KeyValueStorage
from .auth_info import AuthInfo
from .errors import CredentialDecodeError, InitializationError
from .models import IdentityRecord, PairingRecord

DEVICE_ID_KEY = "device_id"
SALT_KEY = "salt"
PRIVATE_KEY_KEY = "private_key"

# Pairing records live under this prefix so they never collide with identity keys
USER_KEY_PREFIX = "user_"


def _encode_bytes(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _decode_bytes(value: str, field: str) -> bytes:
    try:
        return base64.b64decode(value.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise CredentialDecodeError(field, str(e)) from e


def _parse_salt(value: str) -> int:
    """Parse a stored salt, which must be a non-negative decimal integer."""
    if not value.isascii() or not value.isdigit():
        raise InitializationError(f"Stored salt is not a non-negative integer: {value!r}")
    return int(value)


def user_key(username: str) -> str:
    """Storage key of the pairing record for username."""
    return USER_KEY_PREFIX + username


def is_user_key(key: str) -> bool:
    return key.startswith(USER_KEY_PREFIX)


class AuthInfoStore(AuthInfo):
    """Credential store backed by a key-value storage.

    The storage is shared, not copied: every pairing operation goes straight
    to it. Only the identity fields and the PIN are cached in memory.
    """

    def __init__(self, storage: KeyValueStorage, pin: str, generator: Optional[SecretGenerator] = None):
        """Initialize the store, generating any missing identity material.

        Args:
            storage: Key-value storage holding identity and pairing records
            pin: Setup code for first pairing, never persisted
            generator: Source of fresh identity material (defaults to DefaultSecretGenerator)

        Raises:
            InitializationError: If the stored salt is malformed
        """
        self.storage = storage
        self._pin = pin
        self._generator = generator if generator is not None else DefaultSecretGenerator()

        self._device_id: str
        self._salt: int
        self._private_key_encoded: str

        self._initialize_storage()

    def _initialize_storage(self) -> None:
        """Load identity fields from storage, creating any that are missing."""
        device_id = self.storage.get(DEVICE_ID_KEY)
        stored_salt = self.storage.get(SALT_KEY)
        private_key = self.storage.get(PRIVATE_KEY_KEY)

        # Validate before writing anything so a failed start leaves storage untouched
        salt = _parse_salt(stored_salt) if stored_salt is not None else None

        generated = {}

        if device_id is None:
            logger.warning(
                f"Could not find existing device id in {type(self.storage).__name__}. "
                "Generating a new one. Previously paired clients will have to pair again."
            )
            device_id = self._generator.generate_device_id()
            generated[DEVICE_ID_KEY] = device_id

        if salt is None:
            logger.info("No salt found in storage, generating a new one")
            salt = self._generator.generate_salt()
            if salt < 0:
                raise InitializationError(f"Generated salt must be non-negative, got {salt}")
            generated[SALT_KEY] = str(salt)

        if private_key is None:
            logger.info("No private key found in storage, generating a new one")
            private_key = _encode_bytes(self._generator.generate_private_key())
            generated[PRIVATE_KEY_KEY] = private_key

        # Persist only once every missing field has been generated and checked
        for key, value in generated.items():
            self.storage.put(key, value)

        self._device_id = device_id
        self._salt = salt
        self._private_key_encoded = private_key

        logger.debug(f"Loaded accessory identity {device_id}")

    def get_device_id(self) -> str:
        return self._device_id

    def get_pin(self) -> str:
        return self._pin

    def get_private_key(self) -> bytes:
        """Raw private key.

        Raises:
            CredentialDecodeError: If the stored key is not valid base64
        """
        return _decode_bytes(self._private_key_encoded, PRIVATE_KEY_KEY)

    def get_salt(self) -> int:
        return self._salt

    @property
    def identity(self) -> IdentityRecord:
        """Snapshot of the accessory identity."""
        return IdentityRecord(device_id=self._device_id, salt=self._salt, private_key=self.get_private_key())

    def create_user(self, username: str, public_key: bytes) -> None:
        """Store the public key of a paired client, replacing any previous key."""
        self.storage.put(user_key(username), _encode_bytes(public_key))
        logger.info(f"Stored pairing for client {username}")

    def get_user_public_key(self, username: str) -> Optional[bytes]:
        """Look up a paired client's public key.

        Returns:
            The raw public key, or None if the client is not paired

        Raises:
            CredentialDecodeError: If the stored key is not valid base64
        """
        encoded = self.storage.get(user_key(username))
        if encoded is None:
            return None
        return _decode_bytes(encoded, user_key(username))

    def remove_user(self, username: str) -> bool:
        """Forget a paired client. Removing an unknown client does nothing.

        Returns:
            True if a pairing record was removed, False if there was none
        """
        if self.storage.remove(user_key(username)) is None:
            return False

        logger.info(f"Removed pairing for client {username}")
        return True

    def has_user(self) -> bool:
        return any(is_user_key(key) for key in self.storage.get_keys())

    def list_users(self) -> List[PairingRecord]:
        """Snapshot of all pairing records, sorted by username."""
        records = []
        for key in sorted(self.storage.get_keys()):
            if not is_user_key(key):
                continue

            encoded = self.storage.get(key)
            # Removed concurrently since the key snapshot was taken
            if encoded is None:
                continue

            records.append(PairingRecord(username=key[len(USER_KEY_PREFIX) :], public_key=_decode_bytes(encoded, key)))
        return records

    def clear(self) -> None:
        """Remove every pairing record, keeping the accessory identity."""
        # Copy the keys first, the storage is mutated while iterating
        keys = list(self.storage.get_keys())

        removed = 0
        for key in keys:
            if is_user_key(key):
                self.storage.remove(key)
                removed += 1

        logger.info(f"Cleared {removed} pairing record(s)")
