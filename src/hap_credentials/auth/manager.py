"""High-level pairing management interface.

Wires configuration, storage backend and credential store together for
accessory servers and administrative tooling.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger

from ..config.settings import HapCredentialsConfig
from ..crypto.generators import SecretGenerator
from ..storage.base import KeyValueStorage
from ..storage.factory import create_storage
from .models import IdentityRecord, PairingRecord
from .store import AuthInfoStore, is_user_key


class PairingManager:
    """High-level pairing management interface."""

    def __init__(
        self,
        config: Optional[HapCredentialsConfig] = None,
        storage: Optional[KeyValueStorage] = None,
        generator: Optional[SecretGenerator] = None,
    ):
        """Initialize pairing manager.

        Args:
            config: Credential store configuration (defaults from environment)
            storage: Storage backend to use instead of the configured one
            generator: Source of fresh identity material

        Raises:
            ValueError: If the configured storage backend is unknown
            InitializationError: If the stored identity is unusable
        """
        self.config = config if config is not None else HapCredentialsConfig()

        is_valid, errors = self.config.validate()
        if not is_valid:
            for error in errors:
                logger.warning(f"Configuration problem: {error}")

        self._owns_storage = storage is None
        self.storage = storage if storage is not None else create_storage(self.config.storage)
        self.store = AuthInfoStore(self.storage, self.config.pin, generator=generator)

    def is_paired(self) -> bool:
        """Check if at least one client is paired."""
        return self.store.has_user()

    def pair(self, username: str, public_key: bytes) -> None:
        """Record a paired client."""
        self.store.create_user(username, public_key)

    def unpair(self, username: str) -> bool:
        """Remove a paired client.

        Returns:
            True if the client was paired, False otherwise
        """
        return self.store.remove_user(username)

    def reset_pairings(self) -> int:
        """Remove all paired clients, keeping the accessory identity.

        Returns:
            Number of pairings that existed before the reset
        """
        count = sum(1 for key in self.storage.get_keys() if is_user_key(key))
        self.store.clear()
        return count

    def list_pairings(self) -> List[PairingRecord]:
        """Get all paired clients."""
        return self.store.list_users()

    def get_identity(self) -> IdentityRecord:
        """Get the accessory identity."""
        return self.store.identity

    def close(self) -> None:
        """Close the storage backend if this manager opened it."""
        if self._owns_storage:
            self.storage.close()

    def __enter__(self) -> "PairingManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def create_pairing_manager(
    config: Optional[HapCredentialsConfig] = None,
    storage: Optional[KeyValueStorage] = None,
    generator: Optional[SecretGenerator] = None,
) -> PairingManager:
    """Create a pairing manager with custom configuration.

    Args:
        config: Credential store configuration (defaults from environment)
        storage: Storage backend to use instead of the configured one
        generator: Source of fresh identity material

    Returns:
        Configured pairing manager instance
    """
    return PairingManager(config=config, storage=storage, generator=generator)
