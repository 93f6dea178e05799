"""Authentication info interface consumed by the accessory server."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class AuthInfo(ABC):
    """Source of the accessory identity and of the paired clients' keys."""

    @abstractmethod
    def get_device_id(self) -> str:
        """MAC-like identifier advertised by the accessory."""
        ...

    @abstractmethod
    def get_pin(self) -> str:
        """Setup code shown to the user for first pairing."""
        ...

    @abstractmethod
    def get_private_key(self) -> bytes:
        """Raw long-term private key of the accessory."""
        ...

    @abstractmethod
    def get_salt(self) -> int:
        """SRP salt used during pair setup."""
        ...

    @abstractmethod
    def create_user(self, username: str, public_key: bytes) -> None:
        """Record a successfully paired client."""
        ...

    @abstractmethod
    def get_user_public_key(self, username: str) -> Optional[bytes]:
        """Public key of a paired client, or None if it is not paired."""
        ...

    @abstractmethod
    def remove_user(self, username: str) -> bool:
        """Forget a paired client. Returns whether a pairing record was removed."""
        ...

    def has_user(self) -> bool:
        """Whether any client is paired. Servers use this to decide if pairing is open."""
        return False
