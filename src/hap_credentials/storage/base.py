"""Key-value storage interface used by the credential store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Set


class StorageError(Exception):
    """Raised when a storage backend cannot read its persisted contents."""


class KeyValueStorage(ABC):
    """Flat string -> string storage with read-your-writes consistency.

    Keys are opaque strings. Implementations must return a fresh set from
    get_keys() so callers can hold on to it while mutating the storage.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        ...

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    @abstractmethod
    def remove(self, key: str) -> Optional[str]:
        """Remove key and return its previous value, or None if it was absent."""
        ...

    @abstractmethod
    def get_keys(self) -> Set[str]:
        """Return a snapshot of all keys currently stored."""
        ...

    def contains_key(self, key: str) -> bool:
        return self.get(key) is not None

    def close(self) -> None:
        """Release backend resources. Override in subclasses if needed."""
        pass

    def __enter__(self) -> "KeyValueStorage":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
