"""In-memory key-value storage, mainly for tests and ephemeral servers."""

from __future__ import annotations

import threading
from typing import Dict, Optional, Set

from .base import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Dict-backed storage. Contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._lock = threading.RLock()
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.pop(key, None)

    def get_keys(self) -> Set[str]:
        with self._lock:
            return set(self._data)
