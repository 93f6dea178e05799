"""JSON file backed key-value storage.

This module handles:
- Loading the whole key-value map from a JSON file on startup
- Writing the map back atomically after every mutation
- Keeping the file readable by the owner only, since it holds key material
"""

from __future__ import annotations

import json
import os
import stat
import threading
from pathlib import Path
from typing import Dict, Optional, Set

from loguru import logger

from .base import KeyValueStorage, StorageError


class JsonFileStorage(KeyValueStorage):
    """Key-value storage persisted to a single JSON object on disk."""

    def __init__(self, path: Path):
        """Initialize JSON storage.

        Args:
            path: Location of the JSON file. Created on first write if missing.

        Raises:
            StorageError: If an existing file is not a JSON object of strings
        """
        self.path = Path(path)
        self._lock = threading.RLock()

        # Ensure storage directory exists with proper permissions
        self._ensure_dir()

        self._data: Dict[str, str] = self._load()
        logger.debug(f"Opened JSON storage at {self.path} with {len(self._data)} entries")

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"JSON storage only accepts string values, got {type(value).__name__}")

        with self._lock:
            updated = dict(self._data)
            updated[key] = value
            self._flush(updated)
            self._data = updated

    def remove(self, key: str) -> Optional[str]:
        with self._lock:
            if key not in self._data:
                return None

            updated = dict(self._data)
            previous = updated.pop(key)
            self._flush(updated)
            self._data = updated
            return previous

    def get_keys(self) -> Set[str]:
        with self._lock:
            return set(self._data)

    def _load(self) -> Dict[str, str]:
        """Read the JSON file, returning an empty map if it does not exist yet."""
        if not self.path.exists():
            logger.debug(f"No storage file found at {self.path}")
            return {}

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise StorageError(f"Storage file {self.path} is not valid JSON: {e}") from e

        if not isinstance(data, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in data.items()):
            raise StorageError(f"Storage file {self.path} must contain a JSON object of strings")

        return data

    def _flush(self, data: Dict[str, str]) -> None:
        """Atomically write data to disk. The file is unchanged if this raises."""
        # Write to temporary file first
        temp_file = self.path.with_suffix(self.path.suffix + ".tmp")

        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)

            # Owner read/write only
            os.chmod(temp_file, stat.S_IRUSR | stat.S_IWUSR)

            temp_file.replace(self.path)
        finally:
            temp_file.unlink(missing_ok=True)

    def _ensure_dir(self) -> None:
        """Ensure the storage directory exists with owner-only permissions."""
        directory = self.path.parent
        if directory.exists():
            return

        try:
            directory.mkdir(mode=0o700, parents=True, exist_ok=True)
            os.chmod(directory, stat.S_IRWXU)
        except OSError as e:
            logger.error(f"Failed to create storage directory {directory}: {e}")
            raise
