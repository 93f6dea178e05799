"""Storage backend selection from configuration."""

from __future__ import annotations

from loguru import logger

from ..config.settings import SUPPORTED_BACKENDS, StorageConfig
from .base import KeyValueStorage
from .json_storage import JsonFileStorage
from .memory_storage import InMemoryStorage
from .sqlite_storage import SQLiteStorage


def create_storage(config: StorageConfig) -> KeyValueStorage:
    """Create the storage backend named in config.

    Args:
        config: Storage configuration

    Returns:
        Opened storage backend

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = config.backend.lower()

    if backend == "memory":
        logger.warning("Using in-memory storage - pairings will be lost on restart")
        return InMemoryStorage()

    if backend == "json":
        return JsonFileStorage(config.resolved_path)

    if backend == "sqlite":
        return SQLiteStorage(config.resolved_path)

    raise ValueError(f"Unknown storage backend '{config.backend}', expected one of {', '.join(SUPPORTED_BACKENDS)}")
