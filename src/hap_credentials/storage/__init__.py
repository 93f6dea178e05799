"""Key-value storage backends for the credential store."""

from .base import KeyValueStorage, StorageError
from .factory import create_storage
from .json_storage import JsonFileStorage
from .memory_storage import InMemoryStorage
from .sqlite_storage import SQLiteStorage

__all__ = ["KeyValueStorage", "StorageError", "InMemoryStorage", "JsonFileStorage", "SQLiteStorage", "create_storage"]
