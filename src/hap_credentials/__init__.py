"""HAP credentials - persistent identity and pairing records for accessory servers."""

from .auth import AuthInfo, AuthInfoStore, CredentialDecodeError, InitializationError, PairingManager, create_pairing_manager
from .config import HapCredentialsConfig, get_config_manager, setup_logging
from .storage import InMemoryStorage, JsonFileStorage, KeyValueStorage, SQLiteStorage

__version__ = "1.0.0"

__all__ = [
    "AuthInfo",
    "AuthInfoStore",
    "CredentialDecodeError",
    "HapCredentialsConfig",
    "InMemoryStorage",
    "InitializationError",
    "JsonFileStorage",
    "KeyValueStorage",
    "PairingManager",
    "SQLiteStorage",
    "create_pairing_manager",
    "get_config_manager",
    "setup_logging",
]
