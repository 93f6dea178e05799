"""Configuration management for the HAP credential store.

This module provides dataclass based configuration that can be overridden
from environment variables, plus a small manager holding the active config.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger

SUPPORTED_BACKENDS = ("memory", "json", "sqlite")

DEFAULT_PIN = "031-45-154"
DEFAULT_STORAGE_DIR = Path.home() / ".hap-credentials"

_PIN_PATTERN = re.compile(r"^\d{3}-\d{2}-\d{3}$")

# Setup codes the HomeKit pairing flow refuses
_TRIVIAL_PINS = {f"{d * 3}-{d * 2}-{d * 3}" for d in "0123456789"} | {"123-45-678", "876-54-321"}


@dataclass
class StorageConfig:
    """Configuration for the key-value storage backend."""

    backend: str = "json"
    path: Optional[Path] = None  # None = default file for the backend

    @property
    def resolved_path(self) -> Path:
        """Path of the storage file, falling back to the backend default."""
        if self.path is not None:
            return Path(self.path)

        if self.backend == "sqlite":
            return DEFAULT_STORAGE_DIR / "auth.db"
        return DEFAULT_STORAGE_DIR / "auth.json"


@dataclass
class HapCredentialsConfig:
    """Complete credential store configuration."""

    # Setup code shown to the user during first pairing
    pin: str = DEFAULT_PIN

    storage: StorageConfig = field(default_factory=StorageConfig)

    # Logging
    log_level: str = "INFO"
    log_to_console: bool = True
    log_file: Optional[Path] = None
    log_rotation: str = "10 MB"
    log_retention: str = "7 days"

    def __post_init__(self):
        """Apply environment variable overrides."""
        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply configuration overrides from environment variables."""
        if pin := os.getenv("HAP_PIN"):
            self.pin = pin

        if backend := os.getenv("HAP_STORAGE_BACKEND"):
            self.storage.backend = backend.lower()

        if storage_path := os.getenv("HAP_STORAGE_PATH"):
            self.storage.path = Path(storage_path)

        if log_level := os.getenv("HAP_LOG_LEVEL"):
            self.log_level = log_level.upper()

        if log_file := os.getenv("HAP_LOG_FILE"):
            self.log_file = Path(log_file)

        if log_to_console := os.getenv("HAP_LOG_TO_CONSOLE"):
            if log_to_console.lower() in ("0", "false", "no", "off"):
                self.log_to_console = False
            elif log_to_console.lower() in ("1", "true", "yes", "on"):
                self.log_to_console = True
            else:
                logger.warning(f"Invalid HAP_LOG_TO_CONSOLE value: {log_to_console}")

    def validate(self) -> tuple[bool, list[str]]:
        """Validate the configuration.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors = []

        if not _PIN_PATTERN.match(self.pin):
            errors.append("PIN must have the format XXX-XX-XXX")
        elif self.pin in _TRIVIAL_PINS:
            errors.append(f"PIN {self.pin} is not allowed")

        if self.storage.backend not in SUPPORTED_BACKENDS:
            errors.append(f"Unknown storage backend: {self.storage.backend}")

        return len(errors) == 0, errors


class ConfigManager:
    """Manages credential store configuration."""

    def __init__(self):
        self._config: Optional[HapCredentialsConfig] = None

    def load_config(
        self,
        pin: Optional[str] = None,
        backend: Optional[str] = None,
        path: Optional[Path] = None,
    ) -> HapCredentialsConfig:
        """Load configuration with optional overrides.

        Args:
            pin: Setup code override
            backend: Storage backend override
            path: Storage path override

        Returns:
            Configured HapCredentialsConfig instance
        """
        config = HapCredentialsConfig()

        # Explicit arguments win over environment variables
        if pin:
            config.pin = pin

        if backend:
            config.storage.backend = backend.lower()

        if path:
            config.storage.path = Path(path)

        self._config = config
        return config

    def get_config(self) -> Optional[HapCredentialsConfig]:
        """Get current configuration."""
        return self._config

    def validate_config(self) -> tuple[bool, list[str]]:
        """Validate current configuration.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        if not self._config:
            return False, ["No configuration loaded"]

        return self._config.validate()


# Global configuration manager instance
_config_manager = ConfigManager()


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager."""
    return _config_manager


def get_current_config() -> Optional[HapCredentialsConfig]:
    """Get the current configuration."""
    return _config_manager.get_config()
