"""Configuration module for the HAP credential store."""

from .logger_config import setup_logging
from .settings import ConfigManager, HapCredentialsConfig, StorageConfig, get_config_manager, get_current_config

__all__ = ["HapCredentialsConfig", "StorageConfig", "ConfigManager", "get_config_manager", "get_current_config", "setup_logging"]
