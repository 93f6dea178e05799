"""Logger configuration for the credential store."""

import sys
from typing import Optional

from loguru import logger

from .settings import HapCredentialsConfig


def setup_logging(config: Optional[HapCredentialsConfig] = None) -> None:
    """Configure loguru logger for console and optional file output.

    Sets up:
    - Console output with colored output
    - File output with rotation and retention when a log file is configured
    - Log level from settings
    """
    if config is None:
        config = HapCredentialsConfig()

    # Remove default loguru handler
    logger.remove()

    if config.log_to_console:
        logger.add(
            sink=sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
            level=config.log_level,
            colorize=True,
        )

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            sink=str(config.log_file),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=config.log_level,
            rotation=config.log_rotation,
            retention=config.log_retention,
            compression="gz",
            enqueue=True,  # Thread-safe logging
        )

        logger.info(f"File logging enabled: {config.log_file}")
        logger.debug(f"Log level: {config.log_level}")
