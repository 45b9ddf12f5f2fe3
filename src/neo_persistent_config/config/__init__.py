"""Settings and logging configuration for neo-persistent-config."""

from .settings import PersistentConfigSettings, StorageDriver, get_settings
from .logging_config import LoggingConfig, setup_logging, get_logger

__all__ = [
    "PersistentConfigSettings",
    "StorageDriver",
    "get_settings",
    "LoggingConfig",
    "setup_logging",
    "get_logger",
]
