"""Centralized logging configuration for neo-persistent-config.

Provides consistent, configurable logging with environment-based control over
verbosity and log levels.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Standard logging (warnings and above)
    VERBOSE = "VERBOSE"  # Info level logging
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map verbosity mode to log level."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: LogLevel.WARNING.value,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return LogLevel.WARNING.value


FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


def resolve_log_level(log_level: Optional[str], verbosity: str) -> str:
    """Explicit LOG_LEVEL wins over LOG_VERBOSITY."""
    if log_level and log_level.upper() in LogLevel.__members__:
        return log_level.upper()
    return get_log_level_from_verbosity(verbosity)


class LoggingConfig:
    """Centralized logging configuration manager."""

    # Storage and cache adapters log every read/write on DEBUG
    DEFAULT_QUIET_MODULES = [
        "neo_persistent_config.storage",
        "neo_persistent_config.cache",
    ]

    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "httpx",
        "httpcore",
        "urllib3",
        "redis",
    ]

    SQL_MODULES = [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
    ]

    @staticmethod
    def _module_logger(level: str) -> Dict[str, Any]:
        return {"level": level, "handlers": ["console"], "propagate": False}

    @classmethod
    def build_config(
        cls,
        level: str = LogLevel.WARNING.value,
        log_format: str = LogFormat.SIMPLE.value,
        enable_sql_logging: bool = False
    ) -> Dict[str, Any]:
        """Build a ``dictConfig`` mapping.

        Args:
            level: Root log level
            log_format: One of ``simple``, ``detailed`` or ``json``
            enable_sql_logging: Keep SQLAlchemy engine logs at the root level

        Returns:
            Logging configuration dictionary
        """
        try:
            format_string = FORMAT_STRINGS[LogFormat(log_format.lower())]
        except ValueError:
            format_string = FORMAT_STRINGS[LogFormat.SIMPLE]

        loggers: Dict[str, Any] = {}
        quiet_level = level if level == LogLevel.DEBUG.value else LogLevel.WARNING.value
        for module in cls.DEFAULT_QUIET_MODULES:
            loggers[module] = cls._module_logger(quiet_level)
        for module in cls.ERROR_ONLY_MODULES:
            loggers[module] = cls._module_logger(LogLevel.ERROR.value)
        if not enable_sql_logging:
            for module in cls.SQL_MODULES:
                loggers[module] = cls._module_logger(LogLevel.WARNING.value)

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": format_string, "datefmt": "%Y-%m-%d %H:%M:%S"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": loggers,
        }

    @classmethod
    def configure(cls) -> None:
        """Configure logging based on environment variables."""
        level = resolve_log_level(os.getenv("LOG_LEVEL"), os.getenv("LOG_VERBOSITY", LogVerbosity.NORMAL.value))
        log_format = os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value)
        enable_sql_logging = os.getenv("ENABLE_SQL_LOGGING", "false").lower() == "true"

        logging.config.dictConfig(cls.build_config(level, log_format, enable_sql_logging))
        logging.getLogger(__name__).debug(f"Logging configured: level={level}, format={log_format}")

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger for the given module name."""
        return logging.getLogger(name)

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))

    @classmethod
    def silence_module(cls, module_name: str) -> None:
        """Silence all logging from a module."""
        cls.set_module_level(module_name, "CRITICAL")


def setup_logging() -> None:
    """Configure logging from environment variables.

    Call once at application startup; importing the package never touches
    logging configuration.
    """
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    return LoggingConfig.get_logger(name)
