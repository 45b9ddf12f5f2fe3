"""
Unit tests for settings and logging configuration.
"""

import logging
from datetime import timedelta

import pytest

from neo_persistent_config.config.logging_config import (
    FORMAT_STRINGS,
    LogFormat,
    LoggingConfig,
    get_log_level_from_verbosity,
    resolve_log_level,
    setup_logging,
)
from neo_persistent_config.config.settings import PersistentConfigSettings, StorageDriver, get_settings


class TestPersistentConfigSettings:
    """Test environment driven settings."""

    def test_defaults(self):
        settings = PersistentConfigSettings(_env_file=None)

        assert settings.cache_key == "neo_persistent_config.persistent_repository"
        assert settings.cache_ttl == 86400
        assert settings.cache_ttl_delta == timedelta(days=1)
        assert settings.gc_enabled is True
        assert settings.storage_driver == StorageDriver.DATABASE
        assert not settings.is_cache_enabled
        assert not settings.is_encryption_enabled

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PERSISTENT_CONFIG_STORAGE_DRIVER", "file")
        monkeypatch.setenv("PERSISTENT_CONFIG_CACHE_TTL", "60")
        monkeypatch.setenv("PERSISTENT_CONFIG_GC_ENABLED", "false")
        monkeypatch.setenv("PERSISTENT_CONFIG_REDIS_URL", "redis://localhost:6379/1")

        settings = PersistentConfigSettings(_env_file=None)

        assert settings.storage_driver == StorageDriver.FILE
        assert settings.cache_ttl == 60
        assert settings.gc_enabled is False
        assert settings.is_cache_enabled

    def test_encryption_key_aliases(self, monkeypatch):
        monkeypatch.setenv("APP_ENCRYPTION_KEY", "app-key")

        settings = PersistentConfigSettings(_env_file=None)

        assert settings.is_encryption_enabled
        assert settings.encryption_key.get_secret_value() == "app-key"
        assert "app-key" not in repr(settings)

    def test_negative_ttl_rejected(self):
        with pytest.raises(ValueError):
            PersistentConfigSettings(_env_file=None, cache_ttl=-1)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLoggingConfig:
    """Test logging setup from environment variables."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        managed = LoggingConfig.DEFAULT_QUIET_MODULES + LoggingConfig.ERROR_ONLY_MODULES + LoggingConfig.SQL_MODULES
        yield
        root.handlers, root.level = handlers, level
        for name in managed:
            logger = logging.getLogger(name)
            logger.handlers = []
            logger.setLevel(logging.NOTSET)
            logger.propagate = True

    @pytest.mark.parametrize("verbosity,level", [
        ("quiet", "ERROR"),
        ("NORMAL", "WARNING"),
        ("verbose", "INFO"),
        ("debug", "DEBUG"),
        ("unknown", "WARNING"),
    ])
    def test_verbosity_levels(self, verbosity, level):
        assert get_log_level_from_verbosity(verbosity) == level

    def test_resolve_log_level(self):
        assert resolve_log_level("debug", "QUIET") == "DEBUG"
        assert resolve_log_level(None, "VERBOSE") == "INFO"
        assert resolve_log_level("LOUD", "QUIET") == "ERROR"

    def test_build_config(self):
        """Test the dictConfig mapping without applying it."""
        config = LoggingConfig.build_config("INFO", "json")

        assert config["root"]["level"] == "INFO"
        assert config["formatters"]["default"]["format"] == FORMAT_STRINGS[LogFormat.JSON]
        assert config["loggers"]["neo_persistent_config.storage"]["level"] == "WARNING"
        assert config["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"

    def test_build_config_debug_and_sql(self):
        config = LoggingConfig.build_config("DEBUG", "unknown", enable_sql_logging=True)

        assert config["loggers"]["neo_persistent_config.storage"]["level"] == "DEBUG"
        assert "sqlalchemy.engine" not in config["loggers"]
        assert config["formatters"]["default"]["format"] == FORMAT_STRINGS[LogFormat.SIMPLE]

    def test_log_level_overrides_verbosity(self, monkeypatch):
        monkeypatch.setenv("LOG_VERBOSITY", "QUIET")
        monkeypatch.setenv("LOG_LEVEL", "info")

        setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_quiet_modules(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.delenv("ENABLE_SQL_LOGGING", raising=False)

        LoggingConfig.configure()

        assert logging.getLogger("neo_persistent_config.storage").level == logging.WARNING
        assert logging.getLogger("redis").level == logging.ERROR
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_silence_module(self):
        LoggingConfig.silence_module("redis")

        assert logging.getLogger("redis").level == logging.CRITICAL
