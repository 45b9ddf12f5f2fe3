"""
Settings for the persistent configuration overlay.

Environment-driven configuration of storage, cache and encryption for the
persistent repository, following the platform's pydantic-settings pattern.
"""
from datetime import timedelta
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageDriver(str, Enum):
    """Available persistent storage backends."""
    ARRAY = "array"
    FILE = "file"
    DATABASE = "database"


class PersistentConfigSettings(BaseSettings):
    """
    Settings for persistent configuration.

    Every field can be overridden through environment variables prefixed with
    ``PERSISTENT_CONFIG_`` or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PERSISTENT_CONFIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
        populate_by_name=True
    )

    # Repository behaviour
    cache_key: str = Field(default="neo_persistent_config.persistent_repository")
    cache_ttl: int = Field(default=3600 * 24, ge=0)  # seconds
    gc_enabled: bool = Field(default=True)

    # Storage
    storage_driver: StorageDriver = Field(default=StorageDriver.DATABASE)
    storage_file: str = Field(default="storage/persistent_config.py")
    database_url: str = Field(default="sqlite:///persistent_config.db")
    table_name: str = Field(default="configs")
    key_column: str = Field(default="key")
    value_column: str = Field(default="value")

    # Cache (Redis is optional; in-process cache is used when unset)
    redis_url: Optional[str] = Field(default=None)
    redis_key_prefix: str = Field(default="neo:")

    # Security
    encryption_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("PERSISTENT_CONFIG_ENCRYPTION_KEY", "APP_ENCRYPTION_KEY"),
    )

    @property
    def cache_ttl_delta(self) -> timedelta:
        """Cache TTL as a timedelta."""
        return timedelta(seconds=self.cache_ttl)

    @property
    def is_cache_enabled(self) -> bool:
        """Check if Redis caching is configured."""
        return self.redis_url is not None

    @property
    def is_encryption_enabled(self) -> bool:
        """Check if an encryption key is configured."""
        return self.encryption_key is not None and bool(self.encryption_key.get_secret_value())


@lru_cache()
def get_settings() -> PersistentConfigSettings:
    """Get cached settings instance."""
    return PersistentConfigSettings()
