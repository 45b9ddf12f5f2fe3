"""
Provider scaffold wiring a persistent repository into an application.

An application subclasses ``AbstractPersistentConfigProvider``, declaring which
storage keeps the values and which config items are persisted, then swaps its
config store for the repository returned by ``register``:

    class AppConfigProvider(SettingsPersistentConfigProvider):
        def items(self):
            return [
                "mail.contact.address",
                {"mail.driver": {"rules": ["required", "in:smtp,sendmail"]}},
            ]

    config = AppConfigProvider().register(ConfigRepository.from_settings(app_settings))
"""
import logging
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from sqlalchemy import create_engine

from ..cache.memory import MemoryCache
from ..cache.redis_cache import RedisCache
from ..config.settings import PersistentConfigSettings, StorageDriver, get_settings
from ..entities.protocols import CacheProtocol, EncrypterProtocol, StorageContract
from ..repositories.persistent_repository import (
    DEFAULT_CACHE_KEY,
    DEFAULT_CACHE_TTL,
    PersistentRepository,
)
from ..storage.database import DatabaseStorage
from ..storage.file import FileStorage
from ..storage.memory import ArrayStorage
from ..store.protocols import ConfigRepositoryProtocol
from ..utils.encryption import Encrypter

logger = logging.getLogger(__name__)


class AbstractPersistentConfigProvider(ABC):
    """Base provider for persistent config registration."""

    cache_key: str = DEFAULT_CACHE_KEY
    cache_ttl: Union[int, timedelta] = DEFAULT_CACHE_TTL
    gc_enabled: bool = True

    @abstractmethod
    def storage(self) -> StorageContract:
        """Storage keeping persisted values."""
        ...

    @abstractmethod
    def items(self) -> Union[Iterable[Any], Mapping[str, Any]]:
        """Config item descriptors accepted by ``PersistentRepository.set_items``."""
        ...

    def cache(self) -> Optional[CacheProtocol]:
        return None

    def encrypter(self) -> Optional[EncrypterProtocol]:
        return None

    def register(self, origin: ConfigRepositoryProtocol) -> PersistentRepository:
        """Decorate the origin config store with a configured persistent repository."""
        repository = PersistentRepository(
            origin,
            self.storage(),
            cache=self.cache(),
            encrypter=self.encrypter(),
        )
        repository.set_cache_key(self.cache_key)
        repository.set_cache_ttl(self.cache_ttl)
        repository.set_gc_enabled(self.gc_enabled)
        repository.set_items(self.items())

        logger.info(f"Registered persistent config with {len(repository.get_items())} item(s)")
        return repository


class SettingsPersistentConfigProvider(AbstractPersistentConfigProvider):
    """Provider building storage, cache and encrypter from settings."""

    def __init__(self, settings: Optional[PersistentConfigSettings] = None):
        self.settings = settings or get_settings()
        self.cache_key = self.settings.cache_key
        self.cache_ttl = self.settings.cache_ttl
        self.gc_enabled = self.settings.gc_enabled

    def storage(self) -> StorageContract:
        driver = self.settings.storage_driver

        if driver == StorageDriver.ARRAY:
            return ArrayStorage()

        if driver == StorageDriver.FILE:
            return FileStorage(self.settings.storage_file)

        engine = create_engine(self.settings.database_url, pool_pre_ping=True)
        return DatabaseStorage(
            engine,
            table_name=self.settings.table_name,
            key_column=self.settings.key_column,
            value_column=self.settings.value_column,
        )

    def cache(self) -> Optional[CacheProtocol]:
        if self.settings.is_cache_enabled:
            return RedisCache(
                url=self.settings.redis_url,
                key_prefix=self.settings.redis_key_prefix,
            )
        return MemoryCache()

    def encrypter(self) -> Optional[EncrypterProtocol]:
        if not self.settings.is_encryption_enabled:
            return None
        return Encrypter(self.settings.encryption_key.get_secret_value())


def dump_origin_config(config: Union[PersistentRepository, ConfigRepositoryProtocol]) -> Dict[str, Any]:
    """Config values to export into a config cache.

    Reads the wrapped store directly so no restore is triggered: on a freshly
    bootstrapped application the export holds origin values only, and
    persisted values keep being restored at runtime on top of the cache.
    """
    if isinstance(config, PersistentRepository):
        return config.get_repository().all()
    return config.all()
