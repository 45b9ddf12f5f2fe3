"""
Unit tests for the persistent config provider scaffold.
"""

import pytest

from neo_persistent_config.cache.memory import MemoryCache
from neo_persistent_config.cache.redis_cache import RedisCache
from neo_persistent_config.config.settings import PersistentConfigSettings
from neo_persistent_config.providers.base import (
    AbstractPersistentConfigProvider,
    SettingsPersistentConfigProvider,
    dump_origin_config,
)
from neo_persistent_config.repositories.persistent_repository import PersistentRepository
from neo_persistent_config.storage.database import DatabaseStorage
from neo_persistent_config.storage.file import FileStorage
from neo_persistent_config.storage.memory import ArrayStorage
from neo_persistent_config.utils.encryption import Encrypter


class MailConfigProvider(AbstractPersistentConfigProvider):
    """Provider persisting test values in memory."""

    cache_key = "mail.persistent"
    cache_ttl = 120
    gc_enabled = False

    def __init__(self, storage):
        self._storage = storage

    def storage(self):
        return self._storage

    def items(self):
        return [
            "test.name",
            {"test.title": {"label": "Page title"}},
        ]


class TestAbstractProvider:
    """Test repository registration."""

    def test_abstract(self):
        with pytest.raises(TypeError):
            AbstractPersistentConfigProvider()

    def test_register(self, config_repository):
        """Test the repository is configured from provider hooks."""
        storage = ArrayStorage({"test.name": "Persisted"})

        repository = MailConfigProvider(storage).register(config_repository)

        assert isinstance(repository, PersistentRepository)
        assert repository.get_repository() is config_repository
        assert repository.cache_key == "mail.persistent"
        assert repository.cache_ttl == 120
        assert repository.gc_enabled is False
        assert list(repository.get_items()) == ["test.name", "test.title"]
        assert repository.get("test.name") == "Persisted"

    def test_dump_origin_config(self, config_repository, mocker):
        """Test exporting config does not restore persisted values."""
        storage = mocker.MagicMock()
        storage.get.return_value = {"test.name": "Persisted"}
        repository = MailConfigProvider(storage).register(config_repository)

        dumped = dump_origin_config(repository)

        assert dumped["test"]["name"] == "Origin name"
        storage.get.assert_not_called()
        assert repository.all()["test"]["name"] == "Persisted"

    def test_dump_plain_store(self, config_repository):
        assert dump_origin_config(config_repository) is config_repository.all()


class TestSettingsProvider:
    """Test building collaborators from settings."""

    class Provider(SettingsPersistentConfigProvider):
        def items(self):
            return ["test.name"]

    def test_array_storage(self):
        settings = PersistentConfigSettings(_env_file=None, storage_driver="array")

        provider = self.Provider(settings)

        assert isinstance(provider.storage(), ArrayStorage)
        assert isinstance(provider.cache(), MemoryCache)
        assert provider.encrypter() is None

    def test_file_storage(self, tmp_path):
        settings = PersistentConfigSettings(
            _env_file=None,
            storage_driver="file",
            storage_file=str(tmp_path / "values.py"),
        )

        storage = self.Provider(settings).storage()

        assert isinstance(storage, FileStorage)
        assert storage.file_name == tmp_path / "values.py"

    def test_database_storage(self):
        settings = PersistentConfigSettings(
            _env_file=None,
            database_url="sqlite://",
            table_name="app_configs",
        )

        storage = self.Provider(settings).storage()

        assert isinstance(storage, DatabaseStorage)
        assert storage.table_name == "app_configs"

    def test_redis_cache(self):
        settings = PersistentConfigSettings(
            _env_file=None,
            redis_url="redis://localhost:6379/0",
            redis_key_prefix="app:",
        )

        cache = self.Provider(settings).cache()

        assert isinstance(cache, RedisCache)
        assert cache.key_prefix == "app:"

    def test_encrypter(self):
        settings = PersistentConfigSettings(_env_file=None, encryption_key="provider-key")

        encrypter = self.Provider(settings).encrypter()

        assert isinstance(encrypter, Encrypter)
        assert encrypter.key_string == "provider-key"

    def test_register_uses_settings(self, config_repository):
        settings = PersistentConfigSettings(
            _env_file=None,
            storage_driver="array",
            cache_key="custom",
            cache_ttl=30,
            gc_enabled=False,
        )

        repository = self.Provider(settings).register(config_repository)

        assert repository.cache_key == "custom"
        assert repository.cache_ttl == 30
        assert repository.gc_enabled is False
        repository.save({"test.name": "Saved"})
        assert repository.storage.get() == {"test.name": "Saved"}
