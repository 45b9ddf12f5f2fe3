"""Pytest configuration and fixtures for neo-persistent-config tests."""

import pytest

from neo_persistent_config.cache.memory import MemoryCache
from neo_persistent_config.config.settings import get_settings
from neo_persistent_config.repositories.persistent_repository import PersistentRepository
from neo_persistent_config.storage.memory import ArrayStorage
from neo_persistent_config.store.repository import ConfigRepository
from neo_persistent_config.utils.encryption import Encrypter, reset_encrypter


TEST_ENCRYPTION_KEY = "test-persistent-config-key"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep host environment and cached singletons out of tests."""
    for name in ("PERSISTENT_CONFIG_ENCRYPTION_KEY", "APP_ENCRYPTION_KEY", "PERSISTENT_CONFIG_REDIS_URL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_encrypter()
    yield
    get_settings.cache_clear()
    reset_encrypter()


@pytest.fixture
def config_repository():
    """In-memory config store with origin values."""
    return ConfigRepository({
        "test": {
            "name": "Origin name",
            "title": "Origin title",
        },
        "other": {
            "value": "Unrelated",
        },
    })


@pytest.fixture
def storage():
    """Empty array storage."""
    return ArrayStorage()


@pytest.fixture
def cache():
    """In-process cache."""
    return MemoryCache()


@pytest.fixture(scope="session")
def encrypter():
    """Encrypter with a fixed passphrase."""
    return Encrypter(TEST_ENCRYPTION_KEY)


@pytest.fixture
def persistent_repository(config_repository, storage, encrypter):
    """Persistent repository over array storage with two items."""
    return PersistentRepository(config_repository, storage, encrypter=encrypter).set_items([
        "test.name",
        "test.title",
    ])
