"""Neo-Persistent-Config - runtime editable configuration persisted across restarts.

This library decorates an in-memory config store, keeping the values of
selected config items in persistent storage (flat file, database table or ORM
model), with an optional shared cache, encryption at rest and validation of
edited values.
"""

from .__version__ import __version__

# Logging entry point; applications call it once at startup
from .config.logging_config import setup_logging

from .config import (
    PersistentConfigSettings,
    StorageDriver,
    get_settings,
)

from .core.exceptions import (
    # Base Exception
    PersistentConfigError,

    # Common Exceptions
    ConfigurationError,
    MissingKeyError,
    UnboundRepositoryError,
    UnsupportedCastError,
    EncryptionError,
    DecryptionError,
    StorageError,
    CacheError,
    ValidationError,

    # Utility Functions
    create_error_response,
)

# In-memory store and persistent repository
from .store import ConfigRepository, ConfigRepositoryProtocol
from .entities import (
    ConfigItem,
    CastType,
    StorageContract,
    CacheProtocol,
    EncrypterProtocol,
    ValidatorProtocol,
    ValidatorFactoryProtocol,
)
from .repositories import PersistentRepository

# Collaborators
from .storage import ArrayStorage, FileStorage, DatabaseStorage, OrmStorage, ConfigEntry
from .cache import MemoryCache, RedisCache
from .utils import Encrypter, get_encrypter, reset_encrypter
from .validation import RuleValidator, ValidatorFactory

# Bootstrap
from .providers import (
    AbstractPersistentConfigProvider,
    SettingsPersistentConfigProvider,
    dump_origin_config,
)

__all__ = [
    "__version__",
    "setup_logging",

    # Configuration
    "PersistentConfigSettings",
    "StorageDriver",
    "get_settings",

    # Exceptions
    "PersistentConfigError",
    "ConfigurationError",
    "MissingKeyError",
    "UnboundRepositoryError",
    "UnsupportedCastError",
    "EncryptionError",
    "DecryptionError",
    "StorageError",
    "CacheError",
    "ValidationError",
    "create_error_response",

    # Core
    "ConfigRepository",
    "ConfigRepositoryProtocol",
    "ConfigItem",
    "CastType",
    "PersistentRepository",

    # Protocols
    "StorageContract",
    "CacheProtocol",
    "EncrypterProtocol",
    "ValidatorProtocol",
    "ValidatorFactoryProtocol",

    # Storage
    "ArrayStorage",
    "FileStorage",
    "DatabaseStorage",
    "OrmStorage",
    "ConfigEntry",

    # Cache
    "MemoryCache",
    "RedisCache",

    # Encryption
    "Encrypter",
    "get_encrypter",
    "reset_encrypter",

    # Validation
    "RuleValidator",
    "ValidatorFactory",

    # Providers
    "AbstractPersistentConfigProvider",
    "SettingsPersistentConfigProvider",
    "dump_origin_config",
]
