"""Exception hierarchy for neo-persistent-config."""

from .base import PersistentConfigError, create_error_response
from .configuration import (
    ConfigurationError,
    MissingKeyError,
    UnboundRepositoryError,
    UnsupportedCastError,
    EncryptionError,
    DecryptionError,
    StorageError,
    CacheError,
    ValidationError,
)

__all__ = [
    # Base Exception
    "PersistentConfigError",
    "create_error_response",

    # Item Exceptions
    "ConfigurationError",
    "MissingKeyError",
    "UnboundRepositoryError",
    "UnsupportedCastError",

    # Infrastructure Exceptions
    "EncryptionError",
    "DecryptionError",
    "StorageError",
    "CacheError",

    # Validation
    "ValidationError",
]
