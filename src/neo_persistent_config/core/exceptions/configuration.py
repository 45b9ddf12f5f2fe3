"""Configuration-specific exceptions.

Errors raised by config items, persistent storages, caches, encryption and
validation of persisted configuration values.
"""

from typing import Dict, List, Optional

from .base import PersistentConfigError


# Item Errors
class ConfigurationError(PersistentConfigError):
    """Base class for configuration item errors."""
    pass


class MissingKeyError(ConfigurationError):
    """Raised when a config item descriptor has no storage key."""
    pass


class UnboundRepositoryError(ConfigurationError):
    """Raised when a config item value is accessed before a store is bound."""
    pass


class UnsupportedCastError(ConfigurationError):
    """Raised when a config item declares an unknown cast type."""

    def __init__(self, cast: str, key: Optional[str] = None):
        super().__init__(
            f"Unsupported cast type '{cast}'" + (f" for config item '{key}'" if key else ""),
            details={"cast": cast, "key": key},
        )
        self.cast = cast
        self.key = key


# Encryption Errors
class EncryptionError(PersistentConfigError):
    """Base class for encryption errors."""
    pass


class DecryptionError(EncryptionError):
    """Raised when ciphertext cannot be decrypted (key rotation, corruption)."""
    pass


# Storage Errors
class StorageError(PersistentConfigError):
    """Raised when the persistent storage backend fails."""
    pass


# Cache Errors
class CacheError(PersistentConfigError):
    """Raised when the cache backend fails."""
    pass


# Validation Errors
class ValidationError(PersistentConfigError):
    """Raised when config item values fail validation.

    ``errors`` maps item id to the list of human readable messages.
    """

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        if message is None:
            first = next((messages[0] for messages in errors.values() if messages), None)
            message = first or "The given data was invalid."
            extra = sum(len(messages) for messages in errors.values()) - 1
            if extra > 0:
                message += f" (and {extra} more error{'s' if extra > 1 else ''})"
        super().__init__(message, details={"errors": errors})
        self.errors = errors
