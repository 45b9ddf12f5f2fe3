"""Protocol interfaces for persistent configuration dependency injection.

Defines contracts for persistent storage, caching, encryption and validation
consumed by the persistent repository, following protocol-based dependency
injection patterns.
"""

from abc import abstractmethod
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union, runtime_checkable


Scalar = Union[str, int, float, bool, None]


@runtime_checkable
class StorageContract(Protocol):
    """Protocol for durable flat key-value persistence of config values."""

    @abstractmethod
    def save(self, values: Mapping[str, Scalar]) -> bool:
        """Save given values, merging them into the stored set."""
        ...

    @abstractmethod
    def get(self) -> Dict[str, Scalar]:
        """Return all previously saved values in format ``{key: value}``."""
        ...

    @abstractmethod
    def clear(self) -> bool:
        """Clear all saved values."""
        ...

    @abstractmethod
    def clear_value(self, key: str) -> bool:
        """Clear saved value for the specified key."""
        ...


@runtime_checkable
class CacheProtocol(Protocol):
    """Protocol for the cache holding the full persisted value set."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Get cached value, ``None`` if absent or expired."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[Union[int, timedelta]] = None) -> bool:
        """Cache a value with optional TTL."""
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a cached value."""
        ...


@runtime_checkable
class EncrypterProtocol(Protocol):
    """Protocol for symmetric string encryption."""

    @abstractmethod
    def encrypt_string(self, value: str) -> str:
        """Encrypt a plaintext string."""
        ...

    @abstractmethod
    def decrypt_string(self, payload: str) -> str:
        """Decrypt a payload, raising DecryptionError when it cannot be decrypted."""
        ...


@runtime_checkable
class ValidatorProtocol(Protocol):
    """Protocol for a validator instance bound to data and rules."""

    @abstractmethod
    def fails(self) -> bool:
        """Whether validation failed."""
        ...

    @abstractmethod
    def errors(self) -> Dict[str, List[str]]:
        """Messages keyed by field name."""
        ...

    @abstractmethod
    def validated(self) -> Dict[str, Any]:
        """Values of the fields that have rules, keyed by field name."""
        ...


@runtime_checkable
class ValidatorFactoryProtocol(Protocol):
    """Protocol for creating validator instances."""

    @abstractmethod
    def make(self, data: Mapping[str, Any], rules: Mapping[str, List[Any]]) -> ValidatorProtocol:
        """Create a validator for the given data and rules."""
        ...
