"""Protocol for the in-memory configuration store decorated by the persistent repository."""

from abc import abstractmethod
from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class ConfigRepositoryProtocol(Protocol):
    """Path-addressable configuration store using ``.`` delimited keys."""

    @abstractmethod
    def has(self, key: str) -> bool:
        """Determine if the given configuration value exists."""
        ...

    @abstractmethod
    def get(self, key: Any, default: Any = None) -> Any:
        """Get the specified configuration value."""
        ...

    @abstractmethod
    def all(self) -> Dict[str, Any]:
        """Get all of the configuration items."""
        ...

    @abstractmethod
    def set(self, key: Any, value: Any = None) -> None:
        """Set a given configuration value."""
        ...

    @abstractmethod
    def prepend(self, key: str, value: Any) -> None:
        """Prepend a value onto an array configuration value."""
        ...

    @abstractmethod
    def push(self, key: str, value: Any) -> None:
        """Push a value onto an array configuration value."""
        ...
