"""In-memory configuration store."""

from .protocols import ConfigRepositoryProtocol
from .repository import ConfigRepository, SEPARATOR

__all__ = [
    "ConfigRepositoryProtocol",
    "ConfigRepository",
    "SEPARATOR",
]
