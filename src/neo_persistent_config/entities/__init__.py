"""Persistent configuration entities package.

Config item entity, cast strategies and the protocols of the collaborators
used by the persistent repository.
"""

from .cast import CastType
from .item import ConfigItem, DEFAULT_RULES, make_label
from .protocols import (
    StorageContract,
    CacheProtocol,
    EncrypterProtocol,
    ValidatorProtocol,
    ValidatorFactoryProtocol,
)

__all__ = [
    # Entities
    "ConfigItem",
    "CastType",
    "DEFAULT_RULES",
    "make_label",

    # Protocols
    "StorageContract",
    "CacheProtocol",
    "EncrypterProtocol",
    "ValidatorProtocol",
    "ValidatorFactoryProtocol",
]
