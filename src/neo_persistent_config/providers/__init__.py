"""Providers registering persistent config in an application."""

from .base import (
    AbstractPersistentConfigProvider,
    SettingsPersistentConfigProvider,
    dump_origin_config,
)

__all__ = [
    "AbstractPersistentConfigProvider",
    "SettingsPersistentConfigProvider",
    "dump_origin_config",
]
