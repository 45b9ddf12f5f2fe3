"""Persistent storage backends implementing the storage contract."""

from .memory import ArrayStorage
from .file import FileStorage
from .database import DatabaseStorage
from .orm import OrmStorage, ConfigEntry, Base

__all__ = [
    "ArrayStorage",
    "FileStorage",
    "DatabaseStorage",
    "OrmStorage",
    "ConfigEntry",
    "Base",
]
