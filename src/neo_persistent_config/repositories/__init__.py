"""Persistent config repository decorating the in-memory config store."""

from .persistent_repository import PersistentRepository, DEFAULT_CACHE_KEY, DEFAULT_CACHE_TTL

__all__ = [
    "PersistentRepository",
    "DEFAULT_CACHE_KEY",
    "DEFAULT_CACHE_TTL",
]
