"""Utility helpers for neo-persistent-config."""

from .encryption import Encrypter, get_encrypter, reset_encrypter

__all__ = [
    "Encrypter",
    "get_encrypter",
    "reset_encrypter",
]
