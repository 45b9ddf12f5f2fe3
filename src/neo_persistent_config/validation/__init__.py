"""Validation engine for config item values."""

from .validator import RuleValidator, ValidatorFactory, escape_keys, ESCAPED_SEPARATOR

__all__ = [
    "RuleValidator",
    "ValidatorFactory",
    "escape_keys",
    "ESCAPED_SEPARATOR",
]
