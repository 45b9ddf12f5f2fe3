"""Config item entity.

A config item describes one persisted configuration entry: its identity, its
key in the config store and in persistent storage, validation rules and how
its value is cast and encrypted for storage.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..core.exceptions import ConfigurationError, MissingKeyError, UnboundRepositoryError
from ..store.protocols import ConfigRepositoryProtocol
from .cast import CastType
from .protocols import EncrypterProtocol


logger = logging.getLogger(__name__)

DEFAULT_RULES = ["sometimes", "required"]

_MISSING = object()


def make_label(item_id: str) -> str:
    """Derive a human readable label from an item id, e.g. ``mail.from-name`` -> ``Mail From Name``."""
    text = item_id
    for separator in (".", "-", "_"):
        text = text.replace(separator, " ")
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


@dataclass
class ConfigItem:
    """A single configuration value persisted in storage.

    Example:
        item = ConfigItem(key="mail.contact.address", rules=["required", "email"])
        item.bind(config_repository)
        item.set_value("admin@example.com")
    """

    key: Optional[str] = None
    id: Optional[str] = None
    label: Optional[str] = None
    hint: Optional[str] = None
    rules: List[Any] = field(default_factory=lambda: list(DEFAULT_RULES))
    cast: Optional[str] = None
    encrypt: bool = False
    options: Dict[str, Any] = field(default_factory=dict)
    repository: Optional[ConfigRepositoryProtocol] = field(default=None, repr=False, compare=False)
    encrypter: Optional[EncrypterProtocol] = field(default=None, repr=False, compare=False)
    _origin_value: Any = field(default=_MISSING, init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate descriptor and fill derived attributes."""
        if not self.key:
            raise MissingKeyError(f'"{self.__class__.__name__}.key" must be specified.')

        self.key = str(self.key)
        if not self.id:
            self.id = self.key
        if not self.label:
            self.label = make_label(self.id)
        if self.rules is None:
            self.rules = list(DEFAULT_RULES)
        else:
            self.rules = list(self.rules)
        self.encrypt = bool(self.encrypt)
        if self.options is None:
            self.options = {}

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        repository: Optional[ConfigRepositoryProtocol] = None,
        encrypter: Optional[EncrypterProtocol] = None
    ) -> "ConfigItem":
        """Create an item from a descriptor map like ``{"key": ..., "label": ..., "rules": [...]}``."""
        known = {"key", "id", "label", "hint", "rules", "cast", "encrypt", "options"}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown config item attributes: {', '.join(sorted(unknown))}",
                details={"attributes": sorted(unknown)}
            )
        return cls(repository=repository, encrypter=encrypter, **dict(data))

    # Binding

    def bind(self, repository: ConfigRepositoryProtocol) -> "ConfigItem":
        """Bind the config store this item reads and writes; forgets the origin value."""
        self.repository = repository
        self._origin_value = _MISSING
        return self

    def set_encrypter(self, encrypter: Optional[EncrypterProtocol]) -> "ConfigItem":
        self.encrypter = encrypter
        return self

    def get_repository(self) -> ConfigRepositoryProtocol:
        if self.repository is None:
            raise UnboundRepositoryError(
                f'Config repository is not bound to item "{self.id}".',
                details={"id": self.id, "key": self.key}
            )
        return self.repository

    # Value access

    def get_value(self, default: Any = None) -> Any:
        """Current value of this item in the config store."""
        return self.get_repository().get(self.key, default)

    def set_value(self, value: Any) -> "ConfigItem":
        """Write a value into the config store, remembering the value it replaces the first time."""
        repository = self.get_repository()
        if self._origin_value is _MISSING:
            self._origin_value = repository.get(self.key)
        repository.set(self.key, value)
        return self

    def reset_value(self) -> "ConfigItem":
        """Put back the value the config store held before the first ``set_value`` call."""
        if self._origin_value is _MISSING:
            return self

        self.get_repository().set(self.key, self._origin_value)
        self._origin_value = _MISSING
        logger.debug(f"Reset config item '{self.key}' to its origin value")
        return self

    def save_value(self, value: Any) -> Any:
        """Apply a new value and return its storage representation."""
        self.set_value(value)

        if self.cast is not None:
            value = CastType.parse(self.cast, self.key).serialize(value)

        if self.encrypt and value is not None:
            value = self._get_encrypter().encrypt_string(str(value))

        return value

    def restore_value(self, value: Any) -> Any:
        """Convert a stored value back and apply it to the config store.

        Raises:
            DecryptionError: if the item is encrypted and the value can not be decrypted.
            UnsupportedCastError: if the item cast type is unknown.
        """
        if self.encrypt and value is not None:
            value = self._get_encrypter().decrypt_string(value)

        if self.cast is not None:
            value = CastType.parse(self.cast, self.key).restore(value)

        self.set_value(value)
        return value

    def _get_encrypter(self) -> EncrypterProtocol:
        if self.encrypter is None:
            from ..utils.encryption import get_encrypter

            self.encrypter = get_encrypter()
        return self.encrypter

    # Presentation

    def to_dict(self) -> Dict[str, Any]:
        """Flat descriptor with the current value, e.g. for building an edit form."""
        return {
            **self.options,
            "id": self.id,
            "key": self.key,
            "label": self.label,
            "hint": self.hint,
            "rules": list(self.rules),
            "cast": self.cast,
            "encrypt": self.encrypt,
            "value": self.get_value(),
        }

    to_array = to_dict
