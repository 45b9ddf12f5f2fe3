"""Persistent configuration repository.

Decorates an in-memory config store, keeping the values of selected config
items in persistent storage. Stored values are restored lazily, on the first
access to a persisted key, so the repository can be created during
application bootstrap before the storage (e.g. a database connection) is
available.

Example:
    config = ConfigRepository.from_settings(get_app_settings())
    storage = DatabaseStorage(engine)

    repository = PersistentRepository(config, storage, cache=MemoryCache()).set_items([
        "mail.contact.address",
        {"mail.driver": {"label": "Mail transport", "rules": ["required", "in:smtp,sendmail"]}},
        {"key": "app.secret", "encrypt": True},
    ])

    repository.get("mail.driver")       # restored from storage on first access
    repository.save(repository.validate(form_data))
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any, Dict, List, Optional, Union

from ..core.exceptions import ValidationError
from ..entities.item import ConfigItem
from ..entities.protocols import (
    CacheProtocol,
    EncrypterProtocol,
    StorageContract,
    ValidatorFactoryProtocol,
    ValidatorProtocol,
)
from ..store.protocols import ConfigRepositoryProtocol
from ..store.repository import SEPARATOR
from ..validation.validator import ESCAPED_SEPARATOR, ValidatorFactory


logger = logging.getLogger(__name__)

DEFAULT_CACHE_KEY = "neo_persistent_config.persistent_repository"
DEFAULT_CACHE_TTL = 3600 * 24


def _ucfirst(text: str) -> str:
    return text[:1].upper() + text[1:]


class PersistentRepository:
    """Config store decorator persisting selected config items."""

    def __init__(
        self,
        repository: ConfigRepositoryProtocol,
        storage: StorageContract,
        cache: Optional[CacheProtocol] = None,
        encrypter: Optional[EncrypterProtocol] = None,
        validator_factory: Optional[ValidatorFactoryProtocol] = None
    ):
        self._repository = repository
        self._storage = storage
        self._cache = cache
        self._encrypter = encrypter
        self._validator_factory = validator_factory or ValidatorFactory()

        self.cache_key: str = DEFAULT_CACHE_KEY
        self.cache_ttl: Union[int, timedelta] = DEFAULT_CACHE_TTL
        self.gc_enabled: bool = True

        self._items: Optional[Dict[str, ConfigItem]] = None
        self._items_by_key: Dict[str, List[ConfigItem]] = {}
        self._item_keys: Optional[List[str]] = None
        self._is_restored = False

    @property
    def is_restored(self) -> bool:
        """Whether stored values have been applied to the config store."""
        return self._is_restored

    @property
    def storage(self) -> StorageContract:
        return self._storage

    def get_repository(self) -> ConfigRepositoryProtocol:
        """The decorated config store, holding origin values plus restored ones."""
        return self._repository

    # Items

    def get_items(self) -> Dict[str, ConfigItem]:
        """Config items keyed by item id, in registration order."""
        if self._items is None:
            self.set_items([])
        return self._items

    def get_item(self, item_id: str) -> Optional[ConfigItem]:
        return self.get_items().get(item_id)

    def set_items(self, items: Union[Iterable, Mapping]) -> "PersistentRepository":
        """Set config items, which values should be placed in persistent storage.

        Accepted forms, which may be mixed in a list:

        - ``"mail.driver"``: a bare key;
        - ``{"mail.driver": {"label": "Mail transport", "rules": [...]}}``: key to options;
        - ``{"key": "mail.driver", "cast": "int"}``: a full descriptor;
        - ``ConfigItem(key="mail.driver")``: a ready item.

        A list element mapping is read as key to options pairs only when all
        its values are options; otherwise it is a descriptor and must have a
        ``key``.

        A mapping of ``{key: options}`` is accepted as well. The previous item
        set is replaced. When several items share a storage key, restored
        values are applied to the item registered last.
        """
        collection: Dict[str, ConfigItem] = {}

        for item in self._iterate_descriptors(items):
            item.bind(self._repository)
            if self._encrypter is not None and item.encrypter is None:
                item.set_encrypter(self._encrypter)
            if item.id in collection:
                logger.warning(f"Config item '{item.id}' is defined more than once; the last definition is used")
            collection[item.id] = item

        self._items = collection
        self._items_by_key = {}
        for item in collection.values():
            self._items_by_key.setdefault(item.key, []).append(item)
        self._item_keys = None

        return self

    def _iterate_descriptors(self, items: Union[Iterable, Mapping]):
        if isinstance(items, Mapping):
            for key, value in items.items():
                yield self._make_item(key, value)
            return

        for value in items:
            if self._is_options_mapping(value):
                for key, options in value.items():
                    yield self._make_item(key, options)
            else:
                yield self._make_item(None, value)

    @staticmethod
    def _is_options_mapping(value: Any) -> bool:
        """Whether a list element is a ``{key: options}`` mapping rather than a descriptor."""
        if not isinstance(value, Mapping) or not value or "key" in value:
            return False
        return all(options is None or isinstance(options, (Mapping, ConfigItem)) for options in value.values())

    def _make_item(self, key: Any, value: Any) -> ConfigItem:
        if isinstance(value, ConfigItem):
            return value

        if value is None:
            value = {}
        elif not isinstance(value, Mapping):
            # Positional scalar, e.g. ``["mail.driver"]`` or ``{0: "mail.driver"}``
            if key is None or isinstance(key, int):
                return ConfigItem.from_dict({"key": value})
            raise TypeError(f"Config item options for '{key}' must be a mapping, got {type(value).__name__}")

        data = dict(value)
        if not data.get("key") and key is not None:
            data["key"] = key

        return ConfigItem.from_dict(data)

    def _get_item_keys(self) -> List[str]:
        if self._item_keys is None:
            self._item_keys = [item.key for item in self.get_items().values()]
        return self._item_keys

    def is_persistent_key(self, key: Any) -> bool:
        """Whether the key, or any key in a list or mapping, overlaps a persisted item key.

        Keys overlap when equal or when one is a dotted-path ancestor of the
        other: ``"mail"`` and ``"mail.driver.host"`` both overlap
        ``"mail.driver"``, while ``"mail.driver_name"`` does not.
        """
        if key is None:
            return False

        if isinstance(key, str):
            candidates = [key]
        elif isinstance(key, Mapping):
            candidates = list(key.keys())
        elif isinstance(key, Iterable):
            candidates = list(key)
        else:
            candidates = [key]

        item_keys = [item_key + SEPARATOR for item_key in self._get_item_keys()]
        for candidate in candidates:
            candidate = f"{candidate}{SEPARATOR}"
            for item_key in item_keys:
                if candidate.startswith(item_key) or item_key.startswith(candidate):
                    return True

        return False

    # Persistence

    def save(self, values: Mapping[str, Any]) -> "PersistentRepository":
        """Save config item values into persistent storage.

        Args:
            values: item values in format ``{item_id: value}``; unknown ids are ignored.
        """
        items = self.get_items()

        resolved = [(items[item_id], value) for item_id, value in values.items() if item_id in items]

        stored_values = self._storage.get()
        for item, value in resolved:
            stored_values[item.key] = item.save_value(value)

        self._storage.save(stored_values)
        logger.info(f"Saved {len(resolved)} persistent config value(s)")

        if self.gc_enabled:
            self.gc()

        # cache what the storage holds, values may be normalized on write
        self._set_cached(self._storage.get())

        return self

    def synchronize(self) -> "PersistentRepository":
        """Save current values of all config items into persistent storage.

        Persisted values are restored first, so they are not replaced by
        origin values.
        """
        if not self._is_restored:
            self.restore()

        values = {item_id: item.get_value() for item_id, item in self.get_items().items()}
        return self.save(values)

    def restore(self) -> "PersistentRepository":
        """Restore values from persistent storage into the config store.

        Storage failures are logged instead of raised, leaving origin values
        active; a value which fails to restore (e.g. after an encryption key
        change) is logged and skipped.
        """
        values = self._get_cached()
        if values is None:
            try:
                # storage may be unavailable at this point, e.g. table not created yet
                values = self._storage.get()
                self._set_cached(values)
            except Exception as e:
                logger.error(f"Unable to restore persistent config values: {e}", exc_info=True)
                values = {}

        for key, value in values.items():
            items = self._items_by_key_view().get(key)
            if not items:
                continue

            item = items[-1]
            try:
                item.restore_value(value)
            except Exception as e:
                logger.error(f"Unable to restore persistent config value '{key}': {e}", exc_info=True)

        self._is_restored = True
        return self

    def _items_by_key_view(self) -> Dict[str, List[ConfigItem]]:
        self.get_items()
        return self._items_by_key

    def reset(self) -> "PersistentRepository":
        """Clear all values in persistent storage, restoring origin values in the config store."""
        self._delete_cached()
        self._storage.clear()

        for item in self.get_items().values():
            item.reset_value()

        logger.info("Reset all persistent config values")
        return self

    def reset_value(self, key: str) -> "PersistentRepository":
        """Clear the stored value for the given storage key, restoring its origin value."""
        self._delete_cached()
        self._storage.clear_value(key)

        for item in self._items_by_key_view().get(key, []):
            item.reset_value()

        logger.info(f"Reset persistent config value '{key}'")
        return self

    def gc(self) -> "PersistentRepository":
        """Delete stored values which have no matching config item."""
        existing_values = self._storage.get()
        item_keys = set(self._get_item_keys())

        for key in existing_values:
            if key not in item_keys:
                self._storage.clear_value(key)
                logger.debug(f"Removed obsolete persistent config value '{key}'")

        return self

    # Validation

    def make_validator(self, values: Mapping[str, Any]) -> ValidatorProtocol:
        """Create a validator for config item values.

        Item ids are escaped so ids containing ``.`` are validated as flat
        input names instead of nested paths.
        """
        rules = {
            item.id.replace(SEPARATOR, ESCAPED_SEPARATOR): item.rules
            for item in self.get_items().values()
        }
        return self._validator_factory.make(values, rules)

    def validate(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate data to be set as config item values.

        Returns:
            Validated values keyed by item id.

        Raises:
            ValidationError: with messages keyed by item id, using item labels.
        """
        items = self.get_items()
        validator = self.make_validator(values)

        if validator.fails():
            errors: Dict[str, List[str]] = {}
            for field, messages in validator.errors().items():
                item_id = field.replace(ESCAPED_SEPARATOR, SEPARATOR)
                item = items.get(item_id)
                label = item.label if item is not None else item_id
                errors[item_id] = [
                    message
                    .replace(field, label)
                    .replace(_ucfirst(field), _ucfirst(label))
                    .replace(field.upper(), label.upper())
                    for message in messages
                ]

            raise ValidationError(errors)

        return {
            field.replace(ESCAPED_SEPARATOR, SEPARATOR): value
            for field, value in validator.validated().items()
        }

    # Cache

    def set_cache(self, cache: Optional[CacheProtocol]) -> "PersistentRepository":
        self._cache = cache
        return self

    def set_cache_key(self, cache_key: str) -> "PersistentRepository":
        self.cache_key = cache_key
        return self

    def set_cache_ttl(self, cache_ttl: Union[int, timedelta]) -> "PersistentRepository":
        self.cache_ttl = cache_ttl
        return self

    def set_gc_enabled(self, gc_enabled: bool) -> "PersistentRepository":
        self.gc_enabled = gc_enabled
        return self

    def set_encrypter(self, encrypter: Optional[EncrypterProtocol]) -> "PersistentRepository":
        self._encrypter = encrypter
        for item in self.get_items().values():
            item.set_encrypter(encrypter)
        return self

    def set_validator_factory(self, validator_factory: ValidatorFactoryProtocol) -> "PersistentRepository":
        self._validator_factory = validator_factory
        return self

    def _get_cached(self) -> Optional[Dict[str, Any]]:
        if self._cache is None:
            return None
        return self._cache.get(self.cache_key)

    def _set_cached(self, values: Mapping[str, Any]) -> None:
        if self._cache is None:
            return
        self._cache.set(self.cache_key, dict(values), self.cache_ttl)

    def _delete_cached(self) -> None:
        if self._cache is None:
            return
        self._cache.delete(self.cache_key)

    # Config store contract

    def _restore_for(self, key: Any) -> None:
        if self._is_restored:
            return
        # ``None`` addresses the whole store
        if key is None or self.is_persistent_key(key):
            self.restore()

    def has(self, key: str) -> bool:
        if self._repository.has(key):
            return True
        return key in self._items_by_key_view()

    def get(self, key: Any, default: Any = None) -> Any:
        self._restore_for(key)
        return self._repository.get(key, default)

    def all(self) -> Dict[str, Any]:
        if not self._is_restored:
            self.restore()
        return self._repository.all()

    def set(self, key: Any, value: Any = None) -> None:
        self._restore_for(key)
        self._repository.set(key, value)

    def prepend(self, key: str, value: Any) -> None:
        self._restore_for(key)
        self._repository.prepend(key, value)

    def push(self, key: str, value: Any) -> None:
        self._restore_for(key)
        self._repository.push(key, value)

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.set(key, None)

    def __repr__(self) -> str:
        return (
            f"PersistentRepository(items={len(self.get_items())}, "
            f"restored={self._is_restored}, storage={self._storage.__class__.__name__})"
        )
