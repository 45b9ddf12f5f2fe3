"""In-memory configuration store with dotted-path access.

Holds the static configuration of an application (loaded from settings
objects, files or plain dicts) as nested dictionaries. Keys such as
``mail.contact.address`` address nested values.
"""

import copy
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel

SEPARATOR = "."

_MISSING = object()


def _lookup(items: Dict[str, Any], key: str) -> Any:
    """Return the value at ``key`` or ``_MISSING``."""
    if key in items:
        return items[key]

    current: Any = items
    for segment in key.split(SEPARATOR):
        if isinstance(current, Mapping) and segment in current:
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            return _MISSING
    return current


class ConfigRepository:
    """Dict-backed configuration store.

    Example:
        config = ConfigRepository({"mail": {"driver": "smtp"}})
        config.get("mail.driver")          # "smtp"
        config.set("mail.port", 25)
        config.get(["mail.driver", "app.name"])
    """

    def __init__(self, items: Optional[Mapping] = None):
        self._items: Dict[str, Any] = copy.deepcopy(dict(items)) if items else {}

    @classmethod
    def from_settings(cls, *settings: BaseModel) -> "ConfigRepository":
        """Build a store from one or more pydantic settings objects.

        Later objects override earlier ones key by key.
        """
        repository = cls()
        for model in settings:
            for key, value in model.model_dump().items():
                repository.set(key, value)
        return repository

    def has(self, key: str) -> bool:
        if key is None:
            return False
        return _lookup(self._items, key) is not _MISSING

    def get(self, key: Any, default: Any = None) -> Any:
        if key is None:
            return self._items

        if isinstance(key, Mapping):
            return {name: self.get(name, fallback) for name, fallback in key.items()}

        if isinstance(key, (list, tuple)):
            return {name: self.get(name) for name in key}

        value = _lookup(self._items, key)
        return default if value is _MISSING else value

    def all(self) -> Dict[str, Any]:
        return self._items

    def set(self, key: Any, value: Any = None) -> None:
        keys = key if isinstance(key, Mapping) else {key: value}

        for name, item_value in keys.items():
            segments = name.split(SEPARATOR)
            current = self._items
            for segment in segments[:-1]:
                if not isinstance(current.get(segment), dict):
                    current[segment] = {}
                current = current[segment]
            current[segments[-1]] = item_value

    def prepend(self, key: str, value: Any) -> None:
        values = list(self.get(key, []))
        values.insert(0, value)
        self.set(key, values)

    def push(self, key: str, value: Any) -> None:
        values = list(self.get(key, []))
        values.append(value)
        self.set(key, values)

    # Mapping access

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.set(key, None)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def keys(self) -> List[str]:
        return list(self._items.keys())

    def __repr__(self) -> str:
        return f"ConfigRepository(keys={self.keys()})"
