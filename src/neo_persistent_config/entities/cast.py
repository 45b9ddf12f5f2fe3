"""Value cast strategies for persisted config items.

A cast controls how a config value is serialized for storage and converted
back when restored. The string vocabulary accepted in item descriptors is
kept stable: ``int``, ``float``, ``string``, ``bool``, ``object``, ``array``
and their common aliases.
"""

import json
from enum import Enum
from typing import Any, Optional, Union

from ..core.exceptions import ConfigurationError, UnsupportedCastError

SCALAR_TYPES = (str, int, float, bool)

TRUE_STRINGS = ("true", "1", "yes", "on")
FALSE_STRINGS = ("false", "0", "no", "off", "")


class CastType(str, Enum):
    """Supported cast types."""
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"
    OBJECT = "object"
    ARRAY = "array"

    @classmethod
    def parse(cls, cast: Union[str, "CastType"], key: Optional[str] = None) -> "CastType":
        """Resolve a cast tag or alias into a CastType.

        Raises:
            UnsupportedCastError: if the tag is not recognized.
        """
        if isinstance(cast, CastType):
            return cast

        normalized = str(cast).strip().lower()
        try:
            return _ALIASES[normalized]
        except KeyError:
            raise UnsupportedCastError(str(cast), key) from None

    @property
    def is_structured(self) -> bool:
        """Whether values of this type are JSON documents."""
        return self in (CastType.OBJECT, CastType.ARRAY)

    def serialize(self, value: Any) -> Any:
        """Convert a value to its storage form.

        ``None`` and scalars are stored as is, anything else is JSON-encoded.
        """
        if value is None or isinstance(value, SCALAR_TYPES):
            return value

        try:
            return json.dumps(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Unable to serialize value as {self.value}: {e}")

    def restore(self, value: Any) -> Any:
        """Convert a stored value back to its native type."""
        if value is None:
            return None

        if self == CastType.INT:
            if isinstance(value, str):
                try:
                    return int(value)
                except ValueError:
                    return int(float(value))
            return int(value)

        if self == CastType.FLOAT:
            return float(value)

        if self == CastType.STRING:
            return str(value)

        if self == CastType.BOOL:
            if isinstance(value, str):
                lowered = value.strip().lower()
                if lowered in TRUE_STRINGS:
                    return True
                if lowered in FALSE_STRINGS:
                    return False
            return bool(value)

        # OBJECT / ARRAY
        if isinstance(value, (str, bytes)):
            return json.loads(value)
        return value


_ALIASES = {
    "int": CastType.INT,
    "integer": CastType.INT,
    "float": CastType.FLOAT,
    "double": CastType.FLOAT,
    "real": CastType.FLOAT,
    "string": CastType.STRING,
    "str": CastType.STRING,
    "bool": CastType.BOOL,
    "boolean": CastType.BOOL,
    "object": CastType.OBJECT,
    "dict": CastType.OBJECT,
    "array": CastType.ARRAY,
    "list": CastType.ARRAY,
    "json": CastType.ARRAY,
}
