"""Array storage keeping config values in process memory.

This storage can be useful in unit tests.
"""

from typing import Dict, Mapping, Optional

from ..entities.protocols import Scalar


class ArrayStorage:
    """Storage contract implementation over a plain dict."""

    def __init__(self, data: Optional[Mapping[str, Scalar]] = None):
        self.data: Dict[str, Scalar] = dict(data or {})

    def save(self, values: Mapping[str, Scalar]) -> bool:
        self.data.update(values)
        return True

    def get(self) -> Dict[str, Scalar]:
        return dict(self.data)

    def clear(self) -> bool:
        self.data = {}
        return True

    def clear_value(self, key: str) -> bool:
        self.data.pop(key, None)
        return True
