"""In-process cache with TTL expiry.

Suitable for tests and single-process applications. Values are deep-copied
on the way in and out so cached value sets can not be mutated by callers.
"""

import copy
import time
from datetime import timedelta
from typing import Any, Dict, Optional, Tuple, Union


def ttl_seconds(ttl: Optional[Union[int, float, timedelta]]) -> Optional[float]:
    """Normalize a TTL to seconds; ``None`` means no expiry."""
    if ttl is None:
        return None
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


class MemoryCache:
    """Dict-backed cache implementing the cache protocol."""

    def __init__(self, default_ttl: Optional[Union[int, timedelta]] = None):
        self.default_ttl = default_ttl
        self._data: Dict[str, Tuple[Any, Optional[float]]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Any:
        entry = self._data.get(key)
        if entry is None:
            self.misses += 1
            return None

        value, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            del self._data[key]
            self.misses += 1
            return None

        self.hits += 1
        return copy.deepcopy(value)

    def set(self, key: str, value: Any, ttl: Optional[Union[int, timedelta]] = None) -> bool:
        seconds = ttl_seconds(ttl if ttl is not None else self.default_ttl)
        if seconds is not None and seconds <= 0:
            # Zero TTL means "do not cache"
            self._data.pop(key, None)
            return False

        expires_at = time.monotonic() + seconds if seconds is not None else None
        self._data[key] = (copy.deepcopy(value), expires_at)
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> bool:
        self._data.clear()
        return True

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "entries": len(self._data),
            "hits": self.hits,
            "misses": self.misses,
        }
