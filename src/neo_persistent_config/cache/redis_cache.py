"""
Redis cache adapter for persisted config values.

Shares the persisted value set between processes. Reads and writes degrade to
cache misses when Redis is unavailable; deletes fail loudly so a reset can
not leave a stale value set behind.
"""
import json
import logging
from datetime import timedelta
from typing import Any, Optional, Union

from redis import Redis
from redis.exceptions import RedisError

from ..core.exceptions import CacheError
from .memory import ttl_seconds

logger = logging.getLogger(__name__)


class RedisCache:
    """Cache protocol implementation backed by a synchronous Redis client."""

    def __init__(
        self,
        client: Optional[Redis] = None,
        url: Optional[str] = None,
        key_prefix: str = "neo:",
        default_ttl: Optional[Union[int, timedelta]] = None
    ):
        if client is None:
            if not url:
                raise CacheError("Either a Redis client or a Redis URL must be provided")
            client = Redis.from_url(url, decode_responses=True, health_check_interval=30)

        self.client = client
        self.key_prefix = key_prefix
        self.default_ttl = default_ttl

    def _make_key(self, key: str) -> str:
        """Create a namespaced cache key."""
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> Any:
        full_key = self._make_key(key)
        try:
            value = self.client.get(full_key)
        except RedisError as e:
            logger.error(f"Cache get error for key {full_key}: {e}")
            return None

        if value is None:
            return None

        if isinstance(value, bytes):
            value = value.decode('utf-8')

        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning(f"Discarding undecodable cache entry {full_key}")
            return None

    def set(self, key: str, value: Any, ttl: Optional[Union[int, timedelta]] = None) -> bool:
        full_key = self._make_key(key)
        seconds = ttl_seconds(ttl if ttl is not None else self.default_ttl)

        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error(f"Cache serialization error for key {full_key}: {e}")
            return False

        try:
            if seconds is not None and seconds > 0:
                self.client.setex(full_key, max(1, int(seconds)), payload)
            elif seconds is None:
                self.client.set(full_key, payload)
            else:
                self.client.delete(full_key)
                return False
            return True
        except RedisError as e:
            logger.error(f"Cache set error for key {full_key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        full_key = self._make_key(key)
        try:
            return self.client.delete(full_key) > 0
        except RedisError as e:
            raise CacheError(f"Failed to delete cache key {full_key}: {e}")

    def health_check(self) -> bool:
        """Check cache service health."""
        try:
            return bool(self.client.ping())
        except RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            return False
