"""
Unit tests for cache adapters.
"""

import json
from datetime import timedelta

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from neo_persistent_config.cache.memory import MemoryCache, ttl_seconds
from neo_persistent_config.cache.redis_cache import RedisCache
from neo_persistent_config.core.exceptions import CacheError
from neo_persistent_config.entities.protocols import CacheProtocol


class TestMemoryCache:
    """Test the in-process cache."""

    def test_implements_protocol(self):
        assert isinstance(MemoryCache(), CacheProtocol)

    def test_set_and_get(self):
        cache = MemoryCache()

        assert cache.set("values", {"a": "1"}, 60)
        assert cache.get("values") == {"a": "1"}
        assert cache.get("missing") is None

    def test_values_are_copied(self):
        """Test callers can not mutate cached values."""
        cache = MemoryCache()
        values = {"a": "1"}
        cache.set("values", values)

        values["a"] = "changed"
        cache.get("values")["a"] = "changed"

        assert cache.get("values") == {"a": "1"}

    def test_expiry(self, mocker):
        """Test entries expire after their TTL."""
        clock = mocker.patch("neo_persistent_config.cache.memory.time.monotonic", return_value=100.0)
        cache = MemoryCache()
        cache.set("values", {"a": "1"}, timedelta(seconds=10))

        clock.return_value = 109.0
        assert cache.get("values") == {"a": "1"}

        clock.return_value = 110.0
        assert cache.get("values") is None
        assert cache.get_cache_stats() == {"entries": 0, "hits": 1, "misses": 1}

    def test_zero_ttl_does_not_cache(self):
        cache = MemoryCache()
        cache.set("values", {"a": "1"})

        assert not cache.set("values", {"a": "2"}, 0)
        assert cache.get("values") is None

    def test_default_ttl(self, mocker):
        clock = mocker.patch("neo_persistent_config.cache.memory.time.monotonic", return_value=0.0)
        cache = MemoryCache(default_ttl=5)
        cache.set("values", 1)

        clock.return_value = 5.0
        assert not cache.has("values")

    def test_delete_and_clear(self):
        cache = MemoryCache()
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.delete("a")
        assert not cache.delete("a")
        cache.clear()

        assert cache.get("b") is None

    @pytest.mark.parametrize("ttl,expected", [
        (None, None),
        (60, 60.0),
        (timedelta(minutes=1), 60.0),
    ])
    def test_ttl_seconds(self, ttl, expected):
        assert ttl_seconds(ttl) == expected


class TestRedisCache:
    """Test the Redis adapter with a mocked client."""

    @pytest.fixture
    def client(self, mocker):
        return mocker.MagicMock()

    @pytest.fixture
    def cache(self, client):
        return RedisCache(client=client, key_prefix="test:")

    def test_requires_client_or_url(self):
        with pytest.raises(CacheError):
            RedisCache()

    def test_from_url(self, mocker):
        from_url = mocker.patch("neo_persistent_config.cache.redis_cache.Redis.from_url")

        cache = RedisCache(url="redis://localhost:6379/0")

        assert cache.client is from_url.return_value
        from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True, health_check_interval=30)

    def test_get_decodes_json(self, cache, client):
        client.get.return_value = json.dumps({"a": "1"})

        assert cache.get("values") == {"a": "1"}
        client.get.assert_called_once_with("test:values")

    def test_get_miss(self, cache, client):
        client.get.return_value = None

        assert cache.get("values") is None

    def test_get_undecodable(self, cache, client):
        client.get.return_value = b"{not json"

        assert cache.get("values") is None

    def test_get_error_degrades(self, cache, client):
        """Test a Redis outage reads as a cache miss."""
        client.get.side_effect = RedisConnectionError("down")

        assert cache.get("values") is None

    def test_set_with_ttl(self, cache, client):
        assert cache.set("values", {"a": "1"}, timedelta(hours=1))

        client.setex.assert_called_once_with("test:values", 3600, '{"a": "1"}')

    def test_set_without_ttl(self, cache, client):
        assert cache.set("values", [1])

        client.set.assert_called_once_with("test:values", "[1]")

    def test_set_zero_ttl_deletes(self, cache, client):
        assert not cache.set("values", [1], 0)

        client.delete.assert_called_once_with("test:values")

    def test_set_error_degrades(self, cache, client):
        client.setex.side_effect = RedisConnectionError("down")

        assert not cache.set("values", [1], 10)

    def test_delete(self, cache, client):
        client.delete.return_value = 1

        assert cache.delete("values")

    def test_delete_error_raises(self, cache, client):
        """Test failed deletes are reported."""
        client.delete.side_effect = RedisConnectionError("down")

        with pytest.raises(CacheError):
            cache.delete("values")

    def test_health_check(self, cache, client):
        client.ping.return_value = True
        assert cache.health_check()

        client.ping.side_effect = RedisConnectionError("down")
        assert not cache.health_check()
