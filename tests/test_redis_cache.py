"""
Unit tests for the Redis document cache.
"""

import json
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError, TimeoutError as RedisTimeoutError

from conftest import FakeDocumentRepository, make_document
from docservice.core.config import Settings
from docservice.core.errors import CacheDegradedError
from docservice.domains.documents.mapper import to_projection
from docservice.domains.documents.services import DocumentService
from docservice.infrastructure.cache.redis_cache import RedisDocumentCache, create_redis_client


class TestRedisDocumentCache:
    """Test cases for RedisDocumentCache."""

    @pytest.fixture
    def client(self):
        return AsyncMock()

    @pytest.fixture
    def cache(self, client):
        return RedisDocumentCache(client, timedelta(minutes=15), "doc:")

    @pytest.fixture
    def projection(self):
        return to_projection(make_document(title="cached", groups=[(2, "a")], document_id=5))

    def test_key_uses_prefix(self, cache):
        assert cache.key(42) == "doc:42"

    def test_empty_prefix_falls_back_to_default(self, client):
        cache = RedisDocumentCache(client, timedelta(seconds=10), "")

        assert cache.key(1) == "doc:1"

    @pytest.mark.asyncio
    async def test_get_miss(self, cache, client):
        client.get.return_value = None

        result = await cache.get(5)

        assert result == (None, False)
        client.get.assert_awaited_once_with("doc:5")

    @pytest.mark.asyncio
    async def test_get_hit(self, cache, client, projection):
        client.get.return_value = projection.model_dump_json(by_alias=True)

        cached, found = await cache.get(5)

        assert found is True
        assert cached == projection

    @pytest.mark.asyncio
    async def test_get_corrupt_entry_is_dropped(self, cache, client):
        client.get.return_value = "{not json"

        result = await cache.get(5)

        assert result == (None, False)
        client.delete.assert_awaited_once_with("doc:5")

    @pytest.mark.asyncio
    async def test_get_wrong_shape_is_dropped(self, cache, client):
        client.get.return_value = json.dumps({"unexpected": True})

        result = await cache.get(5)

        assert result == (None, False)
        client.delete.assert_awaited_once_with("doc:5")

    @pytest.mark.asyncio
    async def test_get_non_utf8_entry_is_dropped(self, cache, client):
        client.get.side_effect = UnicodeDecodeError("utf-8", b"\xff\xfe garbage", 0, 1, "invalid start byte")

        result = await cache.get(5)

        assert result == (None, False)
        client.delete.assert_awaited_once_with("doc:5")

    @pytest.mark.asyncio
    async def test_service_reads_store_when_entry_is_not_utf8(self, cache, client):
        repository = FakeDocumentRepository()
        created = await repository.insert(make_document(title="stored", groups=[(1, "a")]))
        client.get.side_effect = UnicodeDecodeError("utf-8", b"\xff\xfe garbage", 0, 1, "invalid start byte")
        service = DocumentService(repository, cache)

        projection, cache_hit = await service.get_projection(created.id)

        assert cache_hit is False
        assert projection.title == "stored"
        client.set.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_corrupt_entry_drop_failure_still_misses(self, cache, client):
        client.get.return_value = "{not json"
        client.delete.side_effect = RedisConnectionError("down")

        assert await cache.get(5) == (None, False)

    @pytest.mark.asyncio
    async def test_get_transport_error_raises_degraded(self, cache, client):
        client.get.side_effect = RedisConnectionError("down")

        with pytest.raises(CacheDegradedError) as exc_info:
            await cache.get(5)

        assert exc_info.value.operation == "get"

    @pytest.mark.asyncio
    async def test_set_serializes_with_ttl(self, cache, client, projection):
        await cache.set(5, projection)

        client.set.assert_awaited_once()
        args, kwargs = client.set.call_args
        assert args[0] == "doc:5"
        assert json.loads(args[1]) == {
            "id": 5,
            "title": "cached",
            "level1": [{"sort": 2, "name": "a", "level2": [{"key": "a-key", "value": "a-value"}]}],
        }
        assert kwargs["ex"] == timedelta(minutes=15)

    @pytest.mark.asyncio
    async def test_set_error_raises_degraded(self, cache, client, projection):
        client.set.side_effect = RedisTimeoutError("slow")

        with pytest.raises(CacheDegradedError) as exc_info:
            await cache.set(5, projection)

        assert exc_info.value.operation == "set"

    @pytest.mark.asyncio
    async def test_delete(self, cache, client):
        await cache.delete(5)

        client.delete.assert_awaited_once_with("doc:5")

    @pytest.mark.asyncio
    async def test_delete_error_raises_degraded(self, cache, client):
        client.delete.side_effect = RedisConnectionError("down")

        with pytest.raises(CacheDegradedError):
            await cache.delete(5)

    @pytest.mark.asyncio
    async def test_ping(self, cache, client):
        client.ping.return_value = True

        assert await cache.ping() is True

    @pytest.mark.asyncio
    async def test_ping_failure(self, cache, client):
        client.ping.side_effect = RedisConnectionError("down")

        assert await cache.ping() is False

    @pytest.mark.asyncio
    async def test_close(self, cache, client):
        await cache.close()

        client.aclose.assert_awaited_once()


class TestCreateRedisClient:
    """Test cases for create_redis_client."""

    def test_uses_settings(self):
        settings = Settings(redis_addr="cache.local:6380", redis_db=2, redis_password="secret")

        client = create_redis_client(settings)

        kwargs = client.connection_pool.connection_kwargs
        assert kwargs["host"] == "cache.local"
        assert kwargs["port"] == 6380
        assert kwargs["db"] == 2
        assert kwargs["password"] == "secret"
