"""
Redis implementation of the document projection cache.
"""

import logging
from datetime import timedelta
from typing import Optional, Tuple

import redis.asyncio as redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from docservice.core.config import Settings
from docservice.core.errors import CacheDegradedError
from docservice.domains.documents.schemas import DocumentProjection
from docservice.infrastructure.cache.document_cache import DocumentCache

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "doc:"


def create_redis_client(settings: Settings) -> redis.Redis:
    """Клиент Redis по настройкам приложения"""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password or None,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        health_check_interval=30,
    )


class RedisDocumentCache(DocumentCache):
    """Кеш документов в Redis с фиксированным TTL"""

    def __init__(self, client: redis.Redis, ttl: timedelta, prefix: str = DEFAULT_PREFIX):
        self.client = client
        self.ttl = ttl
        self.prefix = prefix or DEFAULT_PREFIX

    def key(self, document_id: int) -> str:
        return f"{self.prefix}{document_id}"

    async def get(self, document_id: int) -> Tuple[Optional[DocumentProjection], bool]:
        cache_key = self.key(document_id)
        try:
            raw = await self.client.get(cache_key)
        except RedisError as e:
            raise CacheDegradedError("get", e) from e
        except UnicodeDecodeError as e:
            # клиент декодирует ответы сам, не-UTF-8 значение приходит исключением
            logger.warning(f"Dropping undecodable cache entry {cache_key}: {e}")
            await self._drop(cache_key)
            return None, False

        if raw is None:
            return None, False

        try:
            return DocumentProjection.model_validate_json(raw), True
        except ValidationError as e:
            # битая запись: удаляем и считаем промахом
            logger.warning(f"Dropping unreadable cache entry {cache_key}: {e}")
            await self._drop(cache_key)
            return None, False

    async def set(self, document_id: int, projection: DocumentProjection) -> None:
        payload = projection.model_dump_json(by_alias=True)
        try:
            await self.client.set(self.key(document_id), payload, ex=self.ttl)
        except RedisError as e:
            raise CacheDegradedError("set", e) from e

    async def delete(self, document_id: int) -> None:
        try:
            await self.client.delete(self.key(document_id))
        except RedisError as e:
            raise CacheDegradedError("delete", e) from e

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()

    async def _drop(self, cache_key: str) -> None:
        try:
            await self.client.delete(cache_key)
        except RedisError as e:
            logger.warning(f"Failed to drop cache entry {cache_key}: {e}")
