from docservice.infrastructure.cache.document_cache import DocumentCache
from docservice.infrastructure.cache.redis_cache import RedisDocumentCache, create_redis_client

__all__ = [
    "DocumentCache",
    "RedisDocumentCache",
    "create_redis_client"
]
