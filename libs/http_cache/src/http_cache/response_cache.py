"""
Response-level caching keyed by inbound request identity.

The cache key is the request method plus the full request URL (path and
query string). Generated content is deterministic per identifier, so a write
race between concurrent identical requests is harmless: the last write wins.
Cache failures never fail a request; they are logged and treated as misses.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any

from redis.exceptions import RedisError

from .config import CacheConfig
from .manager import HTTPCacheManager

logger = logging.getLogger(__name__)


class ResponseCache:
    """Read-before-dispatch / write-after-success cache for JSON response bodies."""

    def __init__(self, manager: HTTPCacheManager, config: CacheConfig | None = None):
        """
        Bind the cache to a manager that owns the Redis connection.

        Args:
            manager: Manager providing the event-loop bound Redis client.
            config: Cache configuration; defaults to the manager's config.
        """
        self.manager = manager
        self.config = config or manager.config

    def build_key(self, method: str, url: str) -> str:
        """
        Create a stable Redis key for a request.

        Returns:
            str: ``response_cache:{METHOD}:{url}``, or
                 ``response_cache:{METHOD}:{sha256_hex}`` when the plain key
                 exceeds the configured max key length.
        """
        method = method.upper()
        key = f"response_cache:{method}:{url}"
        if len(key) > self.config.max_cache_key_length:
            key_hash = hashlib.sha256(url.encode()).hexdigest()
            return f"response_cache:{method}:{key_hash}"
        return key

    async def get(self, method: str, url: str) -> dict[str, Any] | None:
        """
        Look up a cached response body.

        Returns:
            The cached JSON body, or None on miss, when caching is disabled,
            on Redis errors and on corrupted entries.
        """
        client = self.manager.get_redis_client()
        if client is None:
            return None

        cache_key = self.build_key(method, url)
        try:
            cached_data = await client.get(cache_key)
        except RedisError as e:
            logger.warning(f"Cache read error for {cache_key}: {e}")
            return None

        if not cached_data:
            return None

        try:
            body = json.loads(cached_data)
        except json.JSONDecodeError as e:
            logger.warning(f"Cache decode error for key {cache_key}: {e}")
            return None

        logger.debug(f"Cache hit for {cache_key}")
        return body

    async def set(self, method: str, url: str, body: dict[str, Any]) -> None:
        """
        Store a response body under the request identity.

        Best-effort: Redis and serialization failures are logged and swallowed
        so a cache outage never turns a good response into an error.
        """
        client = self.manager.get_redis_client()
        if client is None:
            return

        cache_key = self.build_key(method, url)
        try:
            serialized = json.dumps(body, ensure_ascii=False)
            await client.setex(cache_key, self.config.ttl_response, serialized)
        except (RedisError, TypeError) as e:
            # RedisError: Redis connection/operation failures
            # TypeError: JSON serialization fails for non-serializable objects
            logger.warning(f"Cache write error for {cache_key}: {e}")
