"""
Owner of the network clients shared by one service process.

Upstream fetches get a fresh aiohttp session per request; those responses
are never cached. The Redis client backing the response cache is created
lazily and rebound whenever it is requested from a different event loop,
since redis.asyncio connections cannot cross loops.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
from redis.asyncio import Redis as AsyncRedis

from .config import CacheConfig
from .exceptions import StorageConfigurationError

logger = logging.getLogger(__name__)


class HTTPCacheManager:
    """Hands out upstream sessions and the event-loop bound Redis client."""

    def __init__(self, config: CacheConfig):
        """
        Validate the configured backend without connecting to it.

        Parameters:
            config (CacheConfig): Response cache settings.

        Raises:
            StorageConfigurationError: If caching is enabled with an unknown backend.
        """
        self.config = config
        self._async_redis_client: AsyncRedis | None = None
        self._redis_event_loop: asyncio.AbstractEventLoop | None = None

        if config.enabled:
            self._validate_storage()

    def _validate_storage(self) -> None:
        if self.config.storage_type != "redis":
            raise StorageConfigurationError(self.config.storage_type)

        if not self.config.redis_url:
            logger.warning("Redis storage selected without a URL; serving uncached")
            return
        logger.info(f"Response cache backed by Redis at {self.config.redis_url}")

    def _connect_redis(self) -> AsyncRedis:
        return AsyncRedis.from_url(
            self.config.redis_url,
            decode_responses=True,
            max_connections=self.config.redis_max_connections,
            socket_keepalive=self.config.redis_socket_keepalive,
            socket_connect_timeout=self.config.redis_socket_connect_timeout,
            socket_timeout=self.config.redis_socket_timeout,
            retry_on_timeout=self.config.redis_retry_on_timeout,
            health_check_interval=self.config.redis_health_check_interval,
        )

    def get_redis_client(self) -> AsyncRedis | None:
        """
        Return the Redis client for the running event loop.

        Returns:
            The client, or None when caching is disabled, no URL is set or
            no event loop is running.
        """
        if not self.config.enabled or not self.config.redis_url:
            return None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return None

        if self._async_redis_client is not None and self._redis_event_loop is loop:
            return self._async_redis_client

        stale = self._async_redis_client
        if stale is not None:
            # the previous loop may be gone; close in the background
            loop.create_task(stale.aclose()).add_done_callback(
                lambda task: logger.debug(f"Closed stale Redis client: {task.exception()}")
            )

        self._async_redis_client = self._connect_redis()
        self._redis_event_loop = loop
        logger.debug(
            f"Redis client bound to event loop {id(loop)} "
            f"(max_connections={self.config.redis_max_connections})"
        )
        return self._async_redis_client

    def get_aiohttp_session(self, service: str, **session_kwargs: Any) -> aiohttp.ClientSession:
        """
        Open a session for fetches against one upstream site.

        Parameters:
            service (str): Upstream site name, for logging.
            **session_kwargs: Forwarded to aiohttp.ClientSession.

        Returns:
            aiohttp.ClientSession: Owned and closed by the caller.
        """
        logger.debug(f"Opening upstream session for {service}")
        return aiohttp.ClientSession(**session_kwargs)

    async def close_async(self) -> None:
        """Close the Redis client; close errors are logged, never raised."""
        client = self._async_redis_client
        self._async_redis_client = None
        self._redis_event_loop = None
        if client is None:
            return
        try:
            await client.aclose()
        except Exception as e:
            logger.warning(f"Error closing Redis client: {e}")

    def get_stats(self) -> dict[str, Any]:
        """Configuration summary reported by the health endpoint."""
        if not self.config.enabled:
            return {"enabled": False}
        return {
            "enabled": True,
            "storage_type": self.config.storage_type,
            "redis_url": self.config.redis_url,
            "ttl_response": self.config.ttl_response,
        }
