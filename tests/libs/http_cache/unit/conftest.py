"""Fixtures for http_cache unit tests."""

from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest
from http_cache.config import CacheConfig, get_cache_config
from http_cache.manager import HTTPCacheManager
from http_cache.response_cache import ResponseCache


@pytest.fixture(autouse=True)
def reset_cache_config() -> Generator[None, None, None]:
    """Clear the cached CacheConfig so environment patches take effect per test."""
    get_cache_config.cache_clear()
    yield
    get_cache_config.cache_clear()


@pytest.fixture
def mock_redis() -> AsyncMock:
    """Async Redis client double with an empty store."""
    client = AsyncMock()
    client.get.return_value = None
    return client


@pytest.fixture
def response_cache(mock_redis: AsyncMock) -> ResponseCache:
    """ResponseCache whose manager hands out ``mock_redis``."""
    manager = HTTPCacheManager(CacheConfig(enabled=True))
    manager.get_redis_client = lambda: mock_redis  # type: ignore[method-assign]
    return ResponseCache(manager)
