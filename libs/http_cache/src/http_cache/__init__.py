"""HTTP session and response caching infrastructure for ptgen."""

from .config import CacheConfig
from .manager import HTTPCacheManager

__all__ = ["CacheConfig", "HTTPCacheManager"]
