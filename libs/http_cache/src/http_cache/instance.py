"""
This module creates and exports a singleton instance of the HTTPCacheManager.

A single shared manager keeps one Redis connection pool per event loop for
the whole process.
"""

from .config import CacheConfig, get_cache_config
from .manager import HTTPCacheManager

# Get cache configuration from environment variables
_cache_config: CacheConfig = get_cache_config()

# Create the singleton instance of the HTTPCacheManager
http_cache_manager: HTTPCacheManager = HTTPCacheManager(_cache_config)
