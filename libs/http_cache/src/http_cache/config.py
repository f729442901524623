"""
Settings for the response cache that sits in front of ptgen generation.

Every variable is read with the ``CACHE_`` prefix, so ``CACHE_REDIS_URL``
points all service workers at the same Redis database.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidTTLError

TWO_DAYS = 2 * 24 * 60 * 60


class CacheConfig(BaseSettings):
    """Backend, lifetime and Redis pool options of the response cache."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CACHE_",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Serve and store cached responses")
    storage_type: Literal["redis"] = Field(
        default="redis", description="Storage backend holding cached responses"
    )
    redis_url: str | None = Field(
        default="redis://localhost:6379/0", description="Redis connection URL"
    )

    ttl_response: int = Field(
        default=TWO_DAYS,
        description="Seconds a successful generate or search answer stays cached",
    )
    max_cache_key_length: int = Field(
        default=200,
        gt=0,
        description="Longer keys are replaced by the SHA256 of the request URL",
    )

    # Redis pool
    redis_max_connections: int = Field(default=50, ge=1)
    redis_socket_keepalive: bool = Field(default=True)
    redis_socket_connect_timeout: int = Field(
        default=5, description="Seconds before giving up on an unreachable Redis"
    )
    redis_socket_timeout: int = Field(
        default=10, description="Seconds allowed for one Redis read or write"
    )
    redis_retry_on_timeout: bool = Field(default=True)
    redis_health_check_interval: int = Field(
        default=30, description="Seconds between connection health checks, 0 disables"
    )

    @field_validator("ttl_response")
    @classmethod
    def validate_ttl(cls, value: int) -> int:
        if value < 0:
            raise InvalidTTLError("ttl_response", value)
        return value


@lru_cache
def get_cache_config() -> CacheConfig:
    """Process-wide CacheConfig built from ``CACHE_*`` environment variables.

    Tests call ``get_cache_config.cache_clear()`` after patching the environment.
    """
    return CacheConfig()
