"""Application settings shared by the ptgen library, CLI and service."""

import os
from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .fetch_config import FetchConfig
from .service_config import ServiceConfig


class Environment(str, Enum):
    """Deployment stage selected with ``APP_ENV``."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


def get_environment() -> Environment:
    """Read ``APP_ENV`` case-insensitively; unset means development.

    Raises:
        ValueError: If APP_ENV names no known stage.
    """
    raw = (os.getenv("APP_ENV") or Environment.DEVELOPMENT.value).lower()
    try:
        return Environment(raw)
    except ValueError:
        choices = ", ".join(stage.value for stage in Environment)
        raise ValueError(f"Invalid APP_ENV value '{raw}'. Must be one of: {choices}") from None


class Settings(BaseSettings):
    """Top-level settings.

    Sections are filled from double-underscore variables such as
    ``SERVICE__LOG_LEVEL=DEBUG`` or ``FETCH__REQUEST_TIMEOUT=10``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Field(default_factory=get_environment)
    debug: bool = Field(
        default=False, description="Attach debug payloads and enable auto-reload"
    )

    service: ServiceConfig = Field(default_factory=ServiceConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)

    def model_post_init(self, __context) -> None:
        """Development turns debug on unless DEBUG is set; production forces it off."""
        if self.environment == Environment.PRODUCTION:
            self.debug = False
        elif self.environment == Environment.DEVELOPMENT and os.getenv("DEBUG") is None:
            self.debug = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
