"""Configuration package for ptgen."""

from .fetch_config import FetchConfig
from .service_config import ServiceConfig
from .settings import Settings, get_settings

__all__ = ["FetchConfig", "ServiceConfig", "Settings", "get_settings"]
