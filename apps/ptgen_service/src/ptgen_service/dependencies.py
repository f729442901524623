"""Request-scoped dependencies for the generate routes."""

import logging

from fastapi import Request
from http_cache.response_cache import ResponseCache

logger = logging.getLogger(__name__)


async def get_response_cache(request: Request) -> ResponseCache:
    """Edge cache keyed by request identity, attached to ``app.state`` at startup.

    Raises:
        RuntimeError: The app was served without running its lifespan.
    """
    cache = getattr(request.app.state, "response_cache", None)
    if cache is None:
        logger.error("Generate route hit before the lifespan attached a response cache")
        raise RuntimeError("Response cache is not attached to the application")
    return cache
