"""PT-Gen Service - FastAPI application generating PT descriptions.

Resolves a resource url or a (site, sid) pair to a metadata record, renders
its BBCode description and answers with the public JSON envelope. Successful
answers are cached in Redis by request identity.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from common.config import get_settings
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from http_cache.instance import http_cache_manager
from http_cache.response_cache import ResponseCache

from .routes import generate

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.service.log_level),
    format=settings.service.log_format,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Attach the response cache to ``app.state`` and release Redis on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        Control to the server while the app is running.
    """
    app.state.response_cache = ResponseCache(http_cache_manager)
    logger.info(f"ptgen service {settings.service.api_version} started")
    try:
        yield
    finally:
        try:
            await http_cache_manager.close_async()
        except Exception:
            logger.exception("Failed to close the response cache client")
        logger.info("ptgen service stopped")


app = FastAPI(
    title=settings.service.api_title,
    description=settings.service.api_description,
    version=settings.service.api_version,
    lifespan=lifespan,
)

# Known FastAPI/Starlette typing issue with _MiddlewareFactory
# See: https://github.com/fastapi/fastapi/discussions/10968
app.add_middleware(
    CORSMiddleware,  # ty: ignore[invalid-argument-type]
    allow_origins=settings.service.allowed_origins,
    allow_credentials=True,
    allow_methods=settings.service.allowed_methods,
    allow_headers=settings.service.allowed_headers,
)


@app.get("/health")
async def health_check() -> dict[str, Any]:
    """Liveness probe reporting the version and response cache configuration."""
    return {
        "status": "healthy",
        "service": "ptgen-service",
        "version": settings.service.api_version,
        "timestamp": datetime.now(UTC).isoformat(),
        "cache": http_cache_manager.get_stats(),
    }


app.include_router(generate.router, tags=["generate"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ptgen_service.main:app",
        host=settings.service.ptgen_service_host,
        port=settings.service.ptgen_service_port,
        log_level=settings.service.log_level.lower(),
        reload=settings.debug,
    )
