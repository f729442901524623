"""Upstream fetching for one request.

A Fetcher owns one aiohttp session and every auxiliary task spawned while
building a record. Leaving the context cancels tasks that are still pending
so that no upstream fetch outlives the request that started it.
"""

import asyncio
import json
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any

import aiohttp
from common.config import FetchConfig, get_settings
from http_cache.instance import http_cache_manager as _cache_manager

logger = logging.getLogger(__name__)

FETCH_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


@dataclass(frozen=True)
class Page:
    """Upstream response as seen by an extractor."""

    status: int
    url: str
    text: str

    def json(self) -> Any:
        return json.loads(self.text)


def parse_jsonp(text: str) -> dict[str, Any]:
    """Extract the JSON object wrapped in a JSONP callback; empty dict on failure."""
    body = text.replace("\n", "")
    start, end = body.find("("), body.rfind(")")
    if start == -1 or end <= start:
        logger.debug("Response is not a JSONP payload")
        return {}
    try:
        data = json.loads(body[start + 1 : end])
    except json.JSONDecodeError as e:
        logger.debug(f"Malformed JSONP payload: {e}")
        return {}
    return data if isinstance(data, dict) else {}


class Fetcher:
    """Async context manager issuing GET requests against one upstream site."""

    def __init__(
        self,
        service: str,
        session: aiohttp.ClientSession | None = None,
        config: FetchConfig | None = None,
    ) -> None:
        """Create a fetcher.

        Args:
            service: Upstream name, used for logging.
            session: Existing session to reuse; it is not closed on exit.
            config: Fetch settings, defaults to the application settings.
        """
        self.service = service
        self.config = config or get_settings().fetch
        self._session = session
        self._owns_session = session is None
        self._tasks: list[asyncio.Task[Any]] = []

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("Fetcher must be used as an async context manager")
        return self._session

    async def __aenter__(self) -> "Fetcher":
        if self._session is None:
            self._session = _cache_manager.get_aiohttp_session(
                self.service,
                timeout=aiohttp.ClientTimeout(total=self.config.request_timeout),
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept-Language": self.config.accept_language,
                },
            )
        return self

    async def __aexit__(self, *args: Any) -> None:
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.debug(f"Cancelled {len(pending)} pending {self.service} tasks")
        for task in self._tasks:
            # failures of tasks nobody awaited are retrieved here
            if task.done() and not task.cancelled() and task.exception() is not None:
                logger.debug(f"Unawaited {self.service} task failed: {task.exception()!r}")
        self._tasks.clear()

        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> "asyncio.Task[Any]":
        """Start an auxiliary fetch bound to this fetcher's lifetime."""
        task = asyncio.create_task(coro)
        self._tasks.append(task)
        return task

    async def get_page(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        allow_redirects: bool = True,
    ) -> Page:
        """GET ``url`` and return its status, final URL and decoded body."""
        logger.debug(f"Fetching {self.service} page: {url}")
        async with self.session.get(
            url, params=params, headers=headers, allow_redirects=allow_redirects
        ) as response:
            text = await response.text(errors="replace")
            return Page(status=response.status, url=str(response.url), text=text)

    async def get_json(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET ``url`` and decode the body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON.
        """
        page = await self.get_page(url, params=params, headers=headers)
        return page.json()
