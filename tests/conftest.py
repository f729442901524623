"""
Root test configuration for all tests.

Provides aiohttp session mocks routed by URL so extractor tests never touch
the network, and resets cached settings between tests.
"""

from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from common.config.settings import get_settings

Route = str | tuple[int, str] | BaseException


def create_mock_response(status: int, text: str, url: str) -> MagicMock:
    """Create an aiohttp-style response mock with ``status``, ``url`` and ``text()``."""
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.url = url
    mock_response.text = AsyncMock(return_value=text)
    return mock_response


def create_mock_session(routes: dict[str, Route]) -> MagicMock:
    """
    Create an aiohttp-style session mock whose `.get()` is routed by exact URL.

    Parameters:
        routes: Maps a URL to a body (status 200), a ``(status, body)`` tuple,
            or an exception raised when the response is entered. Unknown URLs
            raise ``aiohttp.ClientConnectionError``.

    Returns:
        MagicMock: A mock session; ``session.get.call_args_list`` records calls.
    """

    def _get(url: str, **kwargs: Any) -> MagicMock:
        route = routes.get(url, aiohttp.ClientConnectionError(f"no route for {url}"))
        mock_cm = MagicMock()
        if isinstance(route, BaseException):
            mock_cm.__aenter__ = AsyncMock(side_effect=route)
        else:
            status, text = route if isinstance(route, tuple) else (200, route)
            mock_cm.__aenter__ = AsyncMock(
                return_value=create_mock_response(status, text, url)
            )
        mock_cm.__aexit__ = AsyncMock(return_value=None)
        return mock_cm

    mock_session = MagicMock()
    mock_session.get = MagicMock(side_effect=_get)
    mock_session.close = AsyncMock()
    return mock_session


@pytest.fixture
def mock_session_factory() -> Callable[[dict[str, Route]], MagicMock]:
    """Provide ``create_mock_session`` to tests."""
    return create_mock_session


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Clear the cached Settings so environment patches take effect per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
