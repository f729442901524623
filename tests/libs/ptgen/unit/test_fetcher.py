"""Tests for the per-request upstream fetcher."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from common.config import FetchConfig
from ptgen.fetcher import Fetcher, Page, parse_jsonp


class TestParseJsonp:
    def test_callback_payload(self):
        text = 'imdb.rating.run({"resource": {"rating": 9.3}})'
        assert parse_jsonp(text) == {"resource": {"rating": 9.3}}

    def test_newlines_and_trailing_semicolon(self):
        text = 'proc({\n"name_cn": "半衰期"\n});\n'
        assert parse_jsonp(text) == {"name_cn": "半衰期"}

    def test_not_jsonp(self):
        assert parse_jsonp("<html>blocked</html>") == {}

    def test_malformed_body(self):
        assert parse_jsonp("cb({oops})") == {}

    def test_non_object_body(self):
        assert parse_jsonp("cb([1, 2])") == {}


class TestPage:
    def test_json(self):
        page = Page(status=200, url="https://x", text='{"a": 1}')
        assert page.json() == {"a": 1}


class TestFetcher:
    @pytest.mark.asyncio
    async def test_get_page(self, mock_session_factory):
        session = mock_session_factory({"https://x/a": (404, "gone")})
        async with Fetcher("test", session=session) as fetcher:
            page = await fetcher.get_page("https://x/a", allow_redirects=False)

        assert page == Page(status=404, url="https://x/a", text="gone")
        _, kwargs = session.get.call_args
        assert kwargs["allow_redirects"] is False
        # injected sessions belong to the caller
        session.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_json_with_params(self, mock_session_factory):
        session = mock_session_factory({"https://x/j": '[{"id": 1}]'})
        async with Fetcher("test", session=session) as fetcher:
            data = await fetcher.get_json("https://x/j", params={"q": "a"})

        assert data == [{"id": 1}]
        _, kwargs = session.get.call_args
        assert kwargs["params"] == {"q": "a"}

    @pytest.mark.asyncio
    async def test_owned_session_created_and_closed(self):
        mock_session = MagicMock()
        mock_session.close = AsyncMock()
        config = FetchConfig(request_timeout=5.0, user_agent="UA", accept_language="en")

        with patch("ptgen.fetcher._cache_manager") as mock_cache_manager:
            mock_cache_manager.get_aiohttp_session.return_value = mock_session
            async with Fetcher("douban", config=config) as fetcher:
                assert fetcher.session is mock_session

        args, kwargs = mock_cache_manager.get_aiohttp_session.call_args
        assert args == ("douban",)
        assert kwargs["headers"] == {"User-Agent": "UA", "Accept-Language": "en"}
        assert kwargs["timeout"].total == 5.0
        mock_session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_pending_tasks_cancelled_on_exit(self, mock_session_factory):
        started = asyncio.Event()

        async def slow() -> None:
            started.set()
            await asyncio.sleep(60)

        async with Fetcher("test", session=mock_session_factory({})) as fetcher:
            task = fetcher.spawn(slow())
            await started.wait()

        assert task.cancelled()

    @pytest.mark.asyncio
    async def test_failed_unawaited_task_retrieved_on_exit(self, mock_session_factory, caplog):
        caplog.set_level(logging.DEBUG, logger="ptgen.fetcher")
        session = mock_session_factory({})

        async with Fetcher("test", session=session) as fetcher:
            task = fetcher.spawn(fetcher.get_page("https://x/awards"))
            await asyncio.wait([task])

        assert task.done() and not task.cancelled()
        assert "Unawaited test task failed: ClientConnectionError" in caplog.text

    @pytest.mark.asyncio
    async def test_network_errors_propagate(self, mock_session_factory):
        import aiohttp

        async with Fetcher("test", session=mock_session_factory({})) as fetcher:
            with pytest.raises(aiohttp.ClientConnectionError):
                await fetcher.get_page("https://unrouted")

    def test_session_requires_context(self):
        with pytest.raises(RuntimeError):
            Fetcher("test", config=FetchConfig()).session
