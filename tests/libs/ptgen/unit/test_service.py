"""Tests for the generate and search entry points."""

import pytest
from pydantic import ValidationError
from ptgen.constants import (
    MISSING_PARAMETERS_ERROR,
    UNKNOWN_SITE_ERROR,
    UNKNOWN_SOURCE_ERROR,
)
from ptgen.exceptions import (
    MissingParametersError,
    MissingSearchError,
    RequestError,
    UnknownSourceError,
    UnsupportedSiteError,
)
from ptgen.service import generate, search

BANGUMI_URL = "https://bgm.tv/subject/253"
BANGUMI_HTML = """<div id="bangumiInfo"><ul id="infobox"><li>导演: 渡辺信一郎</li></ul></div>
<div id="subject_summary">2071年。</div>"""


class TestGenerateErrors:
    @pytest.mark.asyncio
    async def test_no_parameters(self):
        with pytest.raises(MissingParametersError) as exc_info:
            await generate()
        assert str(exc_info.value) == MISSING_PARAMETERS_ERROR

    @pytest.mark.asyncio
    async def test_site_without_sid(self):
        with pytest.raises(MissingParametersError):
            await generate(site="douban")

    @pytest.mark.asyncio
    async def test_unresolvable_url(self):
        with pytest.raises(MissingParametersError):
            await generate(url="https://example.com/movie/1")

    @pytest.mark.asyncio
    async def test_unknown_site(self):
        with pytest.raises(UnsupportedSiteError) as exc_info:
            await generate(site="netflix", sid="1")
        assert str(exc_info.value) == UNKNOWN_SITE_ERROR
        assert exc_info.value.site == "netflix"

    def test_request_errors_share_a_base(self):
        assert issubclass(MissingParametersError, RequestError)
        assert issubclass(UnsupportedSiteError, RequestError)


class TestGenerate:
    @pytest.mark.asyncio
    async def test_site_and_sid(self, mock_session_factory):
        session = mock_session_factory({BANGUMI_URL: BANGUMI_HTML, f"{BANGUMI_URL}/characters": ""})

        record = await generate(site="bangumi", sid="253", session=session)

        assert record.success is True
        assert record.sid == "253"
        assert "[b]Story: [/b]\n\n2071年。" in record.format
        session.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_url_takes_precedence(self, mock_session_factory):
        session = mock_session_factory({BANGUMI_URL: BANGUMI_HTML, f"{BANGUMI_URL}/characters": ""})

        record = await generate(
            url="https://bgm.tv/subject/253", site="douban", sid="1292052", session=session
        )

        assert record.site.value == "bangumi"
        assert record.sid == "253"
        requested = [call.args[0] for call in session.get.call_args_list]
        assert all("douban" not in url for url in requested)

    @pytest.mark.asyncio
    async def test_not_found_is_a_record(self, mock_session_factory):
        session = mock_session_factory({BANGUMI_URL: "呜咕，出错了"})

        record = await generate(url=BANGUMI_URL, session=session)

        assert record.success is False
        assert record.to_dict()["error"] == "The corresponding resource does not exist."


class TestSearchErrors:
    @pytest.mark.asyncio
    async def test_unknown_source(self):
        with pytest.raises(UnknownSourceError) as exc_info:
            await search("x", source="netflix")
        assert str(exc_info.value) == UNKNOWN_SOURCE_ERROR

    @pytest.mark.asyncio
    async def test_source_without_search(self):
        with pytest.raises(MissingSearchError) as exc_info:
            await search("portal", source="steam")
        assert str(exc_info.value) == "Miss search function for `source`: steam."

    @pytest.mark.asyncio
    async def test_empty_query(self):
        with pytest.raises(ValidationError):
            await search("")


class TestSearch:
    @pytest.mark.asyncio
    async def test_default_source_is_douban(self, mock_session_factory):
        session = mock_session_factory(
            {"https://movie.douban.com/j/subject_suggest": '[{"id": "1", "title": "T"}]'}
        )

        results = await search("T", session=session)

        assert [item.link for item in results] == ["https://movie.douban.com/subject/1/"]
