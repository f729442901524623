"""Tests for the Steam extractor."""

import aiohttp
import pytest
from ptgen.constants import NONE_EXIST_ERROR, STEAM_PAGE_HEADERS
from ptgen.extractors.steam import LOCALIZATION_URL, STORE_PAGE_URL, SteamExtractor
from ptgen.fetcher import Fetcher

STORE_URL = STORE_PAGE_URL.format(sid="620")
NAME_URL = LOCALIZATION_URL.format(sid="620")

STORE_HTML = """<html><body>
<img class="game_header_image_full" src="https://cdn.akamai.steamstatic.com/steam/apps/620/header.jpg?t=1610490805">
<div class="apphub_AppName">Portal 2</div>
<div class="details_block"><b>名称:</b> Portal 2<br>
<b>类型:</b>
 <a href="#">动作</a><br>
</div>
<a class="app_tag" href="#">解谜</a><a class="app_tag" href="#">合作</a>
<div class="user_reviews_summary_row"><div class="subtitle">全部评测：</div> <div class="summary"><span>好评如潮</span> <span>(250,000)</span></div></div>
<a class="linkbar" href="https://steamcommunity.com/app/620">查看社区中心</a>
<a class="linkbar" href="https://steamcommunity.com/linkfilter/?url=http://www.thinkwithportals.com/">访问网站</a>
<table class="game_language_options">
<tr><th></th><th>界面</th><th>完全音频</th><th>字幕</th></tr>
<tr><td>简体中文</td><td>✔</td><td></td><td>✔</td></tr>
<tr><td>英语</td><td>✔</td><td>✔</td><td>✔</td></tr>
<tr class="unsupported"><td>德语</td><td></td><td></td><td></td></tr>
</table>
<div id="game_area_description" class="game_area_description"><h2>关于这款游戏</h2>《传送门 2》延续了开创性的解谜玩法。<br><br><strong>单人</strong></div>
<div class="screenshot_holder"><a href="https://steamcommunity.com/linkfilter/?url=https://cdn.akamai.steamstatic.com/steam/apps/620/ss_1.1920x1080.jpg?t=1610490805">s</a></div>
<div class="screenshot_holder"><a href="https://cdn.akamai.steamstatic.com/steam/apps/620/ss_2.600x338.jpg">s</a></div>
<div class="sysreq_contents"><div class="game_area_sys_req active" data-os="win"><ul><strong>最低配置:</strong><br><ul class="bb_ul"><li><strong>操作系统:</strong> Windows 7<br></li><li><strong>处理器:</strong> 3.0 GHz<br></li></ul></ul></div></div>
</body></html>
"""

NAME_JSONP = 'proc({"name_cn": "传送门2"})'


async def _extract(session, sid: str = "620"):
    async with Fetcher("steam", session=session) as fetcher:
        return await SteamExtractor(fetcher).extract(sid)


class TestSteamExtractor:
    @pytest.mark.asyncio
    async def test_redirect_means_not_found(self, mock_session_factory):
        session = mock_session_factory({STORE_URL: (302, "")})
        record = await _extract(session)

        assert record.success is False
        assert record.error == NONE_EXIST_ERROR
        assert record.extra_fields() == {}

        kwargs = session.get.call_args_list[0].kwargs
        assert kwargs["allow_redirects"] is False
        assert kwargs["headers"] == STEAM_PAGE_HEADERS

    @pytest.mark.asyncio
    async def test_well_formed_app(self, mock_session_factory):
        session = mock_session_factory({STORE_URL: STORE_HTML, NAME_URL: NAME_JSONP})
        record = await _extract(session)

        assert record.success is True
        assert record["steam_id"] == "620"
        assert record["cover"] == "https://cdn.akamai.steamstatic.com/steam/apps/620/header.jpg"
        assert record["name"] == "Portal 2"
        assert record["name_chs"] == "传送门2"
        assert record["detail"] == "名称: Portal 2\n类型: 动作"
        assert record["tags"] == ["解谜", "合作"]
        assert record["review"] == ["全部评测: 好评如潮 (250,000)"]
        assert record["linkbar"] == "http://www.thinkwithportals.com/"
        assert record["language"] == ["简体中文 (界面, 字幕)", "英语 (界面, 完全音频, 字幕)"]
        assert record["descr"] == "《传送门 2》延续了开创性的解谜玩法。\n[b]单人[/b]"
        assert record["screenshot"] == [
            "https://cdn.akamai.steamstatic.com/steam/apps/620/ss_1.jpg",
            "https://cdn.akamai.steamstatic.com/steam/apps/620/ss_2.jpg",
        ]
        assert record["sysreq"] == ["Windows\n最低配置:\n操作系统: Windows 7\n处理器: 3.0 GHz"]

        lines = record.format.split("\n")
        assert lines[0] == (
            "[img]https://cdn.akamai.steamstatic.com/steam/apps/620/header.jpg[/img]"
        )
        assert "中文名: 传送门2" in lines
        assert "官方网站: http://www.thinkwithportals.com/" in lines
        assert "Steam页面: https://store.steampowered.com/app/620/" in lines
        assert "游戏语种: 简体中文 (界面, 字幕) | 英语 (界面, 完全音频, 字幕)" in lines
        assert "标签: 解谜 | 合作" in lines
        assert "【游戏截图】" in lines

    @pytest.mark.asyncio
    async def test_localization_failure_is_ignored(self, mock_session_factory):
        session = mock_session_factory(
            {STORE_URL: STORE_HTML, NAME_URL: aiohttp.ServerTimeoutError("timeout")}
        )
        record = await _extract(session)

        assert record.success is True
        assert "name_chs" not in record
        assert "中文名:" not in record.format

    @pytest.mark.asyncio
    async def test_localization_without_name(self, mock_session_factory):
        session = mock_session_factory({STORE_URL: STORE_HTML, NAME_URL: "proc({})"})
        record = await _extract(session)

        assert record.success is True
        assert "name_chs" not in record
