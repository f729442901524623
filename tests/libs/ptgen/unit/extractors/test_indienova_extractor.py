"""Tests for the indienova extractor."""

import pytest
from ptgen.constants import NONE_EXIST_ERROR
from ptgen.extractors.indienova import IndienovaExtractor
from ptgen.fetcher import Fetcher

GAME_URL = "https://indienova.com/game/the-legend-of-zelda"

GAME_HTML = """<html><head><title>塞尔达传说 - Zelda | indienova GameDB 游戏库</title></head><body>
<div class="cover-image"><img src="https://img.indienova.com/cover.jpg"></div>
<div class="title-holder">
  <h1><span>The Legend of Zelda</span> <small>塞尔达</small></h1>
  <p class="gamedb-release">2017-03-03</p>
</div>
<div id="tabs-intro">
  <div class="bottommargin-sm">一款开放世界冒险游戏。</div>
  <p class="single-line">平台: Switch,Wii U</p>
  <p class="single-line">引擎:
    自研</p>
</div>
<article>探索海拉鲁的广阔大地。……显示全部</article>
<div id="tabs-link"><a class="gamedb-link" href="https://zelda.com">官网</a></div>
<div id="scores"><svg><text>评分</text><text>8.5</text><text>评测</text><text>10</text></svg></div>
<div id="tabs-devpub">
  <ul class="db-companies first"><li>Nintendo EPD</li></ul>
  <ul class="db-companies"><li>Nintendo</li></ul>
</div>
<ul><li class="slide"><img src="https://img.indienova.com/s1.jpg"></li></ul>
<div class="indienova-tags gamedb-tags">
  <a>冒险</a>
  <a>开放世界</a>
  <a>冒险</a>
  <a>查看全部 +</a>
</div>
<h4>分级</h4>
<div class="bottommargin-sm"><img src="https://img.indienova.com/cero.png"></div>
<ul class="db-stores"><li><a href="#"><div>Nintendo eShop</div><div>icons</div><div>¥ 429   </div></a></li></ul>
</body></html>
"""


async def _extract(session, sid: str = "the-legend-of-zelda"):
    async with Fetcher("indienova", session=session) as fetcher:
        return await IndienovaExtractor(fetcher).extract(sid)


class TestIndienovaExtractor:
    @pytest.mark.asyncio
    async def test_not_found(self, mock_session_factory):
        session = mock_session_factory({GAME_URL: "<h1>出现错误</h1>"})
        record = await _extract(session)

        assert record.success is False
        assert record.error == NONE_EXIST_ERROR
        assert record.extra_fields() == {}

    @pytest.mark.asyncio
    async def test_well_formed_game(self, mock_session_factory):
        session = mock_session_factory({GAME_URL: GAME_HTML})
        record = await _extract(session)

        assert record.success is True
        assert record["cover"] == "https://img.indienova.com/cover.jpg"
        assert record["chinese_title"] == "塞尔达传说"
        assert record["english_title"] == "The Legend of Zelda"
        assert record["another_title"] == "塞尔达"
        assert record["release_date"] == "2017-03-03"
        assert record["links"] == {"官网": "https://zelda.com"}
        assert record["intro"] == "一款开放世界冒险游戏。"
        assert record["intro_detail"] == ["平台: Switch/Wii U", "引擎: 自研"]
        assert record["descr"] == "探索海拉鲁的广阔大地。"
        assert record["rate"] == "评分:8.5 / 评测:10"
        assert record["dev"] == ["Nintendo EPD"]
        assert record["pub"] == ["Nintendo"]
        assert record["screenshot"] == ["https://img.indienova.com/s1.jpg"]
        assert record["cat"] == ["冒险", "开放世界"]
        assert record["level"] == ["https://img.indienova.com/cero.png"]
        assert record["price"] == ["Nintendo eShop：¥ 429"]

        lines = record.format.split("\n")
        assert "中文名称：塞尔达传说" in lines
        assert "评分：评分:8.5 / 评测:10" in lines
        assert "标签：冒险 | 开放世界" in lines
        assert "链接地址：[url=https://zelda.com]官网[/url]" in lines
        assert "价格信息：Nintendo eShop：¥ 429" in lines
        assert record.format.endswith("【游戏评级】\n\n[img]https://img.indienova.com/cero.png[/img]")

    @pytest.mark.asyncio
    async def test_sparse_page(self, mock_session_factory):
        html = "<html><head><title>无名 | indienova</title></head><body></body></html>"
        session = mock_session_factory({GAME_URL: html})
        record = await _extract(session)

        assert record.success is True
        assert "links" not in record
        assert "intro_detail" not in record
        assert "rate" not in record
        assert record["descr"] == ""
        assert record.format == "【基本信息】\n\n中文名称：无名"
