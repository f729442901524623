"""Indienova game database entries."""

import logging
import re

from bs4 import BeautifulSoup

from ptgen.constants import NONE_EXIST_ERROR
from ptgen.extractors.base import BaseExtractor
from ptgen.models import MetadataRecord
from ptgen.parsing import parse_page, select_attr, select_text
from ptgen.sites import SiteTag

logger = logging.getLogger(__name__)

NOT_FOUND_MARKER = "出现错误"
SHOW_ALL_TAG = "查看全部 +"


def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.strip().split("\n") if line.strip()]


class IndienovaExtractor(BaseExtractor):
    """Extractor for ``indienova.com`` game pages."""

    site = SiteTag.INDIENOVA

    async def populate(self, record: MetadataRecord) -> None:
        page = await self.fetcher.get_page(self.url_for(record.sid))
        if NOT_FOUND_MARKER in page.text:
            record.fail(NONE_EXIST_ERROR)
            return

        soup = parse_page(page.text)

        cover = select_attr(soup, "div.cover-image img", "src")
        if cover:
            record["cover"] = record["poster"] = cover

        title = soup.find("title")
        page_title = title.get_text() if title else ""
        record["chinese_title"] = page_title.split("|")[0].split("-")[0].strip()
        record["another_title"] = select_text(soup, "div.title-holder h1 small")
        record["english_title"] = select_text(soup, "div.title-holder h1 span")
        record["release_date"] = select_text(soup, "div.title-holder p.gamedb-release")

        links = {
            anchor.get_text().strip(): anchor.get("href", "")
            for anchor in soup.select("div#tabs-link a.gamedb-link")
        }
        if links:
            record["links"] = links

        record["intro"] = select_text(soup, "#tabs-intro div.bottommargin-sm")
        intro_detail = [
            re.sub(r"[ \n]+", " ", line.get_text()).replace(",", "/").strip()
            for line in soup.select("#tabs-intro p.single-line")
        ]
        if intro_detail:
            record["intro_detail"] = intro_detail

        article = soup.find("article")
        record["descr"] = (
            article.get_text().replace("……显示全部", "").strip() if article else record["intro"]
        )

        scores = [text.get_text() for text in soup.select("div#scores text")]
        if len(scores) >= 4:
            record["rate"] = f"{scores[0]}:{scores[1]} / {scores[2]}:{scores[3]}"

        companies = soup.select('div#tabs-devpub ul[class^="db-companies"]')
        record["dev"] = _lines(companies[0].get_text()) if companies else []
        record["pub"] = _lines(companies[1].get_text()) if len(companies) == 2 else []

        record["screenshot"] = [
            image["src"] for image in soup.select("li.slide img") if image.get("src")
        ]
        record["cat"] = self._parse_tags(soup)
        record["level"] = [
            image["src"]
            for image in soup.select('h4:-soup-contains("分级") + div.bottommargin-sm img')
            if image.get("src")
        ]
        record["price"] = self._parse_prices(soup)

    def _parse_tags(self, soup: BeautifulSoup) -> list[str]:
        tags_block = soup.select_one("div.indienova-tags.gamedb-tags")
        if tags_block is None:
            return []
        tags: list[str] = []
        for tag in _lines(tags_block.get_text()):
            if tag != SHOW_ALL_TAG and tag not in tags:
                tags.append(tag)
        return tags

    def _parse_prices(self, soup: BeautifulSoup) -> list[str]:
        prices = []
        for item in soup.select("ul.db-stores li"):
            # store, platform icons, price
            cells = item.select("a > div")
            store = cells[0].get_text().strip() if cells else ""
            price = cells[2].get_text().strip() if len(cells) > 2 else ""
            price = re.sub(r"[ \n]{2,}", " ", price, count=1)
            prices.append(f"{store}：{price}")
        return prices
