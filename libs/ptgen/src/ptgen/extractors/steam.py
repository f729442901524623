"""Steam store apps, with the keylol chinese name lookup."""

import logging
import re

from bs4 import BeautifulSoup, Tag

from ptgen.constants import (
    NONE_EXIST_ERROR,
    STEAM_LANGUAGE_COLUMNS,
    STEAM_OS_NAMES,
    STEAM_PAGE_HEADERS,
)
from ptgen.extractors.base import BaseExtractor
from ptgen.fetcher import FETCH_ERRORS, parse_jsonp
from ptgen.models import MetadataRecord
from ptgen.normalize import clean_lines
from ptgen.parsing import html_to_bbcode, parse_page, select_attr, select_texts, text_with_breaks
from ptgen.sites import SiteTag

logger = logging.getLogger(__name__)

STORE_PAGE_URL = "https://store.steampowered.com/app/{sid}/?l=schinese"
LOCALIZATION_URL = "https://steamdb.keylol.com/app/{sid}/data.js?v=38"
DESCRIPTION_HEADING = "[h2]关于这款游戏[/h2]"

_HEADER_QUERY = re.compile(r"\?t=\d+$")
_LINKFILTER = re.compile(r"^.+?url=(.+)$")
_SCREENSHOT = re.compile(r"^(?:.+?url=)?(http.+?)\.[\dx]+(\..+?)(\?t=\d+)?$")


def _language_line(row: Tag) -> str:
    cells = row.find_all("td")
    name = cells[0].get_text().strip() if cells else ""
    supported = [
        column
        for index, column in enumerate(STEAM_LANGUAGE_COLUMNS, start=1)
        if index < len(cells) and "✔" in cells[index].get_text()
    ]
    return f"{name} ({', '.join(supported)})" if supported else name


def _sysreq_block(block: Tag) -> str:
    os_name = STEAM_OS_NAMES.get(block.get("data-os", ""), "")
    text = clean_lines(text_with_breaks(block), joiner="\n\n")
    content = "\n".join(part.strip() for part in text.split("[br]") if part.strip())
    return f"{os_name}\n{content}"


class SteamExtractor(BaseExtractor):
    """Extractor for ``store.steampowered.com`` apps."""

    site = SiteTag.STEAM

    async def populate(self, record: MetadataRecord) -> None:
        sid = record.sid
        page = await self.fetcher.get_page(
            STORE_PAGE_URL.format(sid=sid), headers=STEAM_PAGE_HEADERS, allow_redirects=False
        )
        # missing apps redirect to the store front page
        if 300 <= page.status < 400:
            record.fail(NONE_EXIST_ERROR)
            return

        record["steam_id"] = sid
        localization_task = self.fetcher.spawn(self._chinese_name(sid))
        soup = parse_page(page.text)

        cover = select_attr(soup, "img.game_header_image_full[src]", "src")
        if cover:
            record["cover"] = record["poster"] = _HEADER_QUERY.sub("", cover)

        name = soup.select_one("div.apphub_AppName") or soup.select_one('span[itemprop="name"]')
        record["name"] = name.get_text().strip() if name else ""

        details = soup.select_one("div.details_block")
        record["detail"] = (
            clean_lines(re.sub(r":[ \t\n]+", ": ", details.get_text())) if details else ""
        )
        record["tags"] = select_texts(soup, "a.app_tag")
        record["review"] = [
            re.sub(r"[ \t\n]{2,}", " ", row.get_text().replace("：", ":", 1)).strip()
            for row in soup.select("div.user_reviews_summary_row")
        ]

        linkbar = self._official_site(soup)
        if linkbar:
            record["linkbar"] = linkbar

        rows = soup.select("table.game_language_options tr:not(.unsupported)")
        record["language"] = [_language_line(row) for row in rows[1:4]]

        description = soup.select_one("div#game_area_description")
        record["descr"] = html_to_bbcode(description).replace(DESCRIPTION_HEADING, "").strip()

        record["screenshot"] = [
            _SCREENSHOT.sub(r"\1\2", anchor.get("href", ""))
            for anchor in soup.select("div.screenshot_holder a")
            if anchor.get("href")
        ]
        record["sysreq"] = [
            _sysreq_block(block)
            for block in soup.select("div.sysreq_contents > div.game_area_sys_req")
        ]

        name_chs = await localization_task
        if name_chs:
            record["name_chs"] = name_chs

    def _official_site(self, soup: BeautifulSoup) -> str:
        for anchor in soup.select("a.linkbar"):
            if "访问网站" in anchor.get_text() and anchor.get("href"):
                return _LINKFILTER.sub(r"\1", anchor["href"])
        return ""

    async def _chinese_name(self, sid: str) -> str | None:
        """Best-effort lookup of the localized name; None on any failure."""
        try:
            page = await self.fetcher.get_page(LOCALIZATION_URL.format(sid=sid))
        except FETCH_ERRORS as e:
            logger.warning(f"Steam localization lookup failed for {sid}: {e}")
            return None
        return parse_jsonp(page.text).get("name_cn") or None
