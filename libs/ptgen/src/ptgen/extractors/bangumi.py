"""Bangumi (bgm.tv) subjects."""

import logging
import re

from bs4 import BeautifulSoup, Tag

from ptgen.constants import NONE_EXIST_ERROR
from ptgen.extractors.base import BaseExtractor
from ptgen.models import MetadataRecord
from ptgen.normalize import format_rating
from ptgen.parsing import parse_page, select_attr, select_text, select_texts
from ptgen.sites import SiteTag

logger = logging.getLogger(__name__)

NOT_FOUND_MARKER = "呜咕，出错了"

_COVER_SIZE = re.compile(r"/cover/[lcmsg]/")


def _character_line(block: Tag) -> str:
    h2 = block.find("h2")
    name = ""
    if isinstance(h2, Tag):
        name = select_text(h2, "span.tip", strip=False) or select_text(h2, "a", strip=False)
    name = name.replace("/", "", 1).strip()

    voices = []
    for paragraph in block.select("div.clearit > p"):
        voice = select_text(paragraph, "small") or select_text(paragraph, "a")
        voices.append(voice)
    return f"{name}: {'，'.join(voices)}"


class BangumiExtractor(BaseExtractor):
    """Extractor for ``bgm.tv`` subjects and their characters page."""

    site = SiteTag.BANGUMI

    async def populate(self, record: MetadataRecord) -> None:
        link = self.url_for(record.sid)

        page = await self.fetcher.get_page(link)
        if NOT_FOUND_MARKER in page.text:
            record.fail(NONE_EXIST_ERROR)
            return

        record["alt"] = link
        characters_task = self.fetcher.spawn(self.fetcher.get_page(f"{link}/characters"))
        soup = parse_page(page.text)

        cover = select_attr(soup, "div#bangumiInfo a.thickbox.cover", "href")
        if cover:
            if cover.startswith("//"):
                cover = f"https:{cover}"
            record["cover"] = record["poster"] = _COVER_SIZE.sub("/cover/l/", cover)

        record["story"] = select_text(soup, "div#subject_summary")
        record["staff"] = select_texts(soup, "div#bangumiInfo ul#infobox li")

        votes = select_text(soup, 'span[property="v:votes"]')
        average = select_text(soup, 'div.global_score > span[property="v:average"]')
        record["bangumi_votes"] = votes
        record["bangumi_rating_average"] = average
        rating = format_rating(average or None, votes or None)
        if rating:
            record["bangumi_rating"] = rating

        record["tags"] = select_texts(
            soup, "#subject_detail > div.subject_tag_section > div > a > span"
        )

        characters_page = await characters_task
        record["cast"] = self._parse_cast(parse_page(characters_page.text))

    def _parse_cast(self, soup: BeautifulSoup) -> list[str]:
        return [
            _character_line(block)
            for block in soup.select("div#columnInSubjectA > div.light_odd > div.clearit")
        ]
