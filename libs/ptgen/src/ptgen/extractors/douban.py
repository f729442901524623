"""Douban movie and TV subjects."""

import logging
import re

from bs4 import BeautifulSoup

from ptgen.constants import DOUBAN_BLOCKED_ERROR, NONE_EXIST_ERROR
from ptgen.extractors.base import BaseExtractor
from ptgen.fetcher import FETCH_ERRORS, parse_jsonp
from ptgen.models import MetadataRecord
from ptgen.normalize import (
    clean_lines,
    format_rating,
    sort_aliases,
    sort_by_date,
    split_list,
    strip_markup,
)
from ptgen.parsing import anchor_text, ld_json, parse_page, select_attr, select_texts
from ptgen.sites import SiteTag

logger = logging.getLogger(__name__)

NOT_FOUND_MARKER = "你想访问的页面不存在"
BLOCKED_MARKER = "检测到有异常请求"
NO_INTRODUCTION = "暂无相关剧情介绍"

IMDB_RATINGS_URL = (
    "https://p.media-imdb.com/static-content/documents/v1/title/{imdb_id}"
    "/ratings%3Fjsonp=imdb.rating.run:imdb.api.title.ratings/data.json"
)

_IMDB_LINK = re.compile(r"tt\d+")
_POSTER_SIZE = re.compile(r"s(_ratio_poster|pic)")

_INTRODUCTION_SELECTORS = (
    "#link-report span.all.hidden",
    "#link-report-intra span.all.hidden",
    '#link-report [property="v:summary"]',
    '#link-report-intra [property="v:summary"]',
)


class DoubanExtractor(BaseExtractor):
    """Extractor for ``movie.douban.com`` subjects with IMDb rating enrichment."""

    site = SiteTag.DOUBAN

    async def populate(self, record: MetadataRecord) -> None:
        sid = record.sid
        link = self.url_for(sid)
        awards_task = self.fetcher.spawn(self.fetcher.get_page(f"{link}awards"))

        page = await self.fetcher.get_page(link)
        if NOT_FOUND_MARKER in page.text:
            record.fail(NONE_EXIST_ERROR)
            return
        if BLOCKED_MARKER in page.text:
            record.fail(DOUBAN_BLOCKED_ERROR)
            return

        soup = parse_page(page.text)
        record["douban_link"] = link

        imdb_task = None
        imdb_id = self._imdb_id(soup)
        if imdb_id:
            record["imdb_id"] = imdb_id
            record["imdb_link"] = f"https://www.imdb.com/title/{imdb_id}/"
            imdb_task = self.fetcher.spawn(self._imdb_rating(imdb_id))

        self._parse_titles(soup, record)
        self._parse_info(soup, record)
        self._parse_ld_json(soup, record)

        record["tags"] = select_texts(soup, 'div.tags-body > a[href^="/tag"]')

        awards_page = await awards_task
        article = parse_page(awards_page.text).select_one("#content > div > div.article")
        record["awards"] = strip_markup(article.decode_contents()) if article else ""

        if imdb_task is not None:
            record.update(await imdb_task)

    def _imdb_id(self, soup: BeautifulSoup) -> str | None:
        href = select_attr(soup, "div#info a[href*='://www.imdb.com/title/tt']", "href")
        match = _IMDB_LINK.search(href) or _IMDB_LINK.search(anchor_text(soup, "IMDb"))
        return match.group(0) if match else None

    async def _imdb_rating(self, imdb_id: str) -> dict[str, str]:
        """Best-effort IMDb rating lookup; any failure yields no fields."""
        try:
            page = await self.fetcher.get_page(IMDB_RATINGS_URL.format(imdb_id=imdb_id))
        except FETCH_ERRORS as e:
            logger.warning(f"IMDb rating lookup failed for {imdb_id}: {e}")
            return {}

        resource = parse_jsonp(page.text).get("resource")
        if not isinstance(resource, dict):
            logger.warning(f"IMDb rating payload for {imdb_id} has no resource")
            return {}

        average = resource.get("rating")
        votes = resource.get("ratingCount")
        fields = {
            "imdb_rating_average": average if average is not None else 0,
            "imdb_votes": votes if votes is not None else 0,
        }
        rating = format_rating(average, votes)
        if rating:
            fields["imdb_rating"] = rating
        return fields

    def _parse_titles(self, soup: BeautifulSoup, record: MetadataRecord) -> None:
        title_tag = soup.find("title")
        chinese_title = title_tag.get_text().replace("(豆瓣)", "").strip() if title_tag else ""
        reviewed = soup.select_one('#content h1 > span[property="v:itemreviewed"]')
        foreign_title = (
            reviewed.get_text().replace(chinese_title, "", 1).strip() if reviewed else ""
        )
        aka = sort_aliases(anchor_text(soup, "又名"))

        record["chinese_title"] = chinese_title
        record["foreign_title"] = foreign_title
        record["aka"] = aka

        if foreign_title:
            trans_title = [chinese_title, *aka]
            this_title = [foreign_title]
        else:
            trans_title = list(aka)
            this_title = [chinese_title]
        record["trans_title"] = [title for title in trans_title if title]
        record["this_title"] = [title for title in this_title if title]

        year = soup.select_one("#content > h1 > span.year")
        record["year"] = year.get_text()[1:5] if year else ""

    def _parse_info(self, soup: BeautifulSoup, record: MetadataRecord) -> None:
        record["region"] = split_list(anchor_text(soup, "制片国家/地区"))
        record["genre"] = select_texts(soup, '#info span[property="v:genre"]')
        record["language"] = split_list(anchor_text(soup, "语言"))
        record["playdate"] = sort_by_date(
            select_texts(soup, '#info span[property="v:initialReleaseDate"]')
        )
        record["episodes"] = anchor_text(soup, "集数")

        duration = anchor_text(soup, "单集片长")
        if not duration:
            runtime = soup.select_one('#info span[property="v:runtime"]')
            duration = runtime.get_text().strip() if runtime else ""
        record["duration"] = duration

        introduction = ""
        for selector in _INTRODUCTION_SELECTORS:
            element = soup.select_one(selector)
            if element is not None:
                introduction = clean_lines(element.get_text("\n"))
                if introduction:
                    break
        record["introduction"] = introduction or NO_INTRODUCTION

    def _parse_ld_json(self, soup: BeautifulSoup, record: MetadataRecord) -> None:
        data = ld_json(soup)

        rating = data.get("aggregateRating") or {}
        average = rating.get("ratingValue")
        votes = rating.get("ratingCount")
        record["douban_rating_average"] = average if average not in (None, "") else 0
        record["douban_votes"] = votes if votes not in (None, "") else 0
        douban_rating = format_rating(average, votes)
        if douban_rating:
            record["douban_rating"] = douban_rating

        image = data.get("image")
        if image:
            poster = _POSTER_SIZE.sub(r"l\1", image).replace("img3", "img1")
            record["poster"] = poster
            record["cover"] = poster

        people_fields = (("director", "director"), ("writer", "author"), ("cast", "actor"))
        for field, source in people_fields:
            people = data.get(source) or []
            if isinstance(people, dict):
                people = [people]
            record[field] = people
