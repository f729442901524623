"""IMDb titles."""

import logging
import re
from typing import Any

from bs4 import BeautifulSoup

from ptgen.constants import NONE_EXIST_ERROR
from ptgen.extractors.base import BaseExtractor
from ptgen.models import MetadataRecord
from ptgen.normalize import format_rating, sort_by_date
from ptgen.parsing import ld_json, number_from, parse_page
from ptgen.sites import SiteTag

logger = logging.getLogger(__name__)

NOT_FOUND_MARKER = "404 Error - IMDb"

COPIED_FIELDS = (
    "@type",
    "name",
    "genre",
    "contentRating",
    "datePublished",
    "description",
    "duration",
)
PERSON_FIELDS = ("actor", "director", "creator")

_DETAIL_NOISE = re.compile(r"See more »|Show more on {3}IMDbPro »")


def normalize_imdb_id(sid: str) -> str:
    """``tt`` prefixed id with the numeric part left-padded to 7 digits.

    Example:
        >>> normalize_imdb_id("111161")
        'tt0111161'
    """
    if sid.startswith("tt"):
        sid = sid[2:]
    return "tt" + sid.zfill(7)


def _persons(raw: Any) -> list[dict[str, Any]]:
    if not raw:
        return []
    if not isinstance(raw, list):
        raw = [raw]
    return [
        {key: value for key, value in item.items() if key != "@type"}
        for item in raw
        if isinstance(item, dict) and item.get("@type") == "Person"
    ]


class ImdbExtractor(BaseExtractor):
    """Extractor for ``www.imdb.com`` titles and their release info page."""

    site = SiteTag.IMDB

    async def populate(self, record: MetadataRecord) -> None:
        imdb_id = normalize_imdb_id(record.sid)
        link = self.url_for(imdb_id)

        page = await self.fetcher.get_page(link)
        if page.status == 404 or NOT_FOUND_MARKER in page.text:
            record.fail(NONE_EXIST_ERROR)
            return

        release_task = self.fetcher.spawn(self.fetcher.get_page(f"{link}releaseinfo"))
        soup = parse_page(page.text)

        record["imdb_id"] = imdb_id
        record["imdb_link"] = link
        self._parse_ld_json(soup, record)
        self._parse_review_bar(soup, record)
        record["details"] = self._parse_details(soup)

        release_page = await release_task
        self._parse_release_info(parse_page(release_page.text), record)

    def _parse_ld_json(self, soup: BeautifulSoup, record: MetadataRecord) -> None:
        data = ld_json(soup)
        for field in COPIED_FIELDS:
            if field in data:
                record[field] = data[field]

        if data.get("image"):
            record["poster"] = data["image"]
        if data.get("datePublished"):
            record["year"] = str(data["datePublished"])[:4]

        for field in PERSON_FIELDS:
            persons = _persons(data.get(field))
            if persons:
                record[f"{field}s"] = persons

        keywords = data.get("keywords") or ""
        if isinstance(keywords, str):
            keywords = keywords.split(",")
        record["keywords"] = [keyword for keyword in keywords if keyword]

        rating = data.get("aggregateRating") or {}
        average = rating.get("ratingValue")
        votes = rating.get("ratingCount")
        record["imdb_votes"] = votes or 0
        record["imdb_rating_average"] = average or 0
        imdb_rating = format_rating(average, votes)
        if imdb_rating:
            record["imdb_rating"] = imdb_rating

    def _parse_review_bar(self, soup: BeautifulSoup, record: MetadataRecord) -> None:
        for item in soup.select("div.titleReviewBar > div.titleReviewBarItem"):
            text = item.get_text()
            if "Metascore" in text:
                score = item.select_one("div.metacriticScore")
                if score is not None:
                    record["metascore"] = score.get_text().strip()
            elif "Reviews" in text:
                reviews = item.select_one("a[href^=reviews]")
                critic = item.select_one("a[href^=externalreviews]")
                if reviews is not None:
                    record["reviews"] = number_from(reviews.get_text())
                if critic is not None:
                    record["critic"] = number_from(critic.get_text())
            elif "Popularity" in text:
                record["popularity"] = number_from(text)

    def _parse_details(self, soup: BeautifulSoup) -> dict[str, str]:
        details: dict[str, str] = {}
        for block in soup.select("div#titleDetails div.txt-block"):
            raw = _DETAIL_NOISE.sub("", block.get_text().replace("\n", " ")).strip()
            if not raw:
                continue
            key = re.split(r": ?", raw, maxsplit=1)[0]
            value = raw.replace(f"{key}:", "", 1)
            details[key] = re.sub(r" {2,}", " ", value).strip()
        return details

    def _parse_release_info(self, soup: BeautifulSoup, record: MetadataRecord) -> None:
        release_date = []
        for row in soup.select("tr.release-date-item"):
            country = row.select_one("td.release-date-item__country-name")
            date = row.select_one("td.release-date-item__date")
            if country is not None and date is not None:
                release_date.append(
                    {"country": country.get_text().strip(), "date": date.get_text().strip()}
                )
        record["release_date"] = sort_by_date(release_date, key=lambda item: item["date"])

        aka = []
        for row in soup.select("tr.aka-item"):
            country = row.select_one("td.aka-item__name")
            title = row.select_one("td.aka-item__title")
            if country is not None and title is not None:
                aka.append(
                    {"country": country.get_text().strip(), "title": title.get_text().strip()}
                )
        record["aka"] = aka
