"""Bangumi subject search."""

from urllib.parse import quote

from ptgen.constants import BANGUMI_TYPE_NAMES
from ptgen.models import SearchResultItem
from ptgen.search.base import BaseSearcher, optional
from ptgen.sites import SiteTag

SEARCH_URL = "http://api.bgm.tv/search/subject/{query}"


class BangumiSearcher(BaseSearcher):
    site = SiteTag.BANGUMI

    async def search(self, query: str) -> list[SearchResultItem]:
        data = await self.fetcher.get_json(
            SEARCH_URL.format(query=quote(query)), params={"responseGroup": "large"}
        )
        results = []
        for item in (data or {}).get("list") or []:
            air_date = item.get("air_date") or ""
            results.append(
                SearchResultItem(
                    year=optional(air_date[:4]),
                    subtype=BANGUMI_TYPE_NAMES.get(item.get("type")),
                    title=item.get("name_cn") or item.get("name", ""),
                    subtitle=optional(item.get("name")),
                    link=item.get("url", ""),
                )
            )
        return results
