"""Douban subject suggestions."""

from ptgen.models import SearchResultItem
from ptgen.search.base import BaseSearcher, optional
from ptgen.sites import SITE_URL_TEMPLATES, SiteTag

SUGGEST_URL = "https://movie.douban.com/j/subject_suggest"


class DoubanSearcher(BaseSearcher):
    site = SiteTag.DOUBAN

    async def search(self, query: str) -> list[SearchResultItem]:
        data = await self.fetcher.get_json(SUGGEST_URL, params={"q": query})
        return [
            SearchResultItem(
                year=optional(item.get("year")),
                subtype=optional(item.get("type")),
                title=item.get("title", ""),
                subtitle=optional(item.get("sub_title")),
                link=SITE_URL_TEMPLATES[SiteTag.DOUBAN].format(sid=item.get("id", "")),
            )
            for item in data or []
        ]
