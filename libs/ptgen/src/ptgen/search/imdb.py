"""IMDb title suggestions."""

from urllib.parse import quote

from ptgen.models import SearchResultItem
from ptgen.search.base import BaseSearcher, optional
from ptgen.sites import SITE_URL_TEMPLATES, SiteTag

SUGGEST_URL = "https://v2.sg.media-imdb.com/suggestion/{initial}/{query}.json"


class ImdbSearcher(BaseSearcher):
    site = SiteTag.IMDB

    async def search(self, query: str) -> list[SearchResultItem]:
        query = query.lower()
        url = SUGGEST_URL.format(initial=quote(query[0]), query=quote(query))
        data = await self.fetcher.get_json(url)
        # suggestions also include names and companies
        return [
            SearchResultItem(
                year=optional(item.get("y")),
                subtype=optional(item.get("q")),
                title=item.get("l", ""),
                link=SITE_URL_TEMPLATES[SiteTag.IMDB].format(sid=item["id"]),
            )
            for item in (data or {}).get("d", [])
            if str(item.get("id", "")).startswith("tt")
        ]
