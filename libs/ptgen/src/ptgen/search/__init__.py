"""Suggestion search for the sites that expose one."""

from ptgen.search.bangumi import BangumiSearcher
from ptgen.search.base import BaseSearcher
from ptgen.search.douban import DoubanSearcher
from ptgen.search.imdb import ImdbSearcher
from ptgen.sites import SiteTag

SEARCHERS: dict[SiteTag, type[BaseSearcher]] = {
    SiteTag.DOUBAN: DoubanSearcher,
    SiteTag.IMDB: ImdbSearcher,
    SiteTag.BANGUMI: BangumiSearcher,
}


def get_searcher(site: SiteTag) -> type[BaseSearcher] | None:
    """Searcher class for ``site``, None when the site has no search endpoint."""
    return SEARCHERS.get(site)


__all__ = [
    "BangumiSearcher",
    "BaseSearcher",
    "DoubanSearcher",
    "ImdbSearcher",
    "SEARCHERS",
    "get_searcher",
]
