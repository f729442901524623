"""Per-site extractors and their registry."""

from ptgen.extractors.bangumi import BangumiExtractor
from ptgen.extractors.base import BaseExtractor
from ptgen.extractors.douban import DoubanExtractor
from ptgen.extractors.epic import EpicExtractor
from ptgen.extractors.imdb import ImdbExtractor
from ptgen.extractors.indienova import IndienovaExtractor
from ptgen.extractors.steam import SteamExtractor
from ptgen.sites import SiteTag

EXTRACTORS: dict[SiteTag, type[BaseExtractor]] = {
    extractor.site: extractor
    for extractor in (
        DoubanExtractor,
        ImdbExtractor,
        BangumiExtractor,
        SteamExtractor,
        IndienovaExtractor,
        EpicExtractor,
    )
}

if set(EXTRACTORS) != set(SiteTag):
    raise RuntimeError("Every site tag needs an extractor")


def get_extractor(site: SiteTag) -> type[BaseExtractor]:
    """Extractor class registered for ``site``."""
    return EXTRACTORS[site]


__all__ = [
    "BangumiExtractor",
    "BaseExtractor",
    "DoubanExtractor",
    "EXTRACTORS",
    "EpicExtractor",
    "ImdbExtractor",
    "IndienovaExtractor",
    "SteamExtractor",
    "get_extractor",
]
