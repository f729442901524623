"""Site tags, identifier patterns and canonical upstream URLs.

Every pattern has exactly one capturing group, which yields the subject id;
any other group must be non-capturing. Patterns are tried in declaration
order and the first match wins.
"""

import re
from enum import Enum
from types import MappingProxyType


class SiteTag(str, Enum):
    """Supported upstream sources."""

    DOUBAN = "douban"
    IMDB = "imdb"
    BANGUMI = "bangumi"
    STEAM = "steam"
    INDIENOVA = "indienova"
    EPIC = "epic"


SITE_PATTERNS = MappingProxyType(
    {
        SiteTag.DOUBAN: re.compile(
            r"(?:https?://)?(?:(?:movie|www)\.)?douban\.com/(?:subject|movie)/(\d+)/?"
        ),
        SiteTag.IMDB: re.compile(r"(?:https?://)?(?:www\.)?imdb\.com/title/(tt\d+)/?"),
        SiteTag.BANGUMI: re.compile(
            r"(?:https?://)?(?:bgm\.tv|bangumi\.tv|chii\.in)/subject/(\d+)/?"
        ),
        SiteTag.STEAM: re.compile(
            r"(?:https?://)?(?:store\.)?steam(?:powered|community)\.com/app/(\d+)/?"
        ),
        SiteTag.INDIENOVA: re.compile(r"(?:https?://)?indienova\.com/game/(\S+)"),
        SiteTag.EPIC: re.compile(
            r"(?:https?://)?www\.epicgames\.com/store/[a-zA-Z-]+/product/(\S+)/\S?"
        ),
    }
)

SITE_URL_TEMPLATES = MappingProxyType(
    {
        SiteTag.DOUBAN: "https://movie.douban.com/subject/{sid}/",
        SiteTag.IMDB: "https://www.imdb.com/title/{sid}/",
        SiteTag.BANGUMI: "https://bgm.tv/subject/{sid}",
        SiteTag.STEAM: "https://store.steampowered.com/app/{sid}/",
        SiteTag.INDIENOVA: "https://indienova.com/game/{sid}",
        SiteTag.EPIC: "https://store-content.ak.epicgames.com/api/zh-CN/content/products/{sid}",
    }
)

for _tag, _pattern in SITE_PATTERNS.items():
    if _pattern.groups != 1:
        raise RuntimeError(f"Pattern for {_tag.value} must have exactly one capture group")

if set(SITE_PATTERNS) != set(SiteTag) or set(SITE_URL_TEMPLATES) != set(SiteTag):
    raise RuntimeError("Every site tag needs a pattern and an upstream URL template")


def parse_site_tag(value: str | None) -> SiteTag | None:
    """Return the SiteTag for ``value``, or None when it is not a known tag."""
    if not value:
        return None
    try:
        return SiteTag(value)
    except ValueError:
        return None
