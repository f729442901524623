"""ptgen: canonical media metadata and BBCode descriptions from hosting sites.

This library contains the generation core:
- Site tag pattern table and identifier resolution
- Per-site extractors (douban, imdb, bangumi, steam, indienova, epic)
- Suggestion search for douban, imdb and bangumi
- Deterministic BBCode rendering of metadata records
"""

from ptgen.models import MetadataRecord, Resolution, SearchResultItem
from ptgen.service import generate, search
from ptgen.sites import SiteTag

__all__ = [
    "MetadataRecord",
    "Resolution",
    "SearchResultItem",
    "SiteTag",
    "generate",
    "search",
]
