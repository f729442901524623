"""Base class shared by the per-site extractors."""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from ptgen.constants import NONE_EXIST_ERROR
from ptgen.fetcher import Fetcher
from ptgen.formatter import TEMPLATES, render_lines
from ptgen.models import MetadataRecord
from ptgen.sites import SITE_URL_TEMPLATES, SiteTag

logger = logging.getLogger(__name__)


class BaseExtractor(ABC):
    """Builds one MetadataRecord for one site.

    Subclasses implement ``populate``, which fills the record in place and
    calls ``record.fail`` for not-found and blocked upstream conditions.
    Any other failure propagates to the caller.
    """

    site: ClassVar[SiteTag]

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher

    def url_for(self, sid: str) -> str:
        """Canonical upstream URL of ``sid``."""
        return SITE_URL_TEMPLATES[self.site].format(sid=sid)

    async def extract(self, sid: str) -> MetadataRecord:
        """Fetch, parse and render the record of ``sid``."""
        record = MetadataRecord(site=self.site, sid=sid)
        await self.populate(record)

        if record.error is not None:
            logger.info(f"{self.site.value} {sid}: {record.error}")
            return record

        formatted = self.render(record)
        if not formatted:
            return record.fail(NONE_EXIST_ERROR)
        return record.finish(formatted)

    @abstractmethod
    async def populate(self, record: MetadataRecord) -> None:
        """Fill ``record`` with site-specific fields."""

    def render(self, record: MetadataRecord) -> str:
        return render_lines(record, TEMPLATES[self.site])
