"""Base class for suggestion search endpoints."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ptgen.fetcher import Fetcher
from ptgen.models import SearchResultItem
from ptgen.sites import SiteTag


def optional(value: Any) -> str | None:
    """Upstream value as a string, None when it is missing or empty."""
    if value is None or value == "":
        return None
    return str(value)


class BaseSearcher(ABC):
    """Queries one site's suggestion endpoint."""

    site: ClassVar[SiteTag]

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher

    @abstractmethod
    async def search(self, query: str) -> list[SearchResultItem]:
        """Candidates for ``query`` in upstream order."""
