"""Top-level generation and search entry points."""

import logging

import aiohttp

from ptgen.exceptions import MissingSearchError, UnknownSourceError
from ptgen.extractors import get_extractor
from ptgen.fetcher import Fetcher
from ptgen.models import MetadataRecord, SearchRequest, SearchResultItem
from ptgen.resolver import resolve
from ptgen.search import get_searcher
from ptgen.sites import parse_site_tag

logger = logging.getLogger(__name__)


async def generate(
    url: str | None = None,
    site: str | None = None,
    sid: str | None = None,
    *,
    session: aiohttp.ClientSession | None = None,
) -> MetadataRecord:
    """Resolve the request and build the record of one subject.

    Args:
        url: Resource URL; takes precedence over ``site``/``sid``.
        site: Site tag, used together with ``sid``.
        sid: Subject id on ``site``.
        session: Optional session to issue upstream requests with.

    Returns:
        The record; ``success`` is False for missing or blocked subjects.

    Raises:
        MissingParametersError: Neither a resolvable url nor a site and sid.
        UnsupportedSiteError: ``site`` is not a known site tag.
    """
    resolution = resolve(url, site, sid)
    logger.info(f"Generating {resolution.site.value} record for {resolution.sid}")
    async with Fetcher(resolution.site.value, session=session) as fetcher:
        extractor = get_extractor(resolution.site)(fetcher)
        return await extractor.extract(resolution.sid)


async def search(
    query: str,
    source: str = "douban",
    *,
    session: aiohttp.ClientSession | None = None,
) -> list[SearchResultItem]:
    """Search ``source`` for ``query``.

    Raises:
        UnknownSourceError: ``source`` is not a known site tag.
        MissingSearchError: ``source`` has no search endpoint.
    """
    request = SearchRequest(query=query, source=source)
    tag = parse_site_tag(request.source)
    if tag is None:
        raise UnknownSourceError(request.source)

    searcher_class = get_searcher(tag)
    if searcher_class is None:
        raise MissingSearchError(request.source)

    logger.info(f"Searching {tag.value} for {request.query!r}")
    async with Fetcher(tag.value, session=session) as fetcher:
        return await searcher_class(fetcher).search(request.query)
