"""Resolve a free-form URL or an explicit (site, sid) pair to a site and subject id."""

import logging

from ptgen.exceptions import MissingParametersError, UnsupportedSiteError
from ptgen.models import Resolution
from ptgen.sites import SITE_PATTERNS, parse_site_tag

logger = logging.getLogger(__name__)


def resolve_url(url: str) -> Resolution | None:
    """Match ``url`` against the pattern table in declared order.

    Args:
        url: Free-form resource URL.

    Returns:
        Resolution for the first matching site, or None when no pattern matches.

    Example:
        >>> resolve_url("https://movie.douban.com/subject/12345/")
        Resolution(site=<SiteTag.DOUBAN: 'douban'>, sid='12345')
    """
    for site, pattern in SITE_PATTERNS.items():
        match = pattern.search(url)
        if match:
            return Resolution(site=site, sid=match.group(1))

    logger.debug(f"No site pattern matches url: {url}")
    return None


def resolve_site(site: str, sid: str) -> Resolution | None:
    """Validate an explicit site tag; None when the tag is unknown."""
    tag = parse_site_tag(site)
    if tag is None:
        return None
    return Resolution(site=tag, sid=sid)


def resolve(
    url: str | None = None, site: str | None = None, sid: str | None = None
) -> Resolution:
    """Resolve either input shape; ``url`` takes precedence when both are given.

    Raises:
        MissingParametersError: Neither a resolvable url nor a site and sid.
        UnsupportedSiteError: ``site`` is not a known site tag.
    """
    if url:
        resolution = resolve_url(url)
    elif site and sid:
        resolution = resolve_site(site, sid)
        if resolution is None:
            raise UnsupportedSiteError(site)
    else:
        resolution = None

    if resolution is None:
        raise MissingParametersError()
    return resolution
