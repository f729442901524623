"""Exceptions raised by the generation core.

Not-found and blocked upstream conditions are not exceptions: extractors
return them as unsuccessful records. These exceptions cover the request
shapes that never reach an extractor, plus unexpected upstream payloads.
"""

from ptgen.constants import (
    MISSING_PARAMETERS_ERROR,
    MISSING_SEARCH_ERROR,
    UNKNOWN_SITE_ERROR,
    UNKNOWN_SOURCE_ERROR,
)


class PtGenError(Exception):
    """Base exception for ptgen errors."""


class RequestError(PtGenError):
    """A request that cannot be dispatched; the message is public."""


class MissingParametersError(RequestError):
    """Raised when neither a resolvable url nor a (site, sid) pair is given."""

    def __init__(self) -> None:
        super().__init__(MISSING_PARAMETERS_ERROR)


class UnsupportedSiteError(RequestError):
    """Raised when an explicit site tag is not in the pattern table."""

    def __init__(self, site: str) -> None:
        super().__init__(UNKNOWN_SITE_ERROR)
        self.site = site


class UnknownSourceError(RequestError):
    """Raised when a search source is not a known site tag."""

    def __init__(self, source: str) -> None:
        super().__init__(UNKNOWN_SOURCE_ERROR)
        self.source = source


class MissingSearchError(RequestError):
    """Raised when a known site tag has no search endpoint."""

    def __init__(self, source: str) -> None:
        super().__init__(MISSING_SEARCH_ERROR.format(source=source))
        self.source = source


class UpstreamFormatError(PtGenError):
    """Raised when an upstream payload does not have the expected shape."""
