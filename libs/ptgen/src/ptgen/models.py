"""Pydantic models for resolution results, metadata records and search results."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ptgen.sites import SiteTag


class Resolution(BaseModel):
    """Target site and raw subject id for one generation request."""

    model_config = ConfigDict(frozen=True)

    site: SiteTag
    sid: str


class MetadataRecord(BaseModel):
    """Canonical metadata record built by one site extractor.

    Only ``site``, ``sid``, ``success``, ``format`` and ``error`` are declared.
    Site-specific fields are added one by one with item assignment as
    extraction proceeds and stay absent unless they were extracted.
    """

    model_config = ConfigDict(extra="allow")

    site: SiteTag
    sid: str
    success: bool = False
    format: str = ""
    error: str | None = None

    def __setitem__(self, key: str, value: Any) -> None:
        if key in type(self).model_fields:
            setattr(self, key, value)
        else:
            self.__pydantic_extra__[key] = value

    def __getitem__(self, key: str) -> Any:
        if key in type(self).model_fields:
            return getattr(self, key)
        return self.__pydantic_extra__[key]

    def __contains__(self, key: object) -> bool:
        return key in type(self).model_fields or key in self.__pydantic_extra__

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of ``key`` or ``default`` when it was never set."""
        if key in self:
            return self[key]
        return default

    def update(self, fields: Mapping[str, Any]) -> None:
        """Set every item of ``fields`` on the record."""
        for key, value in fields.items():
            self[key] = value

    def extra_fields(self) -> dict[str, Any]:
        """Return the site-specific fields only."""
        return dict(self.__pydantic_extra__)

    def fail(self, error: str) -> "MetadataRecord":
        """Mark the record unsuccessful with a human-readable cause."""
        self.success = False
        self.format = ""
        self.error = error
        return self

    def finish(self, formatted: str) -> "MetadataRecord":
        """Attach the rendered text and mark the record successful.

        Raises:
            ValueError: If ``formatted`` is empty.
        """
        if not formatted:
            raise ValueError("A successful record needs a non-empty format")
        self.format = formatted
        self.error = None
        self.success = True
        return self

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible dict including every extracted field."""
        return self.model_dump(mode="json")


class SearchResultItem(BaseModel):
    """One lightweight search candidate."""

    title: str
    subtitle: str | None = None
    year: str | None = None
    subtype: str | None = None
    link: str

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible dict without absent fields."""
        return self.model_dump(mode="json", exclude_none=True)


class SearchRequest(BaseModel):
    """Validated search call."""

    query: str = Field(min_length=1)
    source: str = "douban"
