"""Epic Games Store products, read from the store content API."""

import logging
from typing import Any

from ptgen.constants import NONE_EXIST_ERROR
from ptgen.exceptions import UpstreamFormatError
from ptgen.extractors.base import BaseExtractor
from ptgen.models import MetadataRecord
from ptgen.sites import SiteTag

logger = logging.getLogger(__name__)

STORE_LINK = "https://www.epicgames.com/store/zh-CN/product/{sid}/home"


def merge_languages(segments: list[str]) -> list[str]:
    """Merge the store's language segments into display lines.

    A segment without a colon continues the previous line, a segment with
    dashes holds several lines, anything else is a line of its own.

    Example:
        >>> merge_languages(["语音：英语", "法语", "文本：简体中文 - 字幕：英语"])
        ['语音：英语、法语', '文本：简体中文', '字幕：英语']
    """
    languages: list[str] = []
    for segment in segments:
        if ":" not in segment and "：" not in segment and languages:
            languages[-1] += f"、{segment}"
        elif "-" in segment:
            languages.extend(part.strip() for part in segment.split("-"))
        else:
            languages.append(segment)
    return languages


def _dig(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


class EpicExtractor(BaseExtractor):
    """Extractor for Epic Games Store products."""

    site = SiteTag.EPIC

    async def populate(self, record: MetadataRecord) -> None:
        sid = record.sid
        page = await self.fetcher.get_page(self.url_for(sid))
        if page.status == 404:
            record.fail(NONE_EXIST_ERROR)
            return

        payload = page.json()
        pages = payload.get("pages") if isinstance(payload, dict) else None
        if not pages:
            raise UpstreamFormatError(f"Epic product {sid} has no pages")
        product = pages[0]

        record["name"] = product.get("productName", "")
        record["epic_link"] = STORE_LINK.format(sid=sid)
        record["desc"] = _dig(product, "data", "about", "description") or ""

        logo = _dig(product, "data", "hero", "logoImage", "src")
        if logo:
            record["logo"] = record["poster"] = logo
        record["screenshot"] = [
            image["src"]
            for image in _dig(product, "data", "gallery", "galleryImages") or []
            if image.get("src")
        ]

        requirements = _dig(product, "data", "requirements") or {}
        record["language"] = merge_languages(requirements.get("languages") or [])

        min_req: dict[str, list[str]] = {}
        max_req: dict[str, list[str]] = {}
        for system in requirements.get("systems") or []:
            system_type = system.get("systemType", "")
            details = system.get("details") or []
            min_req[system_type] = [
                f"{item.get('title', '')}: {item.get('minimum') or ''}" for item in details
            ]
            max_req[system_type] = [
                f"{item.get('title', '')}: {item.get('recommended') or ''}" for item in details
            ]
        record["min_req"] = min_req
        record["max_req"] = max_req
        record["level"] = [
            tag["src"] for tag in requirements.get("legalTags") or [] if tag.get("src")
        ]
