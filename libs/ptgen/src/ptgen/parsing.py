"""BeautifulSoup helpers shared by the extractors."""

import copy
import json
import logging
import re
from typing import Any

from bs4 import BeautifulSoup, NavigableString, Tag

from ptgen.normalize import clean_lines

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"\d[\d,]*(?:\.\d+)?")


def parse_page(html: str) -> BeautifulSoup:
    """Parse HTML content with BeautifulSoup."""
    return BeautifulSoup(html, "html.parser")


def select_text(root: BeautifulSoup | Tag, selector: str, strip: bool = True) -> str:
    """Text of the first match of ``selector``, or an empty string."""
    element = root.select_one(selector)
    if element is None:
        return ""
    return element.get_text(strip=strip) if strip else element.get_text()


def select_texts(root: BeautifulSoup | Tag, selector: str) -> list[str]:
    """Trimmed, non-empty texts of every match of ``selector``."""
    texts = []
    for element in root.select(selector):
        text = element.get_text().strip()
        if text:
            texts.append(text)
    return texts


def select_attr(root: BeautifulSoup | Tag, selector: str, attr: str) -> str:
    """Attribute of the first match of ``selector``, or an empty string."""
    element = root.select_one(selector)
    if element is None:
        return ""
    value = element.get(attr)
    if isinstance(value, list):
        return " ".join(value)
    return value or ""


def anchor_text(root: BeautifulSoup | Tag, label: str, scope: str = "#info span.pl") -> str:
    """Text node that follows the labelled ``<span>`` inside an info block.

    Info blocks are laid out as ``<span class="pl">Label:</span> value<br>``;
    the value is the bare text sibling right after the label.
    """
    for span in root.select(scope):
        if label not in span.get_text():
            continue
        sibling = span.next_sibling
        if isinstance(sibling, NavigableString):
            return str(sibling).strip()
        return ""
    return ""


def ld_json(soup: BeautifulSoup) -> dict[str, Any]:
    """First ``application/ld+json`` object of the page, or an empty dict."""
    script = soup.find("script", type="application/ld+json")
    if not isinstance(script, Tag):
        return {}

    text = script.string or script.get_text()
    try:
        data = json.loads(text.replace("\n", ""), strict=False)
    except json.JSONDecodeError as e:
        logger.warning(f"Malformed ld+json block: {e}")
        return {}

    if isinstance(data, list):
        data = next((item for item in data if isinstance(item, dict)), {})
    return data if isinstance(data, dict) else {}


def number_from(text: str) -> str:
    """First number in ``text`` with thousands separators removed, "0" if none."""
    match = _NUMBER.search(text or "")
    if match is None:
        return "0"
    return match.group(0).replace(",", "")


def text_with_breaks(element: Tag, marker: str = "[br]") -> str:
    """Text of ``element`` where every ``<br>`` is replaced by ``marker``."""
    element = copy.copy(element)
    for br in element.find_all("br"):
        br.replace_with(NavigableString(marker))
    return element.get_text()


_BLOCK_TAGS = {"p", "div", "ul", "ol", "h1", "h2", "h3", "h4", "h5", "h6"}
_INLINE_BBCODE = {
    "b": "b",
    "strong": "b",
    "i": "i",
    "em": "i",
    "u": "u",
    "h1": "h1",
    "h2": "h2",
    "h3": "h3",
}


def _to_bbcode(node: Any) -> str:
    if isinstance(node, NavigableString):
        return str(node)
    if not isinstance(node, Tag):
        return ""

    name = node.name
    if name == "br":
        return "\n"
    if name == "img":
        src = node.get("src") or ""
        return f"[img]{src}[/img]" if src else ""

    inner = "".join(_to_bbcode(child) for child in node.children)
    if name in _INLINE_BBCODE:
        tag = _INLINE_BBCODE[name]
        inner = f"[{tag}]{inner.strip()}[/{tag}]" if inner.strip() else ""
    elif name == "a":
        href = node.get("href") or ""
        inner = f"[url={href}]{inner}[/url]" if href and inner.strip() else inner
    elif name == "li":
        inner = f"[*]{inner.strip()}\n"
    elif name in ("ul", "ol"):
        inner = f"[list]\n{inner.strip()}\n[/list]" if inner.strip() else ""

    if name in _BLOCK_TAGS:
        inner = f"\n{inner}\n"
    return inner


def html_to_bbcode(element: Tag | None) -> str:
    """Convert an HTML fragment to BBCode.

    Headings and emphasis map to their BBCode tags, links to ``[url=]``,
    images to ``[img]`` and lists to ``[list]`` with ``[*]`` items. Block
    elements and ``<br>`` become line breaks; blank lines are dropped.
    """
    if element is None:
        return ""
    text = "".join(_to_bbcode(child) for child in element.children)
    return clean_lines(text.replace("\xa0", " "))
