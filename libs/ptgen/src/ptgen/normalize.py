"""Pure normalization helpers: ordering, rating strings and text cleanup."""

import re
import unicodedata
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any, TypeVar

T = TypeVar("T")

_ISO_DATE = re.compile(r"^\s*(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?")
_TEXT_DATE_FORMATS = ("%d %B %Y", "%B %d, %Y", "%B %Y", "%Y")


def parse_date(value: str) -> date | None:
    """Parse the leading date of ``value``.

    Accepts ``YYYY``, ``YYYY-MM`` and ``YYYY-MM-DD`` prefixes (with any
    trailing annotation such as a region in parentheses) and the English
    forms ``23 September 1994`` and ``September 1994``.

    Returns:
        The parsed date (missing month or day default to 1), or None.
    """
    if not value:
        return None

    match = _ISO_DATE.match(value)
    if match:
        year, month, day = match.groups()
        try:
            return date(int(year), int(month or 1), int(day or 1))
        except ValueError:
            return None

    text = re.sub(r"\(.*?\)", "", value).strip()
    for fmt in _TEXT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def sort_by_date(values: Iterable[T], key: Callable[[T], str] | None = None) -> list[T]:
    """Sort ascending by parsed date; unparseable values keep their order at the end."""
    items = list(values)
    get_text: Callable[[Any], str] = key or (lambda item: item)

    dated: list[tuple[date, int, T]] = []
    undated: list[T] = []
    for index, item in enumerate(items):
        parsed = parse_date(get_text(item))
        if parsed is None:
            undated.append(item)
        else:
            dated.append((parsed, index, item))

    dated.sort(key=lambda entry: (entry[0], entry[1]))
    return [item for _, _, item in dated] + undated


def sort_aliases(values: str | Iterable[str], sep: str = " / ") -> list[str]:
    """Split, trim, drop empties, dedupe and order aliases by NFC code points.

    Ordering is plain code-point order after NFC normalization, so the result
    does not depend on the host locale.

    Example:
        >>> sort_aliases("Beta / alpha / Gamma")
        ['Beta', 'Gamma', 'alpha']
    """
    if isinstance(values, str):
        values = values.split(sep)
    seen: set[str] = set()
    aliases: list[str] = []
    for value in values:
        alias = unicodedata.normalize("NFC", value.strip())
        if alias and alias not in seen:
            seen.add(alias)
            aliases.append(alias)
    return sorted(aliases)


def split_list(value: str, separator: str = "/") -> list[str]:
    """Split ``value`` on ``separator`` into trimmed, non-empty parts."""
    return [part.strip() for part in value.split(separator) if part.strip()]


def format_rating(average: Any, count: Any, scale: int = 10) -> str | None:
    """Render ``average/scale from count users``; None if either part is missing."""
    if average is None or count is None or average == "" or count == "":
        return None
    return f"{average}/{scale} from {count} users"


def clean_lines(text: str, joiner: str = "\n") -> str:
    """Trim every line, drop blank ones and join the rest."""
    return joiner.join(line.strip() for line in text.split("\n") if line.strip())


def indent_lines(text: str, indent: str) -> str:
    """Prefix every line of ``text`` with ``indent``."""
    return indent + text.replace("\n", "\n" + indent)


def strip_markup(html: str) -> str:
    """Turn a block of award-style markup into plain lines.

    Block boundaries (``div`` and ``ul``) become line breaks, adjacent list
    items and a title followed by its annotation are separated by one
    space, remaining tags are dropped and runs of blank lines collapse to
    a single blank line.
    """
    text = html.replace("\xa0", " ").replace("\r", "")
    text = re.sub(r">\s+", ">", text)
    text = re.sub(r"\s+<", "<", text)
    text = text.replace("\n", "")
    text = re.sub(r"<(?:div|ul)[^>]*>", "\n", text)
    text = re.sub(r"</li><li", "</li> <li", text)
    text = re.sub(r"</a><span", "</a> <span", text)
    text = re.sub(r"<[^>]+>", "", text)
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
