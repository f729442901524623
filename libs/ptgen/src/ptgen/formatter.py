"""Declarative BBCode rendering of metadata records.

Each site has an ordered table of lines. A ``Line`` reads one record field,
renders it and places the result in its template; lines whose field is
absent, empty or renders to an empty string are skipped. A ``Static`` line
is always emitted. The joined text is trimmed at both ends, so rendering
the same record twice yields the same bytes.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from ptgen.models import MetadataRecord
from ptgen.normalize import indent_lines
from ptgen.sites import SiteTag

Renderer = Callable[[Any], str]

FULL_WIDTH_SPACE = "　"


@dataclass(frozen=True)
class Line:
    """One optional line: ``template`` with ``{}`` replaced by the rendered field."""

    field: str
    template: str
    renderer: Renderer = str


@dataclass(frozen=True)
class Static:
    """Text emitted unconditionally."""

    text: str


Template = tuple[Line | Static, ...]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str | list | tuple | dict):
        return len(value) == 0
    return False


def join(separator: str) -> Renderer:
    return lambda values: separator.join(str(value) for value in values)


def names(separator: str) -> Renderer:
    """Join the ``name`` of each person entry."""
    return lambda people: separator.join(
        person.get("name", "").strip() for person in people if person.get("name")
    )


def indented(indent: str) -> Renderer:
    return lambda text: indent_lines(str(text), indent)


def continued(indent: str) -> Renderer:
    """Indent continuation lines only."""
    return lambda text: str(text).replace("\n", "\n" + indent)


def first(count: int, separator: str) -> Renderer:
    return lambda values: separator.join(str(value) for value in list(values)[:count])


def images(values: list[str]) -> str:
    return "\n".join(f"[img]{value}[/img]" for value in values)


def links(values: Mapping[str, str]) -> str:
    return "  ".join(f"[url={url}]{name}[/url]" for name, url in values.items())


def requirements(values: Mapping[str, list[str]]) -> str:
    return "".join(f"{system}\n" + "\n".join(lines) + "\n" for system, lines in values.items())


_BANGUMI_INFOBOX_SKIP = re.compile(
    r"^(中文名|话数|放送开始|放送星期)"
)


def bangumi_staff(values: list[str]) -> str:
    kept = [line for line in values if not _BANGUMI_INFOBOX_SKIP.match(line)]
    return "\n".join(kept[:15])


_CAST_SEPARATOR = "\n" + FULL_WIDTH_SPACE * 4 + "  " + FULL_WIDTH_SPACE
_PARAGRAPH_INDENT = FULL_WIDTH_SPACE * 2


DOUBAN_TEMPLATE: Template = (
    Line("poster", "[img]{}[/img]\n\n"),
    Line("trans_title", "◎译　　名　{}\n", join("/")),
    Line("this_title", "◎片　　名　{}\n", join("/")),
    Line("year", "◎年　　代　{}\n"),
    Line("region", "◎产　　地　{}\n", join(" / ")),
    Line("genre", "◎类　　别　{}\n", join(" / ")),
    Line("language", "◎语　　言　{}\n", join(" / ")),
    Line("playdate", "◎上映日期　{}\n", join(" / ")),
    Line("imdb_rating", "◎IMDb评分  {}\n"),
    Line("imdb_link", "◎IMDb链接  {}\n"),
    Line("douban_rating", "◎豆瓣评分　{}\n"),
    Line("douban_link", "◎豆瓣链接　{}\n"),
    Line("episodes", "◎集　　数　{}\n"),
    Line("duration", "◎片　　长　{}\n"),
    Line("director", "◎导　　演　{}\n", names(" / ")),
    Line("writer", "◎编　　剧　{}\n", names(" / ")),
    Line("cast", "◎主　　演　{}\n", names(_CAST_SEPARATOR)),
    Line("tags", "\n◎标　　签　{}\n", join(" | ")),
    Line("introduction", "\n◎简　　介\n\n{}\n", indented(_PARAGRAPH_INDENT)),
    Line("awards", "\n◎获奖情况\n\n{}\n", indented(_PARAGRAPH_INDENT)),
)

IMDB_TEMPLATE: Template = (
    Line("poster", "[img]{}[/img]\n\n"),
    Line("name", "Title: {}\n"),
    Line("keywords", "Keywords: {}\n", join(", ")),
    Line("datePublished", "Date Published: {}\n"),
    Line("imdb_rating", "IMDb Rating: {}\n"),
    Line("imdb_link", "IMDb Link: {}\n"),
    Line("directors", "Directors: {}\n", names(" / ")),
    Line("creators", "Creators: {}\n", names(" / ")),
    Line("actors", "Actors: {}\n", names(" / ")),
    Line("description", "\nIntroduction\n    {}\n", continued(_PARAGRAPH_INDENT)),
)

BANGUMI_TEMPLATE: Template = (
    Line("cover", "[img]{}[/img]\n\n"),
    Line("story", "[b]Story: [/b]\n\n{}\n\n"),
    Line("staff", "[b]Staff: [/b]\n\n{}\n\n", bangumi_staff),
    Line("cast", "[b]Cast: [/b]\n\n{}\n\n", first(9, "\n")),
    Line("alt", "(来源于 {} )\n"),
)

STEAM_TEMPLATE: Template = (
    Line("cover", "[img]{}[/img]\n\n"),
    Static("【基本信息】\n\n"),
    Line("name_chs", "中文名: {}\n"),
    Line("detail", "{}\n"),
    Line("linkbar", "官方网站: {}\n"),
    Line("steam_id", "Steam页面: https://store.steampowered.com/app/{}/\n"),
    Line("language", "游戏语种: {}\n", join(" | ")),
    Line("tags", "标签: {}\n", join(" | ")),
    Line("review", "\n{}\n", join("\n")),
    Static("\n"),
    Line("descr", "【游戏简介】\n\n{}\n\n"),
    Line("sysreq", "【配置需求】\n\n{}\n\n", join("\n")),
    Line("screenshot", "【游戏截图】\n\n{}\n\n", images),
)

INDIENOVA_TEMPLATE: Template = (
    Line("cover", "[img]{}[/img]\n\n"),
    Static("【基本信息】\n\n"),
    Line("chinese_title", "中文名称：{}\n"),
    Line("english_title", "英文名称：{}\n"),
    Line("another_title", "其他名称：{}\n"),
    Line("release_date", "发行时间：{}\n"),
    Line("rate", "评分：{}\n"),
    Line("dev", "开发商：{}\n", join(" / ")),
    Line("pub", "发行商：{}\n", join(" / ")),
    Line("intro_detail", "{}\n", join("\n")),
    Line("cat", "标签：{}\n", first(8, " | ")),
    Line("links", "链接地址：{}\n", links),
    Line("price", "价格信息：{}\n", join(" / ")),
    Static("\n"),
    Line("descr", "【游戏简介】\n\n{}\n\n"),
    Line("screenshot", "【游戏截图】\n\n{}\n\n", images),
    Line("level", "【游戏评级】\n\n{}\n\n", images),
)

EPIC_TEMPLATE: Template = (
    Line("logo", "[img]{}[/img]\n\n"),
    Static("【基本信息】\n\n"),
    Line("name", "游戏名称：{}\n"),
    Line("epic_link", "商店链接：{}\n"),
    Static("\n"),
    Line("language", "【支持语言】\n\n{}\n\n", join("\n")),
    Line("desc", "【游戏简介】\n\n{}\n\n"),
    Line("min_req", "【最低配置】\n\n{}\n\n", requirements),
    Line("max_req", "【推荐配置】\n\n{}\n\n", requirements),
    Line("screenshot", "【游戏截图】\n\n{}\n\n", images),
    Line("level", "【游戏评级】\n\n{}\n\n", images),
)

TEMPLATES: Mapping[SiteTag, Template] = {
    SiteTag.DOUBAN: DOUBAN_TEMPLATE,
    SiteTag.IMDB: IMDB_TEMPLATE,
    SiteTag.BANGUMI: BANGUMI_TEMPLATE,
    SiteTag.STEAM: STEAM_TEMPLATE,
    SiteTag.INDIENOVA: INDIENOVA_TEMPLATE,
    SiteTag.EPIC: EPIC_TEMPLATE,
}

if set(TEMPLATES) != set(SiteTag):
    raise RuntimeError("Every site tag needs a render template")


def render_lines(record: MetadataRecord | Mapping[str, Any], template: Template) -> str:
    """Render ``record`` with ``template`` and trim the result."""
    parts: list[str] = []
    for line in template:
        if isinstance(line, Static):
            parts.append(line.text)
            continue

        value = record.get(line.field)
        if _is_empty(value):
            continue
        rendered = line.renderer(value)
        if not rendered.strip():
            continue
        parts.append(line.template.format(rendered))
    return "".join(parts).strip()


def render(record: MetadataRecord) -> str:
    """Render ``record`` with the template of its own site."""
    return render_lines(record, TEMPLATES[record.site])
