"""Tests for the declarative BBCode formatter."""

from ptgen.formatter import (
    TEMPLATES,
    Line,
    Static,
    bangumi_staff,
    render,
    render_lines,
    requirements,
)
from ptgen.models import MetadataRecord
from ptgen.sites import SiteTag


class TestRenderLines:
    def test_skips_absent_and_empty_fields(self):
        template = (
            Line("a", "A: {}\n"),
            Line("b", "B: {}\n"),
            Static("--\n"),
            Line("c", "C: {}\n", lambda values: ", ".join(values)),
        )
        assert render_lines({"a": "1", "b": "", "c": []}, template) == "A: 1\n--"

    def test_trims_output(self):
        template = (Static("\n\n"), Line("a", "  {}  \n"))
        assert render_lines({"a": "x"}, template) == "x"

    def test_blank_rendering_skipped(self):
        template = (Line("a", "A: {}\n", lambda value: "  "),)
        assert render_lines({"a": "x"}, template) == ""

    def test_every_site_has_template(self):
        assert set(TEMPLATES) == set(SiteTag)


class TestDoubanTemplate:
    def test_multiline_fields_reindented(self):
        record = MetadataRecord(site=SiteTag.DOUBAN, sid="1")
        record.update(
            {
                "this_title": ["Title"],
                "cast": [{"name": "A"}, {"name": "B"}],
                "introduction": "line1\nline2",
            }
        )
        assert render(record) == (
            "◎片　　名　Title\n"
            "◎主　　演　A\n　　　　  　B\n"
            "\n◎简　　介\n\n　　line1\n　　line2"
        )

    def test_rating_line_omitted_when_absent(self):
        record = MetadataRecord(site=SiteTag.DOUBAN, sid="1")
        record.update({"this_title": ["T"], "douban_rating_average": 0})
        assert "豆瓣评分" not in render(record)


class TestImdbTemplate:
    def test_description_continuation(self):
        record = MetadataRecord(site=SiteTag.IMDB, sid="tt1")
        record.update({"name": "N", "description": "a\nb"})
        assert render(record) == "Title: N\n\nIntroduction\n    a\n　　b"


def test_bangumi_staff_filter():
    staff = ["中文名: x", "话数: 12", "导演: A"] + [f"脚本: {i}" for i in range(20)]
    lines = bangumi_staff(staff).split("\n")
    assert lines[0] == "导演: A"
    assert len(lines) == 15


def test_requirements_block():
    assert requirements({"Windows": ["OS: 10", "CPU: i5"]}) == "Windows\nOS: 10\nCPU: i5\n"


def test_render_is_deterministic():
    record = MetadataRecord(site=SiteTag.STEAM, sid="1")
    record.update({"name": "G", "steam_id": "1", "tags": ["a", "b"]})
    assert render(record) == render(record)
    assert render(record) == (
        "【基本信息】\n\nSteam页面: https://store.steampowered.com/app/1/\n标签: a | b"
    )
