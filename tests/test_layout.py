from __future__ import annotations

import pytest

from assessment_report.config import ReportConfig
from assessment_report.pipeline.layout import (
    BlockTooTallError,
    FillRect,
    Layout,
    Text,
    text_width,
    wrap_text,
)
from assessment_report.pipeline.sections import draw_header


def _texts(page) -> list[str]:
    return [cmd.text for cmd in page if isinstance(cmd, Text)]


def test_wrap_text_respects_width() -> None:
    text = "Build robust change management capabilities to ensure successful AI adoption across teams."
    lines = wrap_text(text, "Helvetica", 10, 50)
    assert len(lines) > 1
    assert " ".join(lines) == text
    assert all(text_width(line, "Helvetica", 10) <= 50 for line in lines)


def test_wrap_text_empty_and_long_word() -> None:
    assert wrap_text("", "Helvetica", 10, 50) == [""]
    assert wrap_text("   ", "Helvetica", 10, 50) == [""]
    long_word = "x" * 80
    assert wrap_text(f"a {long_word} b", "Helvetica", 10, 20) == ["a", long_word, "b"]


def test_header_sets_body_top() -> None:
    cfg = ReportConfig()
    layout = Layout(cfg, header=draw_header)
    assert layout.page_count == 1
    assert layout.body_top == cfg.margin + 35
    assert layout.y == layout.body_top
    assert isinstance(layout.pages[0][0], FillRect)
    assert _texts(layout.pages[0]) == [cfg.brand_name, cfg.tagline]


def test_ensure_space_noop_when_block_fits() -> None:
    layout = Layout(ReportConfig(), header=draw_header)
    layout.y = layout.bottom_limit - 10
    assert layout.ensure_space(10) is False
    assert layout.page_count == 1
    assert layout.y == layout.bottom_limit - 10


def test_ensure_space_adds_page_and_redraws_header() -> None:
    cfg = ReportConfig()
    layout = Layout(cfg, header=draw_header)
    layout.y = layout.bottom_limit - 5
    assert layout.ensure_space(10) is True
    assert layout.page_count == 2
    assert layout.page_index == 1
    assert layout.y == layout.body_top
    assert _texts(layout.pages[1]) == [cfg.brand_name, cfg.tagline]


def test_ensure_space_rejects_block_taller_than_page() -> None:
    layout = Layout(ReportConfig(), header=draw_header)
    with pytest.raises(BlockTooTallError):
        layout.ensure_space(layout.writable_height + 1)
    assert layout.page_count == 1


def test_layout_without_header_starts_at_margin() -> None:
    cfg = ReportConfig()
    layout = Layout(cfg)
    assert layout.y == cfg.margin
    assert layout.pages == [[]]


def test_write_lines_keeps_paragraph_together() -> None:
    layout = Layout(ReportConfig(), header=draw_header)
    lines = ["one", "two", "three"]
    layout.y = layout.bottom_limit - 10
    layout.write_lines(lines, 25, 5, "Helvetica", 10, "#000000", trailing=5)
    assert layout.page_count == 2
    assert _texts(layout.pages[0])[-1] == ReportConfig().tagline
    assert _texts(layout.pages[1])[-3:] == lines
    assert layout.y == layout.body_top + 20


def test_write_lines_splits_paragraph_taller_than_page() -> None:
    layout = Layout(ReportConfig(), header=draw_header)
    lines = [f"line {i}" for i in range(60)]
    layout.write_lines(lines, 25, 5, "Helvetica", 10, "#000000")
    assert layout.page_count >= 2

    written = []
    for page in layout.pages:
        for cmd in page:
            if isinstance(cmd, Text) and cmd.text.startswith("line "):
                assert cmd.y <= layout.bottom_limit
                written.append(cmd.text)
    assert written == lines
