from __future__ import annotations

from datetime import date
from typing import Sequence

from ..config import ReportConfig, ScoreTier
from ..models import AssessmentReport, Priority, Recommendation
from .layout import FillRect, Layout, StrokeRect, Text, text_width, wrap_text


HEADER_BAR_H = 25.0
HEADER_BLOCK_H = 35.0
HEADING_H = 15.0
SUMMARY_BOX_H = 40.0
SUMMARY_BLOCK_H = 55.0
SUMMARY_LINE_H = 4.5
CATEGORY_ROW_H = 28.0
BAR_H = 6.0
BADGE_BLOCK_H = 12.0
ACTIONS_LABEL_H = 8.0
FOOTER_BOX_H = 30.0


def tier_for(percentage: float, tiers: Sequence[ScoreTier]) -> ScoreTier:
    for tier in tiers:
        if percentage >= tier.minimum:
            return tier
    return tiers[-1]


def interpretation_for(percentage: float, config: ReportConfig | None = None) -> str:
    cfg = config or ReportConfig()
    return tier_for(percentage, cfg.score_tiers).interpretation


def color_for(percentage: float, config: ReportConfig | None = None) -> str:
    cfg = config or ReportConfig()
    return tier_for(percentage, cfg.score_tiers).color


def bar_fill_width(percentage: float, track_width: float) -> float:
    clamped = min(100.0, max(0.0, float(percentage)))
    return track_width * clamped / 100.0


def format_points(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_assessment_date(day: date) -> str:
    return f"{day.month}/{day.day}/{day.year}"


def _heading(layout: Layout, title: str, keep_with: float = 0.0) -> None:
    cfg = layout.config
    layout.ensure_space(HEADING_H + keep_with)
    layout.draw(Text(cfg.margin, layout.y, title, cfg.bold_font_name, 18, cfg.color("text")))
    layout.advance(HEADING_H)


# -------------------- Sections --------------------
def draw_header(layout: Layout) -> None:
    cfg = layout.config
    m = cfg.margin
    layout.draw(FillRect(m, m, cfg.content_width, HEADER_BAR_H, cfg.color("brand")))
    layout.draw(Text(m + 10, m + 16, cfg.brand_name, cfg.bold_font_name, 20, cfg.color("inverse")))
    layout.draw(
        Text(cfg.page_width - m - 10, m + 16, cfg.tagline, cfg.font_name, 10, cfg.color("inverse"), align="right")
    )
    layout.y = m + HEADER_BLOCK_H


def draw_title_block(layout: Layout, report: AssessmentReport) -> None:
    cfg = layout.config
    company = report.contact_info.company.strip()

    layout.ensure_space(15)
    layout.draw(Text(cfg.margin, layout.y, cfg.report_title, cfg.bold_font_name, 24, cfg.color("text")))
    layout.advance(15)

    if company:
        subtitle = f"{company} - {cfg.subtitle_suffix}"
    else:
        subtitle = f"{cfg.subtitle_suffix} Assessment"
    layout.ensure_space(20)
    layout.draw(Text(cfg.margin, layout.y, subtitle, cfg.font_name, 16, cfg.color("text")))
    layout.advance(20)


def draw_metadata(layout: Layout, report: AssessmentReport, generated_on: date) -> None:
    cfg = layout.config
    muted = cfg.color("muted")

    layout.ensure_space(8)
    layout.draw(
        Text(cfg.margin, layout.y, f"Assessment Date: {format_assessment_date(generated_on)}", cfg.font_name, 12, muted)
    )
    layout.advance(8)

    name = report.contact_info.name.strip()
    if name:
        layout.ensure_space(15)
        layout.draw(Text(cfg.margin, layout.y, f"Participant: {name}", cfg.font_name, 12, muted))
        layout.advance(15)
    else:
        layout.advance(7)


def summary_box_height(line_count: int) -> float:
    """Fixed box, grown when the interpretation wraps past four lines."""
    return max(SUMMARY_BOX_H, 22.0 + line_count * SUMMARY_LINE_H)


def draw_executive_summary(layout: Layout, report: AssessmentReport) -> None:
    cfg = layout.config
    m = cfg.margin
    accent = cfg.color("summary_accent")

    lines = wrap_text(interpretation_for(report.overall_percentage, cfg), cfg.font_name, 9, cfg.content_width - 90)
    box_h = summary_box_height(len(lines))
    block_h = box_h + SUMMARY_BLOCK_H - SUMMARY_BOX_H

    _heading(layout, "Executive Summary", keep_with=block_h)

    layout.ensure_space(block_h)
    top = layout.y
    layout.draw(FillRect(m, top, cfg.content_width, box_h, cfg.color("summary_fill")))
    layout.draw(StrokeRect(m, top, cfg.content_width, box_h, accent))
    layout.draw(Text(m + 10, top + 27, f"{report.overall_percentage}%", cfg.bold_font_name, 36, accent))
    layout.draw(Text(m + 80, top + 13, f"{report.readiness_level} Readiness", cfg.bold_font_name, 16, accent))
    for i, line in enumerate(lines):
        layout.draw(Text(m + 80, top + 20 + i * SUMMARY_LINE_H, line, cfg.font_name, 9, cfg.color("text")))

    layout.advance(block_h)


def draw_category_breakdown(layout: Layout, report: AssessmentReport) -> None:
    cfg = layout.config
    m = cfg.margin
    track_w = cfg.content_width - 20

    _heading(layout, "Category Breakdown", keep_with=CATEGORY_ROW_H if report.category_scores else 0.0)

    for category, scores in report.category_scores.items():
        layout.ensure_space(CATEGORY_ROW_H)
        layout.draw(Text(m, layout.y, category, cfg.bold_font_name, 12, cfg.color("text")))
        points = f"{format_points(scores.score)}/{format_points(scores.max_score)} points ({scores.percentage}%)"
        layout.draw(Text(cfg.page_width - m, layout.y, points, cfg.font_name, 12, cfg.color("text"), align="right"))

        bar_y = layout.y + 8
        layout.draw(FillRect(m + 10, bar_y, track_w, BAR_H, cfg.color("track")))
        layout.draw(
            FillRect(m + 10, bar_y, bar_fill_width(scores.percentage, track_w), BAR_H, color_for(scores.percentage, cfg))
        )
        layout.advance(CATEGORY_ROW_H)


def _recommendation(layout: Layout, number: int, rec: Recommendation) -> None:
    cfg = layout.config
    m = cfg.margin
    black = cfg.color("text")

    title_lines = wrap_text(f"{number}. {rec.title}", cfg.bold_font_name, 14, cfg.content_width)
    title_h = len(title_lines) * 7 + 3
    # title and priority badge stay together
    layout.ensure_space(title_h + BADGE_BLOCK_H)
    layout.write_lines(title_lines, m, 7, cfg.bold_font_name, 14, black, trailing=3)

    label = f"{rec.priority} Priority"
    badge_key = "priority_high" if rec.priority == Priority.HIGH.value else "priority_other"
    badge_w = text_width(label, cfg.bold_font_name, 8) + 6
    layout.draw(FillRect(m, layout.y - 4, badge_w, 7, cfg.color(badge_key)))
    layout.draw(Text(m + 3, layout.y + 0.5, label, cfg.bold_font_name, 8, cfg.color("inverse")))
    layout.advance(BADGE_BLOCK_H)

    desc_lines = wrap_text(rec.description, cfg.font_name, 10, cfg.content_width - 10)
    layout.write_lines(desc_lines, m + 5, 5, cfg.font_name, 10, black, trailing=5)

    if rec.actions:
        layout.ensure_space(ACTIONS_LABEL_H)
        layout.draw(Text(m + 5, layout.y, "Recommended Actions:", cfg.bold_font_name, 10, black))
        layout.advance(ACTIONS_LABEL_H)

        for action in rec.actions:
            action_lines = wrap_text(f"• {action}", cfg.font_name, 10, cfg.content_width - 20)
            layout.write_lines(action_lines, m + 10, 5, cfg.font_name, 10, black, trailing=2)

    layout.advance(10)


def draw_recommendations(layout: Layout, report: AssessmentReport) -> None:
    if not report.recommendations:
        return
    layout.advance(10)
    _heading(layout, "Key Recommendations", keep_with=BADGE_BLOCK_H + 10)
    for number, rec in enumerate(report.recommendations, 1):
        _recommendation(layout, number, rec)


def draw_next_steps(layout: Layout, report: AssessmentReport) -> None:
    cfg = layout.config
    _heading(layout, "Next Steps", keep_with=9)
    for step in cfg.next_steps:
        lines = wrap_text(f"• {step}", cfg.font_name, 11, cfg.content_width - 10)
        layout.write_lines(lines, cfg.margin + 5, 6, cfg.font_name, 11, cfg.color("text"), trailing=3)


def draw_footer(layout: Layout, report: AssessmentReport) -> None:
    cfg = layout.config
    m = cfg.margin
    muted = cfg.color("muted")

    layout.advance(20)
    layout.ensure_space(FOOTER_BOX_H)
    top = layout.y
    layout.draw(FillRect(m, top, cfg.content_width, FOOTER_BOX_H, cfg.color("footer_fill")))
    layout.draw(Text(m + 10, top + 12, cfg.copyright_line, cfg.font_name, 10, muted))
    layout.draw(Text(m + 10, top + 22, cfg.contact_line, cfg.font_name, 10, muted))
    layout.advance(FOOTER_BOX_H)
