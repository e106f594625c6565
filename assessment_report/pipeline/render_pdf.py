from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from functools import partial
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from .. import config
from ..config import FILENAME_SUFFIX, GENERIC_FILENAME, ReportConfig, load_report_config
from ..models import AssessmentReport
from .layout import DrawCommand, FillRect, Layout, StrokeRect, Text
from .sections import (
    draw_category_breakdown,
    draw_executive_summary,
    draw_footer,
    draw_header,
    draw_metadata,
    draw_next_steps,
    draw_recommendations,
    draw_title_block,
)

logger = logging.getLogger(__name__)

SectionRenderer = Callable[[Layout, AssessmentReport], None]


@dataclass(frozen=True)
class ComposedReport:
    pages: Tuple[Tuple[DrawCommand, ...], ...]
    filename: str

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def texts(self, page_index: int | None = None) -> List[str]:
        pages = self.pages if page_index is None else (self.pages[page_index],)
        return [cmd.text for page in pages for cmd in page if isinstance(cmd, Text)]


def report_filename(company: str) -> str:
    sanitized = re.sub(r"[^A-Za-z0-9]", "", company or "")
    if not sanitized:
        return GENERIC_FILENAME
    return f"{sanitized}{FILENAME_SUFFIX}"


def section_renderers(generated_on: date) -> Sequence[SectionRenderer]:
    return (
        draw_title_block,
        partial(draw_metadata, generated_on=generated_on),
        draw_executive_summary,
        draw_category_breakdown,
        draw_recommendations,
        draw_next_steps,
        draw_footer,
    )


def compose_report(
    report: AssessmentReport,
    report_config: ReportConfig | None = None,
    generated_on: date | None = None,
) -> ComposedReport:
    cfg = report_config or load_report_config()
    layout = Layout(cfg, header=draw_header)
    for render in section_renderers(generated_on or date.today()):
        render(layout, report)
    return ComposedReport(
        pages=tuple(tuple(page) for page in layout.pages),
        filename=report_filename(report.contact_info.company),
    )


# -------------------- Canvas flush --------------------
def _draw_command(canv: canvas.Canvas, command: DrawCommand, page_height: float) -> None:
    if isinstance(command, (FillRect, StrokeRect)):
        bottom = (page_height - command.y - command.height) * mm
        if isinstance(command, FillRect):
            canv.setFillColor(colors.HexColor(command.color))
            canv.rect(command.x * mm, bottom, command.width * mm, command.height * mm, stroke=0, fill=1)
        else:
            canv.setStrokeColor(colors.HexColor(command.color))
            canv.setLineWidth(0.75)
            canv.rect(command.x * mm, bottom, command.width * mm, command.height * mm, stroke=1, fill=0)
        return

    canv.setFillColor(colors.HexColor(command.color))
    canv.setFont(command.font, command.size)
    baseline = (page_height - command.y) * mm
    if command.align == "right":
        canv.drawRightString(command.x * mm, baseline, command.text)
    else:
        canv.drawString(command.x * mm, baseline, command.text)


def draw_pages(canv: canvas.Canvas, pages: Sequence[Sequence[DrawCommand]], report_config: ReportConfig) -> None:
    for page in pages:
        for command in page:
            _draw_command(canv, command, report_config.page_height)
        canv.showPage()


def render_pdf(
    report: AssessmentReport,
    output_path: Path,
    report_config: ReportConfig | None = None,
    generated_on: date | None = None,
) -> ComposedReport:
    cfg = report_config or load_report_config()
    composed = compose_report(report, cfg, generated_on=generated_on)

    canv = canvas.Canvas(str(output_path), pagesize=(cfg.page_width * mm, cfg.page_height * mm))
    canv.setTitle(cfg.report_title)
    canv.setAuthor(cfg.brand_name)
    draw_pages(canv, composed.pages, cfg)
    canv.save()
    return composed


def generate_assessment_pdf(
    report: AssessmentReport,
    out_dir: Path | None = None,
    report_config: ReportConfig | None = None,
    generated_on: date | None = None,
) -> Path:
    """Render the report and save it as ``{out_dir}/{filename}``.

    Errors are not caught here; callers decide how to surface them.
    """
    target_dir = out_dir or config.OUT_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    output_path = target_dir / report_filename(report.contact_info.company)

    logger.info("Generating assessment PDF %s", output_path)
    composed = render_pdf(report, output_path, report_config=report_config, generated_on=generated_on)
    logger.info("Saved %s (%d pages)", output_path, composed.page_count)
    return output_path
