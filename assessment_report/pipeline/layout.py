"""
Page model for the assessment report.

Section renderers never touch a ReportLab canvas. They append draw commands
to a ``Layout``, which owns the write cursor and decides when a new page is
needed. ``render_pdf.draw_pages`` replays the commands onto a real canvas.

Coordinates are millimetres measured from the top-left corner of the page,
so the cursor grows downward as content is written. Text ``y`` is the baseline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from ..config import ReportConfig

logger = logging.getLogger(__name__)


class LayoutError(Exception):
    """Raised when content cannot be placed on the page model."""


class BlockTooTallError(LayoutError):
    def __init__(self, required: float, available: float) -> None:
        super().__init__(
            f"Block of {required:.1f}mm cannot fit on a page with {available:.1f}mm of writable height"
        )
        self.required = required
        self.available = available


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class StrokeRect:
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    font: str
    size: float
    color: str
    align: str = "left"  # left | right (x is the right edge)


DrawCommand = Union[FillRect, StrokeRect, Text]


def text_width(text: str, font_name: str, font_size: float) -> float:
    return stringWidth(text, font_name, font_size) / mm


def wrap_text(text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """
    Word wrap measured with the real font metrics.
    A single word wider than the line is kept whole on a line of its own.
    """
    words = (text or "").split()
    if not words:
        return [""]

    lines: List[str] = []
    cur: List[str] = []

    for w in words:
        test = " ".join(cur + [w])
        if text_width(test, font_name, font_size) <= max_width:
            cur.append(w)
            continue

        if cur:
            lines.append(" ".join(cur))
            cur = [w]
        else:
            lines.append(w)

    if cur:
        lines.append(" ".join(cur))

    return lines


class Layout:
    """Cursor, page list and page-break decision for one document."""

    def __init__(self, config: ReportConfig, header: Optional[Callable[["Layout"], None]] = None) -> None:
        self.config = config
        self.pages: List[List[DrawCommand]] = []
        self.y = config.margin
        self._header = header
        self.add_page()
        # first writable position below the running header
        self.body_top = self.y

    @property
    def bottom_limit(self) -> float:
        return self.config.page_height - self.config.margin

    @property
    def writable_height(self) -> float:
        return self.bottom_limit - self.body_top

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def page_index(self) -> int:
        return len(self.pages) - 1

    def add_page(self) -> None:
        self.pages.append([])
        self.y = self.config.margin
        if self._header is not None:
            self._header(self)

    def ensure_space(self, required: float) -> bool:
        """Start a new page when ``required`` does not fit below the cursor.

        Returns True when a page was added.
        """
        if required > self.writable_height:
            raise BlockTooTallError(required, self.writable_height)
        if self.y + required > self.bottom_limit:
            logger.debug("Page break at y=%.1f for %.1fmm block", self.y, required)
            self.add_page()
            return True
        return False

    def draw(self, command: DrawCommand) -> None:
        self.pages[-1].append(command)

    def advance(self, dy: float) -> None:
        self.y += dy

    def write_lines(
        self,
        lines: Sequence[str],
        x: float,
        line_height: float,
        font_name: str,
        font_size: float,
        color: str,
        trailing: float = 0.0,
    ) -> None:
        """Write a wrapped paragraph, keeping it on one page when it can fit one.

        A paragraph taller than a whole page is split between lines instead.
        """
        block = len(lines) * line_height + trailing
        if block <= self.writable_height:
            self.ensure_space(block)
            for i, line in enumerate(lines):
                self.draw(Text(x, self.y + i * line_height, line, font_name, font_size, color))
            self.advance(block)
            return

        for line in lines:
            self.ensure_space(line_height)
            self.draw(Text(x, self.y, line, font_name, font_size, color))
            self.advance(line_height)
        self.advance(trailing)
