from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, Tuple
import json


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"
DB_PATH = OUT_DIR / "reports.db"
STYLE_PRESET_PATH = BASE_DIR / "assets" / "brand" / "report_style.json"

GENERIC_FILENAME = "HR_Readiness_Assessment.pdf"
FILENAME_SUFFIX = "_HR_Readiness_Assessment.pdf"

NEXT_STEPS: Tuple[str, ...] = (
    "Schedule a consultation with our HR transformation experts",
    "Review detailed recommendations with your leadership team",
    "Develop a phased implementation plan for AI workforce integration",
    "Establish metrics and KPIs for measuring transformation success",
    "Begin with foundational changes in your highest-priority areas",
)


@dataclass(frozen=True)
class ScoreTier:
    minimum: int
    color: str
    interpretation: str


# Highest band first; a percentage falls into the first tier whose minimum it reaches.
SCORE_TIERS: Tuple[ScoreTier, ...] = (
    ScoreTier(
        85,
        "#22C55E",
        "Your organization demonstrates advanced readiness for AI workforce integration "
        "with strong foundations across all key areas.",
    ),
    ScoreTier(
        70,
        "#3B82F6",
        "Your organization shows good readiness for AI workforce integration "
        "with solid capabilities in most areas.",
    ),
    ScoreTier(
        55,
        "#F59E0B",
        "Your organization is developing readiness for AI workforce integration "
        "but needs focused improvement in several areas.",
    ),
    ScoreTier(
        0,
        "#EF4444",
        "Your organization requires significant preparation before AI workforce integration, "
        "with fundamental gaps that need addressing.",
    ),
)


@dataclass(frozen=True)
class ReportConfig:
    """Everything the report layout needs that is not part of the input record.

    Geometry is in millimetres, font sizes in points.
    """

    page_width: float = 210.0
    page_height: float = 297.0
    margin: float = 20.0
    font_name: str = "Helvetica"
    bold_font_name: str = "Helvetica-Bold"

    brand_name: str = "Synergies4"
    tagline: str = "AI-Powered Professional Development"
    report_title: str = "HR Readiness Assessment Report"
    subtitle_suffix: str = "Agentic Workforce Readiness"
    copyright_line: str = "© 2025 Synergies4. All rights reserved."
    contact_line: str = "For questions about this assessment, contact us at synergies4ai.com"

    colors: Dict[str, str] = field(
        default_factory=lambda: {
            "brand": "#14B8A6",
            "text": "#000000",
            "muted": "#646464",
            "inverse": "#FFFFFF",
            "summary_fill": "#F0F8FF",
            "summary_accent": "#3B82F6",
            "track": "#E6E6E6",
            "footer_fill": "#F8FAFC",
            "priority_high": "#EF4444",
            "priority_other": "#F59E0B",
        }
    )
    next_steps: Tuple[str, ...] = NEXT_STEPS
    score_tiers: Tuple[ScoreTier, ...] = SCORE_TIERS

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    def color(self, key: str) -> str:
        return self.colors[key]


def load_report_config(path: Path | None = None) -> ReportConfig:
    """Overlay the JSON style preset on the built-in defaults.

    Unknown keys are ignored; a missing preset file yields the defaults.
    """
    preset_path = path or STYLE_PRESET_PATH
    if not preset_path.exists():
        return ReportConfig()
    with preset_path.open("r", encoding="utf-8") as handle:
        preset = json.load(handle)

    base = ReportConfig()
    known = {f.name for f in fields(ReportConfig)}
    overrides = {k: v for k, v in preset.items() if k in known and k not in ("colors", "score_tiers")}
    if "next_steps" in overrides:
        overrides["next_steps"] = tuple(str(step) for step in overrides["next_steps"])
    if isinstance(preset.get("colors"), dict):
        overrides["colors"] = {**base.colors, **preset["colors"]}
    return replace(base, **overrides)


def set_out_dir(path: Path) -> None:
    global OUT_DIR, DB_PATH
    OUT_DIR = path
    DB_PATH = OUT_DIR / "reports.db"
