from __future__ import annotations

import logging
from typing import List

from ..models import AssessmentReport, Priority
from .scoring import round_half_up

logger = logging.getLogger(__name__)

ALLOWED_PRIORITIES = {p.value for p in Priority}


def _in_range(value: float) -> bool:
    return 0 <= value <= 100


def validate_report(report: AssessmentReport) -> List[str]:
    """Check a report before rendering. The layout itself trusts its input."""
    errors: List[str] = []
    if not _in_range(report.overall_percentage):
        errors.append(f"Overall percentage out of range: {report.overall_percentage}")
    if not report.readiness_level.strip():
        errors.append("Readiness level is empty")

    for name, scores in report.category_scores.items():
        if not name.strip():
            errors.append("Category name is empty")
            continue
        if scores.max_score <= 0:
            errors.append(f"Category {name} has no points available")
            continue
        if scores.score < 0 or scores.score > scores.max_score:
            errors.append(f"Category {name} score {scores.score:g} is outside 0..{scores.max_score:g}")
            continue
        if not _in_range(scores.percentage):
            errors.append(f"Category {name} percentage out of range: {scores.percentage}")
        expected = round_half_up(100.0 * scores.score / scores.max_score)
        if scores.percentage != expected:
            logger.info("Category %s percentage %s does not match %s", name, scores.percentage, expected)
            errors.append(f"Category {name} percentage {scores.percentage} does not match score ({expected})")

    for i, rec in enumerate(report.recommendations, 1):
        if not rec.title:
            errors.append(f"Recommendation {i} has no title")
        if rec.priority not in ALLOWED_PRIORITIES:
            errors.append(f"Recommendation {i} has unknown priority: {rec.priority}")
    return errors
