"""
Scoring helpers used before a report is laid out.

The results flow turns raw category points into percentages, a readiness
level and a list of recommendations. The PDF layout consumes these values
as given.
"""

from __future__ import annotations

import math
from typing import Dict, List, Mapping

from ..models import CategoryScore, Priority, Recommendation


READINESS_LEVELS = (
    (85, "Advanced"),
    (70, "Ready"),
    (55, "Developing"),
)
BASELINE_LEVEL = "Beginning"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def category_percentage(score: float, max_score: float) -> int:
    if max_score <= 0:
        return 0
    return max(0, min(100, round_half_up(100.0 * score / max_score)))


def overall_percentage(category_scores: Mapping[str, CategoryScore]) -> int:
    total = sum(s.score for s in category_scores.values())
    max_total = sum(s.max_score for s in category_scores.values())
    return category_percentage(total, max_total)


def readiness_level(percentage: float) -> str:
    for minimum, level in READINESS_LEVELS:
        if percentage >= minimum:
            return level
    return BASELINE_LEVEL


CATEGORY_RECOMMENDATIONS: Dict[str, tuple[int, Recommendation]] = {
    "Change Management": (
        70,
        Recommendation(
            title="Strengthen Change Management",
            description="Build robust change management capabilities to ensure successful AI adoption.",
            actions=(
                "Train change champions",
                "Develop communication strategies",
                "Create employee engagement programs",
                "Establish feedback mechanisms",
            ),
            priority=Priority.HIGH.value,
        ),
    ),
    "HR Capability": (
        70,
        Recommendation(
            title="Enhance HR Capabilities",
            description="Upgrade HR skills and systems to manage hybrid workforce effectively.",
            actions=(
                "Invest in HR technology platforms",
                "Develop workforce analytics capabilities",
                "Train on AI collaboration skills",
                "Create new role definitions",
            ),
            priority=Priority.MEDIUM.value,
        ),
    ),
    "Risk Management": (
        60,
        Recommendation(
            title="Address Risk Management Gaps",
            description="Strengthen risk identification and mitigation strategies.",
            actions=(
                "Conduct comprehensive risk assessment",
                "Develop contingency plans",
                "Ensure compliance readiness",
                "Create monitoring systems",
            ),
            priority=Priority.HIGH.value,
        ),
    ),
}

FOUNDATION_RECOMMENDATION = Recommendation(
    title="Foundation Building Required",
    description="Your organization needs comprehensive preparation before AI workforce integration.",
    actions=(
        "Conduct leadership alignment workshops",
        "Develop change management capabilities",
        "Assess current technology infrastructure",
        "Create AI governance framework",
    ),
    priority=Priority.HIGH.value,
)


def build_recommendations(percentage: float, category_scores: Mapping[str, CategoryScore]) -> List[Recommendation]:
    recommendations: List[Recommendation] = []
    if percentage < 55:
        recommendations.append(FOUNDATION_RECOMMENDATION)

    # category order decides recommendation order
    for category, scores in category_scores.items():
        entry = CATEGORY_RECOMMENDATIONS.get(category)
        if entry is None:
            continue
        threshold, recommendation = entry
        if scores.percentage < threshold:
            recommendations.append(recommendation)
    return recommendations
