from __future__ import annotations

from assessment_report.models import CategoryScore, Priority
from assessment_report.pipeline.scoring import (
    build_recommendations,
    category_percentage,
    overall_percentage,
    readiness_level,
    round_half_up,
)


def test_round_half_up() -> None:
    assert round_half_up(62.5) == 63
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_category_percentage() -> None:
    assert category_percentage(18, 20) == 90
    assert category_percentage(5, 8) == 63
    assert category_percentage(3, 0) == 0
    assert category_percentage(30, 20) == 100


def test_overall_percentage_uses_total_points() -> None:
    scores = {
        "A": CategoryScore(10, 12, 83),
        "B": CategoryScore(2, 8, 25),
    }
    assert overall_percentage(scores) == 60


def test_readiness_levels() -> None:
    assert readiness_level(100) == "Advanced"
    assert readiness_level(85) == "Advanced"
    assert readiness_level(84) == "Ready"
    assert readiness_level(70) == "Ready"
    assert readiness_level(55) == "Developing"
    assert readiness_level(54) == "Beginning"


def test_recommendations_follow_category_thresholds() -> None:
    scores = {
        "HR Capability": CategoryScore(13, 20, 65),
        "Risk Management": CategoryScore(13, 20, 65),
        "Organizational Readiness": CategoryScore(2, 20, 10),
        "Change Management": CategoryScore(16, 20, 80),
    }
    recs = build_recommendations(72, scores)
    assert [rec.title for rec in recs] == ["Enhance HR Capabilities"]
    assert recs[0].priority == Priority.MEDIUM.value


def test_low_overall_adds_foundation_first() -> None:
    scores = {
        "Risk Management": CategoryScore(11, 20, 55),
        "Change Management": CategoryScore(10, 20, 50),
    }
    recs = build_recommendations(52, scores)
    assert [rec.title for rec in recs] == [
        "Foundation Building Required",
        "Address Risk Management Gaps",
        "Strengthen Change Management",
    ]
    assert all(len(rec.actions) == 4 for rec in recs)
