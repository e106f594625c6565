from __future__ import annotations

from assessment_report.models import AssessmentReport, CategoryScore, Recommendation
from assessment_report.pipeline.qa import validate_report


def _report(**overrides) -> AssessmentReport:
    values = dict(
        overall_percentage=90,
        category_scores={"Change Management": CategoryScore(18, 20, 90)},
        readiness_level="Advanced",
    )
    values.update(overrides)
    return AssessmentReport(**values)


def test_valid_report_has_no_errors() -> None:
    assert validate_report(_report()) == []


def test_percentage_mismatch_is_reported() -> None:
    errors = validate_report(_report(category_scores={"Change Management": CategoryScore(18, 20, 80)}))
    assert errors == ["Category Change Management percentage 80 does not match score (90)"]


def test_out_of_range_and_bad_priority() -> None:
    errors = validate_report(
        _report(
            overall_percentage=120,
            category_scores={"Risk": CategoryScore(1, 0, 0)},
            recommendations=(Recommendation("", "text", (), "Urgent"),),
        )
    )
    assert "Overall percentage out of range: 120" in errors
    assert "Category Risk has no points available" in errors
    assert "Recommendation 1 has no title" in errors
    assert "Recommendation 1 has unknown priority: Urgent" in errors


def test_score_above_max_is_reported_once() -> None:
    errors = validate_report(_report(category_scores={"Change Management": CategoryScore(25, 20, 100)}))
    assert errors == ["Category Change Management score 25 is outside 0..20"]
