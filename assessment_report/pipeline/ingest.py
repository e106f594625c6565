from __future__ import annotations

import base64
import binascii
import hashlib
import json
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping

from slugify import slugify

from ..models import AssessmentReport, CategoryScore, ContactInfo, Recommendation
from .scoring import (
    build_recommendations,
    category_percentage,
    overall_percentage,
    readiness_level,
    round_half_up,
)


DEFAULT_SLUG = "assessment"


def _pick(payload: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def _number(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} must be a number, got {value!r}")
    return float(value)


def _parse_categories(raw: Any) -> Dict[str, CategoryScore]:
    if not isinstance(raw, dict) or not raw:
        raise ValueError("categoryScores must be a non-empty object")
    categories: Dict[str, CategoryScore] = {}
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Category {name!r} must be an object")
        score = _number(_pick(entry, "score"), f"{name}.score")
        max_score = _number(_pick(entry, "maxScore", "max_score"), f"{name}.maxScore")
        percentage = _pick(entry, "percentage")
        if percentage is None:
            percentage = category_percentage(score, max_score)
        categories[str(name)] = CategoryScore(
            score=score,
            max_score=max_score,
            percentage=round_half_up(_number(percentage, f"{name}.percentage")),
        )
    return categories


def _parse_recommendations(raw: Any) -> List[Recommendation]:
    if not isinstance(raw, list):
        raise ValueError("recommendations must be a list")
    recommendations: List[Recommendation] = []
    for i, entry in enumerate(raw, 1):
        if not isinstance(entry, dict):
            raise ValueError(f"Recommendation {i} must be an object")
        actions = entry.get("actions") or []
        if not isinstance(actions, list):
            raise ValueError(f"Recommendation {i} actions must be a list")
        recommendations.append(
            Recommendation(
                title=str(entry.get("title", "")).strip(),
                description=str(entry.get("description", "")).strip(),
                actions=tuple(str(action).strip() for action in actions if str(action).strip()),
                priority=str(entry.get("priority", "Medium")).strip(),
            )
        )
    return recommendations


def parse_report(payload: Mapping[str, Any]) -> AssessmentReport:
    """Build a report from results JSON (camelCase or snake_case keys).

    Values the results page would normally compute (percentages, readiness
    level, recommendations) are derived when absent.
    """
    if not isinstance(payload, Mapping):
        raise ValueError("Report payload must be a JSON object")

    categories = _parse_categories(_pick(payload, "categoryScores", "category_scores"))

    overall = _pick(payload, "overallPercentage", "overall_percentage")
    if overall is None:
        overall = overall_percentage(categories)
    else:
        overall = round_half_up(_number(overall, "overallPercentage"))

    level = str(_pick(payload, "readinessLevel", "readiness_level", default="")).strip() or readiness_level(overall)

    contact = _pick(payload, "contactInfo", "contact_info", default={})
    if not isinstance(contact, dict):
        raise ValueError("contactInfo must be an object")

    raw_recommendations = _pick(payload, "recommendations")
    if raw_recommendations is None:
        recommendations = build_recommendations(overall, categories)
    else:
        recommendations = _parse_recommendations(raw_recommendations)

    return AssessmentReport(
        overall_percentage=overall,
        category_scores=categories,
        readiness_level=level,
        contact_info=ContactInfo(
            name=str(contact.get("name") or "").strip(),
            company=str(contact.get("company") or "").strip(),
        ),
        recommendations=tuple(recommendations),
    )


def load_report(json_path: Path) -> AssessmentReport:
    if not json_path.exists():
        raise FileNotFoundError(f"Report JSON not found: {json_path}")
    with json_path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {json_path}: {exc}") from exc
    return parse_report(payload)


def decode_report(data: str) -> AssessmentReport:
    """Parse the base64 JSON blob the results page carries in its ``data`` query parameter."""
    try:
        raw = base64.b64decode(data.strip(), validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError(f"Could not decode report data: {exc}") from exc
    return parse_report(payload)


def report_to_payload(report: AssessmentReport) -> dict:
    return {
        "overallPercentage": report.overall_percentage,
        "categoryScores": {
            name: {"score": s.score, "maxScore": s.max_score, "percentage": s.percentage}
            for name, s in report.category_scores.items()
        },
        "readinessLevel": report.readiness_level,
        "contactInfo": {"name": report.contact_info.name, "company": report.contact_info.company},
        "recommendations": [
            {
                "title": rec.title,
                "description": rec.description,
                "actions": list(rec.actions),
                "priority": rec.priority,
            }
            for rec in report.recommendations
        ],
    }


def slug_from_company(company: str) -> str:
    if not (company or "").strip():
        return DEFAULT_SLUG
    slug = slugify(company)
    slug = re.sub(r"[^a-z0-9-]+", "-", slug.lower()).strip("-")
    if not slug:
        slug = hashlib.md5(company.encode("utf-8")).hexdigest()[:12]
    if ".." in slug or "/" in slug or "\\" in slug:
        raise ValueError("Invalid slug generated from company")
    return slug
