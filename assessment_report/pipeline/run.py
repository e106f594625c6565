from __future__ import annotations

from datetime import date
from pathlib import Path
import json
import logging
from typing import Iterable, List

from sqlmodel import select

from .. import storage
from ..config import ReportConfig
from ..models import AssessmentReport, ReportRun, RunStatus, get_session, init_db
from .ingest import report_to_payload, slug_from_company
from .qa import validate_report
from .render_pdf import ComposedReport, render_pdf, report_filename
from .render_preview import render_previews


logger = logging.getLogger(__name__)


def process_report(
    report: AssessmentReport,
    folder: str,
    previews: int = 0,
    report_config: ReportConfig | None = None,
    generated_on: date | None = None,
) -> tuple[RunStatus, List[tuple[str, Path]], List[str], ComposedReport | None]:
    """Validate and render one report into its claimed run folder."""
    errors = validate_report(report)
    if errors:
        return RunStatus.FAILED, [], errors, None

    artifacts: List[tuple[str, Path]] = []
    staging = storage.staging_dir(folder)
    try:
        input_path = staging / storage.INPUT_FILE
        input_path.write_text(json.dumps(report_to_payload(report), indent=2), encoding="utf-8")
        artifacts.append(("input", input_path))

        pdf_path = staging / report_filename(report.contact_info.company)
        composed = render_pdf(report, pdf_path, report_config=report_config, generated_on=generated_on)
        artifacts.append(("pdf", pdf_path))

        if previews:
            for i, preview in enumerate(render_previews(pdf_path, staging, pages=previews), 1):
                artifacts.append((f"preview_{i}", preview))
    except Exception:
        storage.discard_staging(folder)
        raise

    return RunStatus.READY, storage.publish(folder, artifacts), [], composed


def run_reports(
    reports: Iterable[AssessmentReport],
    previews: int = 0,
    report_config: ReportConfig | None = None,
    generated_on: date | None = None,
) -> dict[str, list[str]]:
    """Generate each report into its own run folder; returns folder names by status."""
    init_db()
    results: dict[str, list[str]] = {"READY": [], "FAILED": []}
    with get_session() as session:
        for report in reports:
            slug = slug_from_company(report.contact_info.company)
            folder = storage.claim_run_folder(slug)
            try:
                status, artifacts, errors, composed = process_report(
                    report,
                    folder,
                    previews=previews,
                    report_config=report_config,
                    generated_on=generated_on,
                )
            except Exception as exc:
                logger.exception("Report generation failed for %s", folder)
                status = RunStatus.FAILED
                artifacts = []
                errors = [str(exc) or exc.__class__.__name__]
                composed = None
                fail_code = "PIPELINE_ERROR"
            else:
                fail_code = "VALIDATION_FAILED" if errors else None

            run = ReportRun(
                slug=slug,
                folder=folder,
                company=report.contact_info.company,
                participant=report.contact_info.name,
                overall_percentage=report.overall_percentage,
                readiness_level=report.readiness_level,
                filename=report_filename(report.contact_info.company),
                page_count=composed.page_count if composed else 0,
                status=status,
                fail_code=fail_code,
                fail_detail=errors[0] if errors else None,
            )
            session.add(run)
            session.commit()
            session.refresh(run)

            if status == RunStatus.READY:
                storage.record_artifacts(run, artifacts)
            else:
                storage.record_artifacts(run, [("error", storage.write_error_log(folder, errors))])
            results[status.value].append(folder)
    return results


def list_runs(status: RunStatus | None = None) -> List[ReportRun]:
    init_db()
    with get_session() as session:
        statement = select(ReportRun).order_by(ReportRun.id)
        if status is not None:
            statement = statement.where(ReportRun.status == status)
        return list(session.exec(statement))
