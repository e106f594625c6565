"""
Run folders and artifact records.

Every run owns one folder under ``OUT_DIR``. The first run for a company
takes the bare slug and later runs with the same slug take ``slug-2``,
``slug-3`` and so on, so a run never writes into another run's folder.
Output is built in a hidden staging folder and moved into the claimed
folder once the PDF and its previews exist.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable, List

from . import config
from .models import Artifact, ReportRun, get_session


INPUT_FILE = "report.json"
ERROR_FILE = "error.log"


def preview_filename(page_number: int) -> str:
    return f"preview_{page_number}.png"


def claim_run_folder(slug: str) -> str:
    """Create an empty folder for a new run and return its name."""
    config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    folder, counter = slug, 1
    while True:
        try:
            (config.OUT_DIR / folder).mkdir()
            return folder
        except FileExistsError:
            counter += 1
            folder = f"{slug}-{counter}"


def staging_dir(folder: str) -> Path:
    path = config.OUT_DIR / f".{folder}.staging"
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path


def discard_staging(folder: str) -> None:
    shutil.rmtree(config.OUT_DIR / f".{folder}.staging", ignore_errors=True)


def publish(folder: str, artifacts: Iterable[tuple[str, Path]]) -> List[tuple[str, Path]]:
    """Move staged files into the run folder and return their final paths."""
    final_dir = config.OUT_DIR / folder
    final_dir.rmdir()
    (config.OUT_DIR / f".{folder}.staging").replace(final_dir)
    return [(artifact_type, final_dir / path.name) for artifact_type, path in artifacts]


def write_error_log(folder: str, errors: List[str]) -> Path:
    path = config.OUT_DIR / folder / ERROR_FILE
    path.write_text("\n".join(errors) or "Unknown error", encoding="utf-8")
    return path


def record_artifacts(run: ReportRun, artifacts: Iterable[tuple[str, Path]]) -> None:
    with get_session() as session:
        for artifact_type, path in artifacts:
            session.add(Artifact(run_id=run.id, type=artifact_type, path=path.relative_to(config.OUT_DIR).as_posix()))
        session.commit()
