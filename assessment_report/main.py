from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List, Optional
import logging

import typer

from . import config
from .models import RunStatus, reset_engine
from .pipeline.ingest import decode_report, load_report
from .pipeline.render_preview import page_texts
from .pipeline.run import list_runs, run_reports

app = typer.Typer(help="HR readiness assessment PDF reports")


def _setup(out: Optional[Path], verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if out:
        config.set_out_dir(out)
        reset_engine()


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {value}") from exc


def _echo_results(results: dict[str, list[str]]) -> None:
    typer.echo(f"READY: {len(results['READY'])}")
    typer.echo(f"FAILED: {len(results['FAILED'])}")
    for slug in results["FAILED"]:
        typer.echo(f"FAILED: {slug}")


@app.command()
def generate(
    inputs: List[Path] = typer.Argument(..., help="Assessment results JSON files"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    previews: int = typer.Option(0, "--previews", help="Render PNG previews of the first N pages"),
    on: Optional[str] = typer.Option(None, "--date", help="Assessment date (YYYY-MM-DD), defaults to today"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    generated_on = _parse_date(on)
    _setup(out, verbose)
    reports = [load_report(path) for path in inputs]
    typer.echo(f"Loaded {len(reports)} reports")
    _echo_results(run_reports(reports, previews=previews, generated_on=generated_on))


@app.command()
def decode(
    data: str = typer.Argument(..., help="Base64 results blob from the results page"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    previews: int = typer.Option(0, "--previews", help="Render PNG previews of the first N pages"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    _setup(out, verbose)
    _echo_results(run_reports([decode_report(data)], previews=previews))


@app.command()
def history(
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    failed: bool = typer.Option(False, "--failed", help="Show failed runs only"),
) -> None:
    _setup(out, False)
    runs = list_runs(RunStatus.FAILED if failed else None)
    if not runs:
        typer.echo("No reports generated yet")
        return
    for run in runs:
        line = f"{run.id}\t{run.status.value}\t{run.folder}\t{run.overall_percentage}%\t{run.filename}"
        if run.fail_detail:
            line += f"\t{run.fail_detail}"
        typer.echo(line)


@app.command()
def inspect(pdf: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Print the text of each page of a generated report."""
    for index, text in enumerate(page_texts(pdf), 1):
        typer.echo(f"--- page {index} ---")
        typer.echo(text.rstrip())


if __name__ == "__main__":
    app()
