"""Command-line interface for the working-hours profiler."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, NoReturn, Optional

import typer

from .config import DEFAULT_WINDOW_DAYS, AnalysisSettings
from .engine import analyze
from .evidence import (
    EvidenceFormatError,
    build_window,
    collect_file_times,
    collect_session_starts,
    load_evidence_file,
    local_now,
)
from .models import EvidenceBatch
from .paths import get_log_path
from .reporting import ReportPrinter, no_activity_to_dict, report_to_dict

logger = logging.getLogger(__name__)

app = typer.Typer(help="Infer habitual working hours from activity evidence.")


@app.callback(no_args_is_help=True)
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: bool = typer.Option(
        False, "--log-file", help="Also write logs to the per-user log directory."
    ),
) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(get_log_path(), encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=handlers,
    )


def _settings(days: int, tz_name: Optional[str], details: bool) -> AnalysisSettings:
    try:
        return AnalysisSettings.from_options(days=days, verbose=details, tz_name=tz_name)
    except ValueError as exc:
        _fail(str(exc))


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _run(batch: EvidenceBatch, settings: AnalysisSettings, json_output: bool) -> None:
    report = analyze(batch, settings)
    if json_output:
        if report is not None:
            payload = report_to_dict(report)
        else:
            payload = no_activity_to_dict(batch.window)
        typer.echo(json.dumps(payload, indent=2))
        return
    printer = ReportPrinter()
    if report is None:
        printer.print_no_activity(batch.window)
        return
    printer.print_report(report, verbose=settings.verbose)


@app.command(name="analyze")
def analyze_command(
    evidence: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="JSON evidence file to analyze."
    ),
    days: int = typer.Option(
        DEFAULT_WINDOW_DAYS,
        "--days",
        min=1,
        help="Length of the analysis window when the file does not define one.",
    ),
    tz_name: Optional[str] = typer.Option(
        None, "--tz", help="IANA time zone for local times. Defaults to the host zone."
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the report as JSON."),
    details: bool = typer.Option(
        False, "--details", help="Include per-date sessions and locked periods."
    ),
) -> None:
    """Analyze a previously gathered evidence file."""
    settings = _settings(days, tz_name, details)
    try:
        batch = load_evidence_file(evidence, settings)
    except EvidenceFormatError as exc:
        _fail(str(exc))
    _run(batch, settings, json_output)


@app.command()
def scan(
    roots: Optional[List[Path]] = typer.Option(
        None,
        "--root",
        file_okay=False,
        help="Directory whose file times count as activity. Repeatable.",
    ),
    days: int = typer.Option(
        DEFAULT_WINDOW_DAYS, "--days", min=1, help="Length of the analysis window in days."
    ),
    tz_name: Optional[str] = typer.Option(
        None, "--tz", help="IANA time zone for local times. Defaults to the host zone."
    ),
    sessions: bool = typer.Option(
        True,
        "--sessions/--no-sessions",
        help="Include start times of the current user's logged-in sessions.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the report as JSON."),
    details: bool = typer.Option(
        False, "--details", help="Include per-date sessions and locked periods."
    ),
) -> None:
    """Gather evidence from this workstation and analyze it."""
    settings = _settings(days, tz_name, details)
    tz = settings.time_zone
    window = build_window(local_now(tz), settings.window_length)

    timestamps: list[datetime] = []
    if roots:
        timestamps.extend(collect_file_times(roots, window, tz))
    if sessions:
        timestamps.extend(collect_session_starts(window, tz=tz))
    logger.info("No lock event source available; no periods will be filtered.")
    batch = EvidenceBatch(window=window, timestamps=tuple(timestamps))
    _run(batch, settings, json_output)
