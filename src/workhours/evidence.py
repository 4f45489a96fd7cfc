"""Evidence collaborators that assemble an EvidenceBatch for the pipeline."""

from __future__ import annotations

import getpass
import logging
import os
from datetime import datetime, timedelta, tzinfo
from pathlib import Path
from typing import Iterable, Optional

import psutil
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import AnalysisSettings
from .models import AnalysisWindow, EvidenceBatch, LockEvent, LockEventKind
from .timeline import to_local

logger = logging.getLogger(__name__)


class EvidenceFormatError(ValueError):
    """Raised when an evidence file cannot be read or does not validate."""


class WindowPayload(BaseModel):
    start: datetime
    end: datetime

    model_config = ConfigDict(extra="forbid")


class LockEventPayload(BaseModel):
    kind: LockEventKind
    at: datetime

    model_config = ConfigDict(extra="forbid")


class EvidencePayload(BaseModel):
    window: Optional[WindowPayload] = None
    timestamps: list[datetime] = Field(default_factory=list)
    lock_events: list[LockEventPayload] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


def local_now(tz: Optional[tzinfo] = None) -> datetime:
    """Current wall-clock time as a naive datetime in ``tz`` or the host zone."""
    if tz is None:
        return datetime.now()
    return datetime.now(tz).replace(tzinfo=None)


def build_window(now: datetime, length: timedelta) -> AnalysisWindow:
    return AnalysisWindow(start=now - length, end=now)


def load_evidence_file(
    path: Path,
    settings: AnalysisSettings,
    now: Optional[datetime] = None,
) -> EvidenceBatch:
    """Load a JSON evidence document into an EvidenceBatch.

    When the document carries no window, the window ends at ``now`` (the
    current time in the configured zone by default) and spans
    ``settings.window_length``. Lock events are sorted by instant.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EvidenceFormatError(f"Cannot read evidence file {path}: {exc}") from exc
    try:
        payload = EvidencePayload.model_validate_json(text)
    except ValidationError as exc:
        raise EvidenceFormatError(f"Invalid evidence file {path}: {exc}") from exc

    tz = settings.time_zone
    if payload.window is not None:
        window = AnalysisWindow(start=payload.window.start, end=payload.window.end)
        if to_local(window.end, tz) < to_local(window.start, tz):
            raise EvidenceFormatError(
                f"Invalid evidence file {path}: window ends before it starts"
            )
    else:
        window = build_window(now or local_now(tz), settings.window_length)

    lock_events = sorted(
        (LockEvent(kind=item.kind, at=item.at) for item in payload.lock_events),
        key=lambda event: to_local(event.at, tz),
    )
    logger.info(
        "Loaded %d timestamps and %d lock events from %s.",
        len(payload.timestamps),
        len(lock_events),
        path,
    )
    return EvidenceBatch(
        window=window,
        timestamps=tuple(payload.timestamps),
        lock_events=tuple(lock_events),
    )


def _from_epoch(seconds: float, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        return datetime.fromtimestamp(seconds)
    return datetime.fromtimestamp(seconds, tz).replace(tzinfo=None)


def collect_file_times(
    roots: Iterable[Path],
    window: AnalysisWindow,
    tz: Optional[tzinfo] = None,
) -> list[datetime]:
    """Collect modification and access times of files under ``roots``."""
    start = to_local(window.start, tz)
    end = to_local(window.end, tz)
    found: list[datetime] = []
    errors = 0

    def _on_error(exc: OSError) -> None:
        nonlocal errors
        errors += 1
        logger.debug("Skipping unreadable directory: %s", exc)

    for root in roots:
        for dirpath, _dirnames, filenames in os.walk(root, onerror=_on_error):
            for name in filenames:
                try:
                    stat = os.stat(os.path.join(dirpath, name), follow_symlinks=False)
                except OSError:
                    errors += 1
                    continue
                for seconds in (stat.st_mtime, stat.st_atime):
                    instant = _from_epoch(seconds, tz)
                    if start <= instant <= end:
                        found.append(instant)

    if errors:
        logger.debug("Skipped %d unreadable filesystem entries.", errors)
    logger.info("Collected %d file timestamps.", len(found))
    return found


def collect_session_starts(
    window: AnalysisWindow,
    user: Optional[str] = None,
    tz: Optional[tzinfo] = None,
) -> list[datetime]:
    """Collect start times of the user's logged-in sessions."""
    user = user or getpass.getuser()
    try:
        sessions = psutil.users()
    except (psutil.Error, OSError):
        logger.exception("Failed to query logged-in sessions; skipping.")
        return []

    start = to_local(window.start, tz)
    end = to_local(window.end, tz)
    found: list[datetime] = []
    for session in sessions:
        if session.name.casefold() != user.casefold():
            continue
        instant = _from_epoch(session.started, tz)
        if start <= instant <= end:
            found.append(instant)
    logger.info("Collected %d session start times for %s.", len(found), user)
    return found
