"""Analysis pipeline: reconcile, filter, aggregate."""

from __future__ import annotations

import logging
from typing import Optional

from .config import AnalysisSettings
from .models import ActivityReport, AnalysisWindow, EvidenceBatch, LockEvent
from .reconcile import reconcile_lock_intervals
from .streaks import longest_streak
from .summary import reduce_summary
from .timeline import active_dates, filter_timeline, ingest, to_local
from .weekdays import aggregate_weekdays

logger = logging.getLogger(__name__)


def analyze(
    batch: EvidenceBatch, settings: Optional[AnalysisSettings] = None
) -> Optional[ActivityReport]:
    """Run the full pipeline over one evidence batch.

    Returns None when no activity survives locked-period removal; that is a
    completed run with nothing to report, not a failure.
    """
    settings = settings or AnalysisSettings()
    tz = settings.time_zone
    window = AnalysisWindow(
        start=to_local(batch.window.start, tz), end=to_local(batch.window.end, tz)
    )

    pool = ingest(batch.timestamps, window, tz)
    events: list[LockEvent] = []
    for event in batch.lock_events:
        local = to_local(event.at, tz)
        if window.contains(local):
            events.append(LockEvent(kind=event.kind, at=local))
    intervals = reconcile_lock_intervals(events, window.end)
    logger.info(
        "Reconciled %d lock events into %d locked periods.", len(events), len(intervals)
    )

    timeline = filter_timeline(pool, intervals)
    if not timeline:
        logger.info(
            "No activity in range %s - %s (%d timestamps before filtering).",
            window.start,
            window.end,
            len(pool),
        )
        return None

    stats = aggregate_weekdays(timeline)
    summary = reduce_summary(timeline, stats)
    report = ActivityReport(
        window=window,
        overall_start=summary.overall_start,
        overall_end=summary.overall_end,
        total_active_days=summary.total_active_days,
        max_consecutive_active_days=longest_streak(active_dates(timeline)),
        per_weekday=stats,
        overall_average_duration_minutes=summary.overall_average_duration_minutes,
        evidence_count=len(pool),
        filtered_count=len(timeline),
        locked_intervals=tuple(intervals),
        time_zone=settings.tz_name,
    )
    logger.info(
        "Analyzed %d of %d timestamps across %d active days.",
        report.filtered_count,
        report.evidence_count,
        report.total_active_days,
    )
    return report
