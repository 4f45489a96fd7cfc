"""Timeline normalization and locked-period filtering."""

from __future__ import annotations

import logging
from bisect import bisect_right
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional, Sequence

from .models import AnalysisWindow, LockedInterval

logger = logging.getLogger(__name__)


def to_local(instant: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Return a naive datetime in the local zone.

    Naive values are assumed to be local already. Aware values are converted
    into ``tz``, or into the host zone when ``tz`` is None.
    """
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(tz).replace(tzinfo=None)


def ingest(
    timestamps: Iterable[datetime],
    window: AnalysisWindow,
    tz: Optional[tzinfo] = None,
) -> list[datetime]:
    """Normalize raw evidence and keep only instants inside the window."""
    start = to_local(window.start, tz)
    end = to_local(window.end, tz)
    kept: list[datetime] = []
    dropped = 0
    for value in timestamps:
        local = to_local(value, tz)
        if start <= local <= end:
            kept.append(local)
        else:
            dropped += 1
    if dropped:
        logger.debug("Dropped %d timestamps outside the analysis window.", dropped)
    return kept


def merge_intervals(intervals: Iterable[LockedInterval]) -> list[tuple[datetime, datetime]]:
    """Collapse overlapping or touching closed intervals."""
    merged: list[tuple[datetime, datetime]] = []
    for interval in sorted(intervals, key=lambda item: (item.locked_at, item.unlocked_at)):
        if merged and interval.locked_at <= merged[-1][1]:
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, interval.unlocked_at))
        else:
            merged.append((interval.locked_at, interval.unlocked_at))
    return merged


def filter_timeline(
    timestamps: Iterable[datetime], intervals: Iterable[LockedInterval]
) -> list[datetime]:
    """Drop timestamps inside any locked interval and sort the rest.

    A timestamp ``t`` is excluded when ``a <= t <= b`` for some interval
    ``(a, b)``; both bounds are inclusive.
    """
    merged = merge_intervals(intervals)
    starts = [start for start, _ in merged]
    timeline: list[datetime] = []
    for instant in sorted(timestamps):
        index = bisect_right(starts, instant) - 1
        if index >= 0 and instant <= merged[index][1]:
            continue
        timeline.append(instant)
    logger.debug(
        "Timeline filter kept %d timestamps against %d locked periods.",
        len(timeline),
        len(merged),
    )
    return timeline


def active_dates(timeline: Sequence[datetime]) -> list[date]:
    """Sorted, de-duplicated calendar dates present in the timeline."""
    return sorted({instant.date() for instant in timeline})
