"""Pair lock/unlock events into locked periods."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from .models import LockedInterval, LockEvent, LockEventKind

logger = logging.getLogger(__name__)


def reconcile_lock_intervals(
    events: Iterable[LockEvent], window_end: datetime
) -> list[LockedInterval]:
    """Convert a chronological lock/unlock stream into locked intervals.

    Each unlock closes the most recent pending lock. Unlocks with nothing
    pending are dropped. Locks still pending when the stream ends are treated
    as locked until ``window_end``.
    """
    pending: list[datetime] = []
    intervals: list[LockedInterval] = []
    unmatched_unlocks = 0
    skipped = 0

    for event in events:
        if event.kind is LockEventKind.LOCK:
            pending.append(event.at)
            continue
        if not pending:
            unmatched_unlocks += 1
            continue
        locked_at = pending.pop()
        if event.at < locked_at:
            skipped += 1
            continue
        intervals.append(LockedInterval(locked_at=locked_at, unlocked_at=event.at))

    while pending:
        locked_at = pending.pop()
        if window_end < locked_at:
            skipped += 1
            continue
        intervals.append(LockedInterval(locked_at=locked_at, unlocked_at=window_end))

    if unmatched_unlocks:
        logger.debug("Dropped %d unlock events without a pending lock.", unmatched_unlocks)
    if skipped:
        logger.debug("Skipped %d inverted lock intervals.", skipped)
    return intervals
