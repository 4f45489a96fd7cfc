"""Consecutive active-day detection."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

ONE_DAY = timedelta(days=1)


def longest_streak(dates: Iterable[date]) -> int:
    """Length of the longest run of consecutive calendar dates."""
    ordered = sorted(set(dates))
    if not ordered:
        return 0
    best = current = 1
    for previous, day in zip(ordered, ordered[1:]):
        if day - previous == ONE_DAY:
            current += 1
            best = max(best, current)
        else:
            current = 1
    return best
