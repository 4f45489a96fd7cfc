"""Reduce per-weekday statistics into an overall summary."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Sequence

from .models import WeekdayStatistic
from .timeline import active_dates


@dataclass(frozen=True, slots=True)
class OverallSummary:
    overall_start: datetime
    overall_end: datetime
    total_active_days: int
    overall_average_duration_minutes: float


def average_duration_minutes(stats: Mapping[str, WeekdayStatistic]) -> float:
    """Mean of the weekday averages; weekdays without active dates do not count."""
    present = [s.average_duration_minutes for s in stats.values() if s.active_date_count > 0]
    if not present:
        return 0.0
    return sum(present) / len(present)


def reduce_summary(
    timeline: Sequence[datetime], stats: Mapping[str, WeekdayStatistic]
) -> OverallSummary:
    """Summarize a non-empty filtered timeline."""
    if not timeline:
        raise ValueError("Cannot summarize an empty timeline.")
    return OverallSummary(
        overall_start=min(timeline),
        overall_end=max(timeline),
        total_active_days=len(active_dates(timeline)),
        overall_average_duration_minutes=average_duration_minutes(stats),
    )
