"""Per-weekday session statistics."""

from __future__ import annotations

from datetime import datetime
from itertools import groupby
from typing import Iterable, Sequence

from .models import DaySession, WeekdayStatistic

WEEKDAY_NAMES: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def day_sessions(timeline: Iterable[datetime]) -> list[DaySession]:
    """Partition the timeline into one session per calendar date.

    The timeline is sorted first so that each date forms a contiguous run.
    """
    sessions: list[DaySession] = []
    for day, instants in groupby(sorted(timeline), key=lambda instant: instant.date()):
        run = list(instants)
        sessions.append(DaySession(day=day, start=run[0], end=run[-1]))
    return sessions


def seconds_since_midnight(instant: datetime) -> float:
    return (
        instant.hour * 3600
        + instant.minute * 60
        + instant.second
        + instant.microsecond / 1_000_000
    )


def format_time_of_day(seconds: float) -> str:
    """Render seconds since midnight as HH:MM, truncated to the minute."""
    whole = int(seconds)
    hours, remainder = divmod(whole, 3600)
    return f"{hours:02d}:{remainder // 60:02d}"


def weekday_statistic(weekday: str, sessions: Sequence[DaySession]) -> WeekdayStatistic:
    """Average one weekday's sessions.

    Start and end times are linear means of seconds since midnight, so a
    23:50 start and a 00:10 start average to about noon.
    """
    count = len(sessions)
    average_duration = sum(s.duration_seconds for s in sessions) / count
    average_start = sum(seconds_since_midnight(s.start) for s in sessions) / count
    average_end = sum(seconds_since_midnight(s.end) for s in sessions) / count
    return WeekdayStatistic(
        weekday=weekday,
        average_duration_minutes=average_duration / 60.0,
        average_start=format_time_of_day(average_start),
        average_end=format_time_of_day(average_end),
        active_date_count=count,
        sessions=tuple(sessions),
    )


def aggregate_weekdays(timeline: Iterable[datetime]) -> dict[str, WeekdayStatistic]:
    """Compute statistics for every weekday with at least one active date.

    Keys are weekday names ordered Monday through Sunday.
    """
    sessions = sorted(day_sessions(timeline), key=lambda s: (s.day.weekday(), s.day))
    stats: dict[str, WeekdayStatistic] = {}
    for weekday_index, group in groupby(sessions, key=lambda s: s.day.weekday()):
        name = WEEKDAY_NAMES[weekday_index]
        stats[name] = weekday_statistic(name, list(group))
    return stats
