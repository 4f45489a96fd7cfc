"""Domain models for activity evidence and derived statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True, slots=True)
class AnalysisWindow:
    """Fixed historical range of eligible evidence (inclusive bounds)."""

    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


class LockEventKind(str, Enum):
    LOCK = "lock"
    UNLOCK = "unlock"


@dataclass(frozen=True, slots=True)
class LockEvent:
    kind: LockEventKind
    at: datetime


@dataclass(frozen=True, slots=True)
class LockedInterval:
    """Closed period during which the session was screen-locked."""

    locked_at: datetime
    unlocked_at: datetime

    def covers(self, instant: datetime) -> bool:
        return self.locked_at <= instant <= self.unlocked_at


@dataclass(frozen=True, slots=True)
class EvidenceBatch:
    """Everything the collaborators gathered for a single run."""

    window: AnalysisWindow
    timestamps: tuple[datetime, ...] = ()
    lock_events: tuple[LockEvent, ...] = ()


@dataclass(frozen=True, slots=True)
class DaySession:
    """First and last surviving activity on one calendar date."""

    day: date
    start: datetime
    end: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()


@dataclass(frozen=True, slots=True)
class WeekdayStatistic:
    weekday: str
    average_duration_minutes: float
    average_start: str
    average_end: str
    active_date_count: int
    sessions: tuple[DaySession, ...] = field(default=(), compare=False)


@dataclass(frozen=True, slots=True)
class ActivityReport:
    """Consolidated behavioral statistics for one analysis window."""

    window: AnalysisWindow
    overall_start: datetime
    overall_end: datetime
    total_active_days: int
    max_consecutive_active_days: int
    per_weekday: dict[str, WeekdayStatistic]
    overall_average_duration_minutes: float
    evidence_count: int = 0
    filtered_count: int = 0
    locked_intervals: tuple[LockedInterval, ...] = ()
    time_zone: Optional[str] = None
