"""Configuration models and helpers for activity analysis."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_WINDOW_DAYS = 60


@dataclass(slots=True)
class AnalysisSettings:
    """Runtime configuration handed to the analysis pipeline."""

    window_days: int = DEFAULT_WINDOW_DAYS
    verbose: bool = False
    tz_name: Optional[str] = None

    @property
    def window_length(self) -> timedelta:
        return timedelta(days=self.window_days)

    @property
    def time_zone(self) -> Optional[tzinfo]:
        if self.tz_name is None:
            return None
        return resolve_time_zone(self.tz_name)

    @classmethod
    def from_options(
        cls,
        days: int = DEFAULT_WINDOW_DAYS,
        verbose: bool = False,
        tz_name: str | None = None,
    ) -> "AnalysisSettings":
        if days < 1:
            raise ValueError(f"Analysis window must cover at least one day, got {days}.")
        if tz_name:
            resolve_time_zone(tz_name)
        return cls(window_days=days, verbose=verbose, tz_name=tz_name or None)


def resolve_time_zone(tz_name: str) -> tzinfo:
    """Resolve an IANA time zone name such as "Europe/Berlin"."""
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise ValueError(f"Unknown time zone: {tz_name!r}") from exc
