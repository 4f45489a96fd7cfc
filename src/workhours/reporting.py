"""Console and JSON rendering of activity reports."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from .models import ActivityReport, AnalysisWindow

DATETIME_FMT = "%Y-%m-%d %H:%M:%S"


class ReportPrinter:
    """Render human-readable reports in the console."""

    def print_report(self, report: ActivityReport, verbose: bool = False) -> None:
        print(f"Activity between {_fmt(report.window.start)} and {_fmt(report.window.end)}")
        print("-" * 60)
        print(f"First activity:        {_fmt(report.overall_start)}")
        print(f"Last activity:         {_fmt(report.overall_end)}")
        print(f"Active days:           {report.total_active_days}")
        print(f"Longest active streak: {report.max_consecutive_active_days} days")
        print(
            f"Average session:       {format_duration(report.overall_average_duration_minutes)}"
        )
        print()

        print(f"  {'Weekday':<10} {'Start':>5} {'End':>5} {'Session':>8} {'Days':>5}")
        for stat in report.per_weekday.values():
            print(
                f"  {stat.weekday:<10} {stat.average_start:>5} {stat.average_end:>5} "
                f"{format_duration(stat.average_duration_minutes):>8} {stat.active_date_count:>5}"
            )

        if not verbose:
            return

        print()
        print(
            f"Evidence: {report.evidence_count} timestamps, "
            f"{report.filtered_count} outside locked periods"
        )
        if report.locked_intervals:
            print("Locked periods:")
            for interval in report.locked_intervals:
                print(f"  {_fmt(interval.locked_at)} -> {_fmt(interval.unlocked_at)}")
        for stat in report.per_weekday.values():
            print()
            print(f"{stat.weekday} sessions:")
            for session in stat.sessions:
                print(
                    f"  {session.day.isoformat()}  "
                    f"{session.start.strftime('%H:%M')} - {session.end.strftime('%H:%M')}  "
                    f"{format_duration(session.duration_seconds / 60.0)}"
                )

    def print_no_activity(self, window: AnalysisWindow) -> None:
        print(f"No activity in range {_fmt(window.start)} - {_fmt(window.end)}.")


def no_activity_to_dict(window: AnalysisWindow) -> Dict[str, Any]:
    return {"window": _window_to_dict(window), "noActivity": True}


def report_to_dict(report: ActivityReport) -> Dict[str, Any]:
    return {
        "window": _window_to_dict(report.window),
        "noActivity": False,
        "overallStart": report.overall_start.isoformat(),
        "overallEnd": report.overall_end.isoformat(),
        "totalActiveDays": report.total_active_days,
        "maxConsecutiveActiveDays": report.max_consecutive_active_days,
        "perWeekday": {
            name: {
                "averageDurationMinutes": stat.average_duration_minutes,
                "averageStart": stat.average_start,
                "averageEnd": stat.average_end,
                "activeDateCount": stat.active_date_count,
            }
            for name, stat in report.per_weekday.items()
        },
        "overallAverageDurationMinutes": report.overall_average_duration_minutes,
        "evidenceCount": report.evidence_count,
        "filteredCount": report.filtered_count,
        "lockedIntervals": [
            {
                "lockedAt": interval.locked_at.isoformat(),
                "unlockedAt": interval.unlocked_at.isoformat(),
            }
            for interval in report.locked_intervals
        ],
    }


def format_duration(minutes: float) -> str:
    total_minutes = int(round(minutes))
    hours, mins = divmod(total_minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def _window_to_dict(window: AnalysisWindow) -> Dict[str, str]:
    return {"start": window.start.isoformat(), "end": window.end.isoformat()}


def _fmt(value: datetime) -> str:
    return value.strftime(DATETIME_FMT)
