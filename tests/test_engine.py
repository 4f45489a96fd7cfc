"""End-to-end tests for the analysis pipeline."""

from datetime import datetime, timezone

from conftest import at, lock, unlock

from workhours.config import AnalysisSettings
from workhours.engine import analyze
from workhours.models import AnalysisWindow, EvidenceBatch, LockedInterval


def january_batch() -> EvidenceBatch:
    window = AnalysisWindow(start=at(1), end=at(31, 23, 59, 59))
    timestamps = (
        at(1, 12, 30),  # locked
        at(1, 8),
        at(1, 17),
        at(2, 18),
        at(2, 9),
        at(3, 10),
        at(5, 9, 30),
        at(6, 11),  # after the trailing lock
        at(5, 10, month=2),  # outside the window
    )
    lock_events = (
        lock(at(1, 12)),
        unlock(at(1, 13)),
        lock(at(5, 20)),
    )
    return EvidenceBatch(window=window, timestamps=timestamps, lock_events=lock_events)


class TestAnalyze:
    """Full pipeline over a month of evidence."""

    def test_report_contents(self):
        report = analyze(january_batch())

        assert report is not None
        assert report.overall_start == at(1, 8)
        assert report.overall_end == at(5, 9, 30)
        assert report.total_active_days == 4
        assert report.max_consecutive_active_days == 3
        assert report.evidence_count == 8
        assert report.filtered_count == 6
        assert report.locked_intervals == (
            LockedInterval(at(1, 12), at(1, 13)),
            LockedInterval(at(5, 20), at(31, 23, 59, 59)),
        )

        assert list(report.per_weekday) == ["Monday", "Tuesday", "Wednesday", "Friday"]
        monday = report.per_weekday["Monday"]
        assert monday.average_duration_minutes == 540.0
        assert monday.average_start == "08:00"
        assert monday.average_end == "17:00"
        assert monday.active_date_count == 1
        assert report.per_weekday["Wednesday"].average_duration_minutes == 0.0
        assert report.overall_average_duration_minutes == 270.0

    def test_identical_inputs_give_identical_reports(self):
        assert analyze(january_batch()) == analyze(january_batch())

    def test_everything_locked_reports_no_activity(self):
        window = AnalysisWindow(start=at(1), end=at(2))
        batch = EvidenceBatch(
            window=window,
            timestamps=(at(1, 9), at(1, 17)),
            lock_events=(lock(at(1, 8)),),
        )

        assert analyze(batch) is None

    def test_empty_pool_reports_no_activity(self):
        batch = EvidenceBatch(window=AnalysisWindow(start=at(1), end=at(2)))
        assert analyze(batch) is None

    def test_lock_before_window_is_ignored(self):
        """The unlock loses its lock when the lock precedes the window."""
        window = AnalysisWindow(start=at(1), end=at(2))
        batch = EvidenceBatch(
            window=window,
            timestamps=(at(1, 9),),
            lock_events=(lock(datetime(2023, 12, 31, 22)), unlock(at(1, 10))),
        )

        report = analyze(batch)

        assert report is not None
        assert report.locked_intervals == ()
        assert report.filtered_count == 1


class TestTimeZones:
    def test_aware_evidence_uses_configured_zone(self):
        window = AnalysisWindow(start=at(1), end=at(31))
        batch = EvidenceBatch(
            window=window,
            timestamps=(
                datetime(2024, 1, 1, 7, 0, tzinfo=timezone.utc),
                datetime(2024, 1, 1, 16, 0, tzinfo=timezone.utc),
            ),
            lock_events=(),
        )
        settings = AnalysisSettings.from_options(tz_name="Europe/Berlin")

        report = analyze(batch, settings)

        assert report is not None
        assert report.per_weekday["Monday"].average_start == "08:00"
        assert report.per_weekday["Monday"].average_end == "17:00"
        assert report.time_zone == "Europe/Berlin"
