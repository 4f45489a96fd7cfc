"""Tests for lock/unlock pairing."""

from conftest import at, lock, unlock

from workhours.models import LockedInterval
from workhours.reconcile import reconcile_lock_intervals


class TestPairing:
    """Matched and unmatched lock events."""

    def test_trailing_lock_runs_to_window_end(self):
        """A lock with no unlock is treated as locked until the window ends."""
        events = [lock(at(2, 10, 0)), unlock(at(2, 10, 5)), lock(at(2, 10, 10))]

        intervals = reconcile_lock_intervals(events, window_end=at(2, 12, 0))

        assert intervals == [
            LockedInterval(at(2, 10, 0), at(2, 10, 5)),
            LockedInterval(at(2, 10, 10), at(2, 12, 0)),
        ]

    def test_unlock_without_lock_is_dropped(self):
        intervals = reconcile_lock_intervals([unlock(at(2, 9, 0))], window_end=at(2, 12))
        assert intervals == []

    def test_second_consecutive_unlock_is_dropped(self):
        """No interval is invented for an unlock that follows another unlock."""
        events = [lock(at(2, 9)), unlock(at(2, 10)), unlock(at(2, 11))]

        intervals = reconcile_lock_intervals(events, window_end=at(2, 23))

        assert intervals == [LockedInterval(at(2, 9), at(2, 10))]

    def test_nested_locks_close_most_recent_first(self):
        events = [lock(at(2, 9)), lock(at(2, 10)), unlock(at(2, 11)), unlock(at(2, 12))]

        intervals = reconcile_lock_intervals(events, window_end=at(2, 23))

        assert intervals == [
            LockedInterval(at(2, 10), at(2, 11)),
            LockedInterval(at(2, 9), at(2, 12)),
        ]

    def test_empty_stream_yields_no_intervals(self):
        assert reconcile_lock_intervals([], window_end=at(2, 12)) == []


class TestMalformedInput:
    """Out-of-order data is skipped rather than raising."""

    def test_unlock_before_its_lock_is_skipped(self):
        events = [lock(at(2, 10)), unlock(at(2, 9))]

        intervals = reconcile_lock_intervals(events, window_end=at(2, 12))

        assert intervals == []

    def test_pending_lock_after_window_end_is_skipped(self):
        intervals = reconcile_lock_intervals([lock(at(3, 10))], window_end=at(2, 12))
        assert intervals == []

    def test_intervals_never_inverted(self):
        events = [
            unlock(at(2, 8)),
            lock(at(2, 12)),
            unlock(at(2, 11)),
            lock(at(2, 13)),
            unlock(at(2, 14)),
            lock(at(2, 20)),
        ]

        intervals = reconcile_lock_intervals(events, window_end=at(2, 22))

        assert intervals
        assert all(i.locked_at <= i.unlocked_at for i in intervals)
