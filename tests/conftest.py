"""Shared helpers for workhours tests."""

from __future__ import annotations

from datetime import datetime

import pytest

from workhours.models import AnalysisWindow, LockEvent, LockEventKind


def at(day: int, hour: int = 0, minute: int = 0, second: int = 0, month: int = 1) -> datetime:
    """Naive local instant in 2024 (2024-01-01 is a Monday)."""
    return datetime(2024, month, day, hour, minute, second)


def lock(instant: datetime) -> LockEvent:
    return LockEvent(kind=LockEventKind.LOCK, at=instant)


def unlock(instant: datetime) -> LockEvent:
    return LockEvent(kind=LockEventKind.UNLOCK, at=instant)


@pytest.fixture
def january() -> AnalysisWindow:
    return AnalysisWindow(start=at(1), end=at(31, 23, 59, 59))
