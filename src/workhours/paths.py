"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "WorkHours"
APP_AUTHOR = "WorkHours"


def get_log_dir() -> Path:
    """Return the per-user directory for run logs."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR)
    path = Path(dirs.user_log_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_log_path() -> Path:
    return get_log_dir() / "workhours.log"
