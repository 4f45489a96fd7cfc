"""Module entry point: python -m workhours ..."""

from __future__ import annotations

from workhours.cli import app


if __name__ == "__main__":
    app(prog_name="workhours")
