"""
Pytest configuration and shared fixtures for water tracker tests.
"""

import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Keep the app module's default store out of the working directory
os.environ.setdefault("DB_PATH", str(Path(tempfile.mkdtemp()) / "water.db"))

from water_tracker.intake.models import Entry  # noqa: E402
from water_tracker.intake.store import IntakeStore  # noqa: E402
from water_tracker.intake.tracker import WaterTracker  # noqa: E402


class FakeClock:
    """Controllable replacement for datetime.now."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def make_entries(count: int, day: datetime) -> list[Entry]:
    """Entries one minute apart starting at ``day``."""
    entries = []
    for i in range(count):
        at = day + timedelta(minutes=i)
        entries.append(
            Entry(
                display_time=at.strftime("%I:%M %p"),
                calendar_day=at.strftime("%a %b %d %Y"),
                timestamp=int(at.timestamp() * 1000),
            )
        )
    return entries


@pytest.fixture
def store(tmp_path):
    """Store backed by a fresh database file."""
    return IntakeStore(str(tmp_path / "water.db"))


@pytest.fixture
def clock():
    """Clock fixed at Mon Jan 01 2024, 09:00."""
    return FakeClock(datetime(2024, 1, 1, 9, 0))


@pytest.fixture
def tracker(store, clock):
    """Activated tracker on a first run."""
    tracker = WaterTracker(store, clock=clock)
    tracker.activate()
    return tracker
