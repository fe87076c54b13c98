"""Test fixtures for timestamp engine tests.

Provides:
- A clock pinned to Friday 2024-03-15 10:30
- Settings with a Sunday week start
- A clock whose time can be moved during a test
"""

from datetime import datetime

import pytest

from orgtime.configuration.settings import TimestampSettings
from orgtime.timestamps.clock import FixedClock


class MovableClock:
    """Clock whose current time tests can change."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


@pytest.fixture
def fixed_clock():
    """Friday 2024-03-15 10:30."""
    return FixedClock(datetime(2024, 3, 15, 10, 30))


@pytest.fixture
def movable_clock():
    return MovableClock(datetime(2024, 3, 15, 10, 30))


@pytest.fixture
def sunday_week_settings():
    """Weeks run Sunday through Saturday."""
    return TimestampSettings(week_start_day=7, week_end_day=6)
