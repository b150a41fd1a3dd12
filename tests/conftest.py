import os
import sys
from datetime import datetime, timezone

import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from routine_tracker.core.domain.day_key import DayCalendar  # noqa: E402
from routine_tracker.services.routine_store import RoutineStore  # noqa: E402


class FixedClock:
    """Clock that returns a settable instant."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def __call__(self) -> datetime:
        return self.current


@pytest.fixture
def utc_calendar() -> DayCalendar:
    return DayCalendar(tz=timezone.utc, first_weekday=0)


@pytest.fixture
def clock() -> FixedClock:
    """2024-03-10 09:00 UTC unless a test moves it."""
    return FixedClock(datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def routines_path(tmp_path):
    return tmp_path / "data" / "routines.json"


@pytest.fixture
def store(routines_path, utc_calendar, clock) -> RoutineStore:
    """Fresh store backed by a temp file."""
    return RoutineStore(path=routines_path, calendar=utc_calendar, clock=clock)
