"""Tests for current streak calculation."""

from datetime import date, datetime, timedelta, timezone

from routine_tracker.core.domain.day_key import DayCalendar, day_key_from_date
from routine_tracker.core.domain.streak_rules import StreakInfo, calculate_current_streak

D = date(2024, 3, 10)


def keys(*days: date) -> set[str]:
    return {day_key_from_date(day) for day in days}


def test_streak_ending_today() -> None:
    """Three consecutive days ending today."""
    completions = keys(D, D + timedelta(days=1), D + timedelta(days=2))

    streak = calculate_current_streak(completions, D + timedelta(days=2))

    assert streak == StreakInfo(start=D, end=D + timedelta(days=2), length=3)


def test_grace_period_keeps_streak_anchored_yesterday() -> None:
    """Not completed today but yesterday: streak is still current."""
    completions = keys(D, D + timedelta(days=1), D + timedelta(days=2))

    streak = calculate_current_streak(completions, D + timedelta(days=3))

    assert streak == StreakInfo(start=D, end=D + timedelta(days=2), length=3)


def test_two_day_gap_breaks_streak() -> None:
    completions = keys(D, D + timedelta(days=1), D + timedelta(days=2))

    assert calculate_current_streak(completions, D + timedelta(days=4)) is None


def test_no_completions_means_no_streak() -> None:
    assert calculate_current_streak(set(), D) is None


def test_single_completion_today() -> None:
    assert calculate_current_streak(keys(D), D) == StreakInfo(D, D, 1)


def test_older_run_before_gap_is_ignored() -> None:
    """Only the run touching the anchor counts."""
    completions = keys(
        D - timedelta(days=5),
        D - timedelta(days=4),
        D - timedelta(days=1),
        D,
    )

    streak = calculate_current_streak(completions, D)

    assert streak == StreakInfo(start=D - timedelta(days=1), end=D, length=2)


def test_streak_crosses_month_and_leap_day() -> None:
    completions = keys(date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1))

    streak = calculate_current_streak(completions, date(2024, 3, 1))

    assert streak is not None
    assert streak.start == date(2024, 2, 28)
    assert streak.length == 3


def test_long_streak_has_no_upper_bound() -> None:
    completions = {day_key_from_date(D - timedelta(days=i)) for i in range(1000)}

    streak = calculate_current_streak(completions, D)

    assert streak is not None
    assert streak.length == 1000


def test_walk_stops_at_calendar_underflow() -> None:
    """A run reaching date.min terminates instead of overflowing."""
    first = date.min
    completions = keys(first, first + timedelta(days=1))

    streak = calculate_current_streak(completions, first + timedelta(days=1))

    assert streak == StreakInfo(start=first, end=first + timedelta(days=1), length=2)


def test_today_as_instant_uses_calendar_day() -> None:
    """Late evening UTC is already the next day in UTC+3."""
    calendar = DayCalendar(tz=timezone(timedelta(hours=3)))
    completions = keys(D + timedelta(days=1))
    late = datetime(2024, 3, 10, 22, 0, tzinfo=timezone.utc)

    streak = calculate_current_streak(completions, late, calendar)

    assert streak is not None
    assert streak.end == D + timedelta(days=1)
