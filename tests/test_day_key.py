"""Tests for day key normalization."""

from datetime import date, datetime, timedelta, timezone

from routine_tracker.core.domain.day_key import (
    DayCalendar,
    date_from_day_key,
    day_key_from_date,
    is_day_key,
    shift_day,
)


def test_key_is_zero_padded() -> None:
    """Keys always have the fixed YYYY-MM-DD form."""
    assert day_key_from_date(date(2024, 3, 5)) == "2024-03-05"
    assert day_key_from_date(date(987, 1, 9)) == "0987-01-09"


def test_same_calendar_day_gives_same_key(utc_calendar: DayCalendar) -> None:
    """Different instants on one calendar day normalize to one key."""
    morning = datetime(2024, 3, 10, 0, 0, tzinfo=timezone.utc)
    night = datetime(2024, 3, 10, 23, 59, 59, tzinfo=timezone.utc)

    assert day_key_from_date(morning, utc_calendar) == day_key_from_date(
        night, utc_calendar
    )
    assert day_key_from_date(morning, utc_calendar) == day_key_from_date(
        date(2024, 3, 10), utc_calendar
    )


def test_aware_instant_uses_calendar_timezone() -> None:
    """An instant is converted into the calendar's timezone before truncation."""
    moscow = DayCalendar(tz=timezone(timedelta(hours=3)))
    late_utc = datetime(2024, 3, 10, 22, 30, tzinfo=timezone.utc)

    assert day_key_from_date(late_utc, DayCalendar(tz=timezone.utc)) == "2024-03-10"
    assert day_key_from_date(late_utc, moscow) == "2024-03-11"


def test_naive_datetime_is_taken_as_local() -> None:
    """Naive datetimes are not shifted."""
    calendar = DayCalendar(tz=timezone(timedelta(hours=-8)))

    assert day_key_from_date(datetime(2024, 3, 10, 23, 0), calendar) == "2024-03-10"


def test_date_from_key_parses_valid_keys() -> None:
    assert date_from_day_key("2024-02-29") == date(2024, 2, 29)
    assert date_from_day_key("0001-01-01") == date(1, 1, 1)


def test_date_from_key_rejects_malformed_input() -> None:
    """Malformed keys return None instead of raising."""
    for bad in [
        "",
        "2024-3-10",
        "2024/03/10",
        "2023-02-29",
        "2024-13-01",
        "abcd-ef-gh",
        "2024-03-10T00:00",
        "2024-03-10\n",
        " 2024-03-10",
        "٢٠٢٤-٠٣-١٠",
    ]:
        assert date_from_day_key(bad) is None
    assert date_from_day_key(None) is None  # type: ignore[arg-type]


def test_is_day_key() -> None:
    assert is_day_key("2024-03-10")
    assert not is_day_key("yesterday")
    assert not is_day_key("2024-03-10\n")


def test_key_round_trip_for_dates() -> None:
    day = date(2024, 12, 31)
    assert date_from_day_key(day_key_from_date(day)) == day


def test_shift_day_handles_underflow() -> None:
    """Stepping before date.min returns None."""
    assert shift_day(date(2024, 3, 1), -1) == date(2024, 2, 29)
    assert shift_day(date.min, -1) is None


def test_calendar_now_is_aware(utc_calendar: DayCalendar) -> None:
    assert utc_calendar.now().tzinfo is not None
    assert DayCalendar().now().tzinfo is not None
