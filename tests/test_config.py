"""Tests for settings parsing and data paths."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from routine_tracker.config import Settings
from routine_tracker.database.config import (
    default_data_dir,
    get_day_calendar,
    get_preferences_path,
    get_routines_path,
)


def make_settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


def test_defaults() -> None:
    settings = make_settings()

    assert settings.APP_NAME == "RoutineTracker"
    assert settings.FIRST_WEEKDAY == 0
    assert settings.TIMEZONE is None
    assert settings.log_level == "INFO"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("sunday", 6), ("Monday", 0), (" 3 ", 3), (5, 5)],
)
def test_first_weekday_parsing(value, expected: int) -> None:
    assert make_settings(FIRST_WEEKDAY=value).FIRST_WEEKDAY == expected


@pytest.mark.parametrize("value", ["funday", "7", -1, 9])
def test_first_weekday_rejects_bad_values(value) -> None:
    with pytest.raises(ValidationError):
        make_settings(FIRST_WEEKDAY=value)


def test_env_vars_are_read(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FIRST_WEEKDAY", "sunday")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = make_settings()

    assert settings.FIRST_WEEKDAY == 6
    assert settings.DATA_DIR == tmp_path
    assert settings.log_level == "DEBUG"


def test_blank_timezone_means_local() -> None:
    assert make_settings(TIMEZONE="  ").TIMEZONE is None


def test_data_dir_override(tmp_path: Path) -> None:
    settings = make_settings(DATA_DIR=tmp_path, ROUTINES_FILENAME="r.json")

    assert default_data_dir(settings) == tmp_path
    assert get_routines_path(settings) == tmp_path / "r.json"
    assert get_preferences_path(settings) == tmp_path / "preferences.json"


def test_platform_data_dir_ends_with_app_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATA_DIR", raising=False)

    assert default_data_dir(make_settings(APP_NAME="Habits")).name == "Habits"


def test_unknown_timezone_falls_back_to_local(caplog: pytest.LogCaptureFixture) -> None:
    settings = make_settings(TIMEZONE="Mars/Olympus_Mons", FIRST_WEEKDAY="sunday")

    with caplog.at_level(logging.WARNING):
        calendar = get_day_calendar(settings)

    assert calendar.tz is None
    assert calendar.first_weekday == 6
    assert "Unknown TIMEZONE" in caplog.text
