"""
Конфигурация хранилища: где лежат JSON документы и какой календарь использовать.
"""

import logging
import os
import sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from routine_tracker.config import Settings, config
from routine_tracker.core.domain.day_key import DayCalendar

logger = logging.getLogger(__name__)


def default_data_dir(settings: Settings = config) -> Path:
    """
    Per-application data directory.

    Priority:
    1. DATA_DIR env var
    2. macOS: ~/Library/Application Support/<APP_NAME>
    3. Windows: %APPDATA%/<APP_NAME>
    4. Linux/other: $XDG_DATA_HOME/<APP_NAME> or ~/.local/share/<APP_NAME>
    """
    if settings.DATA_DIR:
        return Path(settings.DATA_DIR).expanduser()

    if sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif os.name == "nt":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home()
    else:
        xdg = os.environ.get("XDG_DATA_HOME")
        base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / settings.APP_NAME


def get_routines_path(settings: Settings = config) -> Path:
    return default_data_dir(settings) / settings.ROUTINES_FILENAME


def get_preferences_path(settings: Settings = config) -> Path:
    return default_data_dir(settings) / settings.PREFERENCES_FILENAME


def get_day_calendar(settings: Settings = config) -> DayCalendar:
    """
    Календарь из настроек.

    Неизвестный TIMEZONE не роняет приложение: логируем и берем локальное время.
    """
    tz = None
    if settings.TIMEZONE:
        try:
            tz = ZoneInfo(settings.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError) as e:
            logger.warning(
                f"Unknown TIMEZONE {settings.TIMEZONE!r}, using local time: {e}"
            )
    return DayCalendar(tz=tz, first_weekday=settings.FIRST_WEEKDAY)
