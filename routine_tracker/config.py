"""
Конфигурация Routine Tracker.
Загружает переменные из окружения и .env файла.
"""

from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class Settings(BaseSettings):
    # Storage
    APP_NAME: str = "RoutineTracker"
    # If set, overrides the platform data directory
    DATA_DIR: Path | None = None
    ROUTINES_FILENAME: str = "routines.json"
    PREFERENCES_FILENAME: str = "preferences.json"

    # Calendar rules (IANA timezone, local time when empty)
    TIMEZONE: str | None = None
    # Python calendar numbering: 0 = Monday ... 6 = Sunday
    FIRST_WEEKDAY: int = 0

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("FIRST_WEEKDAY", mode="before")
    @classmethod
    def parse_first_weekday(cls, v: str | int | Any) -> int:
        if isinstance(v, str):
            v = v.strip().lower()
            if v in WEEKDAY_NAMES:
                return WEEKDAY_NAMES.index(v)
            if v.isdigit():
                v = int(v)
        if not isinstance(v, int) or not 0 <= v <= 6:
            raise ValueError(f"FIRST_WEEKDAY must be 0..6 or a weekday name, got {v!r}")
        return v

    @field_validator("TIMEZONE", mode="before")
    @classmethod
    def empty_timezone_is_local(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def log_level(self) -> str:
        """Normalized level name for logging.basicConfig."""
        return self.LOG_LEVEL.strip().upper() or "INFO"


config = Settings()
