"""Preferences Repository - тупое чтение/запись preferences.json."""

import logging
from pathlib import Path

from pydantic import ValidationError

from routine_tracker.database.models import Preferences
from routine_tracker.storage.json_file import read_bytes, write_atomic

logger = logging.getLogger(__name__)


def load_preferences(path: Path) -> Preferences | None:
    """Загрузить настройки. None если файла нет или он битый."""
    try:
        raw = read_bytes(path)
    except OSError as e:
        logger.error(f"Failed to read preferences from {path}: {e}")
        return None

    if raw is None:
        return None

    try:
        return Preferences.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Preferences document {path} is corrupted, using defaults: {e}")
        return None


def save_preferences(path: Path, preferences: Preferences) -> bool:
    """Сохранить настройки. False если запись не удалась."""
    try:
        write_atomic(path, preferences.model_dump_json(indent=2).encode("utf-8"))
    except OSError as e:
        logger.error(f"Failed to save preferences to {path}: {e}")
        return False
    return True
