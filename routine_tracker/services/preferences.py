"""
Preferences service - типизированные настройки с явными load/save.

Вместо глобального key/value хранилища: PreferencesStore загружает
Preferences один раз, UI меняет поля и вызывает save().
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from routine_tracker.database.config import get_preferences_path
from routine_tracker.database.models import (
    DEFAULT_BACKGROUND_COLOR,
    DisplayMode,
    Preferences,
)
from routine_tracker.storage import preferences_repo

logger = logging.getLogger(__name__)

MIN_WINDOW_ALPHA = 0.35
LIGHT_LUMINANCE_THRESHOLD = 0.6

_HEX_COLOR = re.compile(r"^[0-9A-Fa-f]{8}$")

RGBA = tuple[float, float, float, float]


def decode_color(value: str | None) -> RGBA | None:
    """Hex RRGGBBAA → (r, g, b, a) в диапазоне 0..1. None для некорректной строки."""
    if not value or not _HEX_COLOR.match(value):
        return None
    r, g, b, a = (int(value[i : i + 2], 16) / 255.0 for i in range(0, 8, 2))
    return (r, g, b, a)


def encode_color(rgba: RGBA) -> str:
    """(r, g, b, a) → "RRGGBBAA"."""
    return "".join(f"{round(max(0.0, min(c, 1.0)) * 255):02X}" for c in rgba)


def relative_luminance(rgba: RGBA) -> float:
    """Яркость по весам Rec. 709 (альфа не учитывается)."""
    r, g, b, _ = rgba
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def background_rgba(preferences: Preferences) -> RGBA:
    """Цвет фона; битое значение → цвет по умолчанию."""
    return decode_color(preferences.background_color) or decode_color(
        DEFAULT_BACKGROUND_COLOR
    )  # type: ignore[return-value]


def color_scheme(preferences: Preferences) -> str:
    """Схема "light" для светлого фона, иначе "dark"."""
    luminance = relative_luminance(background_rgba(preferences))
    return "light" if luminance > LIGHT_LUMINANCE_THRESHOLD else "dark"


def window_alpha(preferences: Preferences) -> float:
    """Эффективная прозрачность окна, не ниже MIN_WINDOW_ALPHA."""
    return max(MIN_WINDOW_ALPHA, min(preferences.window_opacity, 1.0))


def migrate_display_mode(preferences: Preferences) -> bool:
    """
    Одноразовая миграция: сохраненный FLOATING сбрасывается в NORMAL.
    После первой загрузки флаг ставится всегда, чтобы новый выбор FLOATING
    пользователем не сбрасывался при следующем запуске.

    Returns:
        True если настройки изменились и их стоит сохранить
    """
    if preferences.display_mode_migrated:
        return False
    if preferences.display_mode is DisplayMode.FLOATING:
        logger.info("Display mode migrated from floating to normal")
        preferences.display_mode = DisplayMode.NORMAL
    preferences.display_mode_migrated = True
    return True


class PreferencesStore:
    """Владелец Preferences: загрузка с миграцией и явное сохранение."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or get_preferences_path()
        self.preferences = Preferences()

    def load(self) -> Preferences:
        """Загрузить настройки (или значения по умолчанию) и применить миграцию."""
        loaded = preferences_repo.load_preferences(self.path)
        self.preferences = loaded or Preferences()
        if migrate_display_mode(self.preferences):
            self.save()
        return self.preferences

    def save(self) -> bool:
        return preferences_repo.save_preferences(self.path, self.preferences)

    def reset_window_position(self) -> bool:
        """Сбросить флаг позиционирования: окно снова встанет в угол экрана."""
        self.preferences.has_positioned_window = False
        return self.save()
