"""
Модели данных Routine Tracker (pydantic).

Структура:
- Routine: рутина с историей выполнения (routines.json)
- Preferences: настройки отображения (preferences.json)

Документ рутин на диске - JSON массив:
[{"id": "<uuid>", "title": "...", "createdAt": "<ISO8601>", "completions": ["YYYY-MM-DD"]}]
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_serializer,
    field_validator,
)

from routine_tracker.core.domain.day_key import is_day_key


class Routine(BaseModel):
    """Рутина (ежедневная привычка) с историей выполнения."""

    model_config = ConfigDict(extra="forbid")

    id: UUID = Field(frozen=True)
    title: str
    created_at: datetime = Field(alias="createdAt")
    completions: set[str]

    @field_validator("completions")
    @classmethod
    def check_day_keys(cls, v: set[str]) -> set[str]:
        bad = sorted(key for key in v if not is_day_key(key))
        if bad:
            raise ValueError(f"Invalid day keys: {bad}")
        return v

    @field_serializer("completions")
    def serialize_completions(self, v: set[str]) -> list[str]:
        # Sorted for stable diffs between saves
        return sorted(v)


RoutineCollection = TypeAdapter(list[Routine])


def routines_to_json(routines: list[Routine]) -> bytes:
    """Сериализовать коллекцию целиком (не diff)."""
    return RoutineCollection.dump_json(routines, by_alias=True, indent=2)


def routines_from_json(raw: bytes | str) -> list[Routine]:
    """Разобрать документ. Бросает ValidationError на любом несоответствии."""
    return RoutineCollection.validate_json(raw)


class DisplayMode(str, Enum):
    """Режим окна."""

    NORMAL = "normal"
    FLOATING = "floating"

    @property
    def label(self) -> str:
        return "Always on top" if self is DisplayMode.FLOATING else "Normal"


DEFAULT_BACKGROUND_COLOR = "1C242EFF"


class Preferences(BaseModel):
    """Настройки отображения. Загружаются и сохраняются явно через PreferencesStore."""

    window_opacity: float = 1.0
    display_mode: DisplayMode = DisplayMode.NORMAL
    streaks_enabled: bool = True
    background_color: str = DEFAULT_BACKGROUND_COLOR
    has_positioned_window: bool = False
    display_mode_migrated: bool = False
