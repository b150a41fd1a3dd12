"""
DayKey Domain - канонический ключ календарного дня.

AICODE-NOTE: Чистые функции БЕЗ доступа к файлам, БЕЗ side-effects.
Ключ "YYYY-MM-DD" - единственный способ сравнивать даты в трекере:
"выполнено ли X в день D" = есть ли ключ D в completions.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo

DAY_KEY_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


@dataclass(frozen=True)
class DayCalendar:
    """
    Правила календаря: часовой пояс и первый день недели.

    tz=None означает локальное время процесса.
    first_weekday в нумерации модуля calendar (0 = понедельник).
    """

    tz: tzinfo | None = None
    first_weekday: int = 0

    def local_date(self, value: date | datetime) -> date:
        """
        Привести дату или момент времени к календарному дню.

        Aware datetime переводится в часовой пояс календаря,
        naive datetime считается уже локальным.
        """
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(self.tz)
            return value.date()
        return value

    def now(self) -> datetime:
        """Текущий момент в часовом поясе календаря (всегда aware)."""
        return datetime.now(self.tz).astimezone(self.tz)


def day_key_from_date(value: date | datetime, calendar: DayCalendar | None = None) -> str:
    """Ключ дня для даты. Тотальная и детерминированная функция."""
    day = (calendar or DayCalendar()).local_date(value)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def date_from_day_key(key: str, calendar: DayCalendar | None = None) -> date | None:
    """
    Разобрать ключ "YYYY-MM-DD" обратно в дату.

    Возвращает None для некорректного ввода (не бросает исключений).
    Календарь принимается для симметрии с day_key_from_date: ключ уже
    содержит компоненты дня, часовой пояс на разбор не влияет.
    """
    if not isinstance(key, str):
        return None
    match = DAY_KEY_PATTERN.fullmatch(key)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def is_day_key(value: str) -> bool:
    """Проверить, что строка - корректный ключ дня."""
    return date_from_day_key(value) is not None


def shift_day(day: date, days: int) -> date | None:
    """Сдвинуть день на N дней. None при выходе за границы календаря."""
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return None
