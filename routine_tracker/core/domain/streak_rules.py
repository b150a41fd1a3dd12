"""
Streak Domain Rules - чистые функции для расчета текущей серии.

AICODE-NOTE: Чистые функции БЕЗ доступа к файлам, БЕЗ side-effects.
StreakInfo вычисляется по запросу и никогда не сохраняется.
"""

from collections.abc import Collection
from dataclasses import dataclass
from datetime import date, datetime

from routine_tracker.core.domain.day_key import DayCalendar, day_key_from_date, shift_day


@dataclass(frozen=True)
class StreakInfo:
    """Непрерывная серия выполненных дней."""

    start: date
    end: date
    length: int


def calculate_current_streak(
    completions: Collection[str],
    today: date | datetime,
    calendar: DayCalendar | None = None,
) -> StreakInfo | None:
    """
    Рассчитать текущую серию, заканчивающуюся сегодня или вчера.

    Логика:
    - Сегодня выполнено → серия заканчивается сегодня
    - Сегодня нет, но вчера выполнено → серия заканчивается вчера (grace period)
    - Иначе → активной серии нет (None)

    От конечного дня идем назад, пока предыдущий день есть в completions.
    Верхней границы нет: остановка на первом пропуске или на date.min.
    """
    calendar = calendar or DayCalendar()
    today_day = calendar.local_date(today)
    yesterday = shift_day(today_day, -1)

    if day_key_from_date(today_day) in completions:
        end = today_day
    elif yesterday is not None and day_key_from_date(yesterday) in completions:
        end = yesterday
    else:
        return None

    start = end
    length = 1
    while True:
        previous = shift_day(start, -1)
        if previous is None or day_key_from_date(previous) not in completions:
            break
        start = previous
        length += 1

    return StreakInfo(start=start, end=end, length=length)
