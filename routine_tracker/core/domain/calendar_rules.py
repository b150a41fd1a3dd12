"""
Calendar Domain Rules - классификация дней месяца для сетки истории.

AICODE-NOTE: Чистые функции БЕЗ доступа к файлам, БЕЗ side-effects.
Результат - read-only модель для отрисовки, рутина не мутируется.
"""

from calendar import day_abbr, month_name, monthrange
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from routine_tracker.core.domain.day_key import DayCalendar, day_key_from_date
from routine_tracker.database.models import Routine


class DayStatus(str, Enum):
    """Статус дня в календаре рутины."""

    COMPLETED = "completed"
    MISSED = "missed"
    FUTURE = "future"
    BEFORE_CREATED = "before_created"


@dataclass(frozen=True)
class CalendarDay:
    """Ячейка календаря с датой."""

    day: int
    date: date
    key: str
    status: DayStatus
    is_today: bool = False


@dataclass(frozen=True)
class CalendarMonth:
    """Модель месяца: пустые ячейки для выравнивания + дни."""

    year: int
    month: int
    leading_blanks: int
    days: list[CalendarDay] = field(default_factory=list)

    @property
    def title(self) -> str:
        return month_title(date(self.year, self.month, 1))

    def cells(self) -> list[CalendarDay | None]:
        """Сетка в порядке отрисовки: None для пустых ячеек."""
        return [None] * self.leading_blanks + list(self.days)

    def status_of(self, day: int) -> DayStatus:
        return self.days[day - 1].status


def start_of_month(value: date | datetime) -> date:
    """Первый день месяца."""
    return date(value.year, value.month, 1)


def shift_month(value: date, offset: int) -> date:
    """Первый день месяца, отстоящего на offset месяцев (навигация по календарю)."""
    index = value.year * 12 + (value.month - 1) + offset
    year, month = divmod(index, 12)
    return date(year, month + 1, 1)


def days_in_month(year: int, month: int) -> int:
    """Количество дней в месяце с учетом високосных лет."""
    return monthrange(year, month)[1]


def leading_blank_count(year: int, month: int, first_weekday: int = 0) -> int:
    """
    Количество пустых ячеек перед первым днем месяца.

    Формула: (weekday(1-е число) - first_weekday + 7) % 7
    """
    first_weekday_of_month = monthrange(year, month)[0]
    return (first_weekday_of_month - first_weekday + 7) % 7


def weekday_symbols(first_weekday: int = 0) -> list[str]:
    """Короткие названия дней недели, начиная с first_weekday."""
    symbols = list(day_abbr)
    index = first_weekday % 7
    return symbols[index:] + symbols[:index]


def month_title(value: date) -> str:
    """Заголовок месяца, например "March 2024"."""
    return f"{month_name[value.month]} {value.year}"


def classify_day(
    day: date, created_day: date, today: date, completions: set[str] | frozenset[str]
) -> DayStatus:
    """
    Статус одного дня. Порядок проверок важен:
    до создания → будущее → выполнено → пропущено.
    """
    if day < created_day:
        return DayStatus.BEFORE_CREATED
    if day > today:
        return DayStatus.FUTURE
    if day_key_from_date(day) in completions:
        return DayStatus.COMPLETED
    return DayStatus.MISSED


def classify_month(
    routine: Routine,
    month: date | datetime,
    today: date | datetime,
    calendar: DayCalendar | None = None,
) -> CalendarMonth:
    """
    Построить модель месяца для рутины.

    Args:
        routine: Рутина (не изменяется)
        month: Любая дата внутри нужного месяца
        today: Сегодня (для тестов передается явно)
        calendar: Правила календаря (часовой пояс, первый день недели)

    Returns:
        CalendarMonth с пустыми ячейками и статусами дней
    """
    calendar = calendar or DayCalendar()
    month_start = start_of_month(calendar.local_date(month))
    today_day = calendar.local_date(today)
    created_day = calendar.local_date(routine.created_at)

    year, month_number = month_start.year, month_start.month
    days = []
    for day_number in range(1, days_in_month(year, month_number) + 1):
        day = date(year, month_number, day_number)
        days.append(
            CalendarDay(
                day=day_number,
                date=day,
                key=day_key_from_date(day),
                status=classify_day(day, created_day, today_day, routine.completions),
                is_today=day == today_day,
            )
        )

    return CalendarMonth(
        year=year,
        month=month_number,
        leading_blanks=leading_blank_count(year, month_number, calendar.first_weekday),
        days=days,
    )
