"""
Routine Store - владелец коллекции рутин.

Responsibilities:
- CRUD и отметки выполнения (мутации сразу сохраняются на диск).
- Производные запросы: счетчики за день, streak, календарь месяца.
- Выбранная рутина и подписка на изменения для UI.

AICODE-NOTE: Публичные методы никогда не бросают исключений.
Пустое название и неизвестный id - тихий no-op, ошибка записи - лог
и last_save_ok=False. Состояние в памяти остается источником правды.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path
from uuid import UUID, uuid4

from routine_tracker.core.domain.calendar_rules import CalendarMonth, classify_month
from routine_tracker.core.domain.day_key import DayCalendar, day_key_from_date
from routine_tracker.core.domain.routine_rules import normalize_title
from routine_tracker.core.domain.streak_rules import StreakInfo, calculate_current_streak
from routine_tracker.database.config import get_day_calendar, get_routines_path
from routine_tracker.database.models import Routine
from routine_tracker.services.bindings import Binding
from routine_tracker.storage import routine_repo

logger = logging.getLogger(__name__)

Listener = Callable[["RoutineStore"], None]
DayLike = date | datetime


class RoutineStore:
    """In-memory коллекция рутин + сохранение в JSON документ."""

    def __init__(
        self,
        path: Path | None = None,
        calendar: DayCalendar | None = None,
        clock: Callable[[], datetime] | None = None,
        autoload: bool = True,
    ) -> None:
        """
        Args:
            path: Путь к routines.json (по умолчанию из настроек)
            calendar: Правила календаря (по умолчанию из настроек)
            clock: Источник "сейчас" (для тестов), по умолчанию calendar.now
            autoload: Загрузить коллекцию с диска сразу
        """
        self.path = path or get_routines_path()
        self.calendar = calendar or get_day_calendar()
        self._clock = clock or self.calendar.now
        self._routines: list[Routine] = []
        self._selected_id: UUID | None = None
        self._listeners: list[Listener] = []
        self.last_save_ok = True

        if autoload:
            self.reload()

    # ============ State ============

    @property
    def routines(self) -> tuple[Routine, ...]:
        """Рутины, новые первыми. Только для чтения."""
        return tuple(self._routines)

    @property
    def selected_routine_id(self) -> UUID | None:
        return self._selected_id

    @selected_routine_id.setter
    def selected_routine_id(self, value: UUID | str | None) -> None:
        """Выбрать рутину. Неизвестный или некорректный id снимает выбор."""
        routine = None if value is None else self.routine(value)
        self._selected_id = routine.id if routine else None
        self._notify()

    @property
    def selected_routine(self) -> Routine | None:
        if self._selected_id is None:
            return None
        return self.routine(self._selected_id)

    def routine(self, routine_id: UUID | str) -> Routine | None:
        """Найти рутину по id. None если нет."""
        key = self._coerce_id(routine_id)
        if key is None:
            return None
        return next((r for r in self._routines if r.id == key), None)

    def now(self) -> datetime:
        return self._clock()

    # ============ Subscriptions ============

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Подписаться на изменения состояния.

        Returns:
            Функция отписки
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                # Упавший подписчик не должен ломать store и остальных подписчиков
                logger.exception(f"Routine store listener {listener!r} failed: {e}")

    # ============ Mutations ============

    def reload(self) -> None:
        """Перечитать коллекцию с диска. Выбор сохраняется, если рутина осталась."""
        self._routines = routine_repo.load_routines(self.path)
        if self._selected_id is None or self.routine(self._selected_id) is None:
            self._selected_id = self._routines[0].id if self._routines else None
        self._notify()

    def add(self, title: str) -> UUID | None:
        """
        Создать рутину.

        Returns:
            id новой рутины или None если название пустое
        """
        normalized = normalize_title(title)
        if normalized is None:
            logger.debug("Rejected routine with empty title")
            return None

        routine = Routine(
            id=uuid4(), title=normalized, createdAt=self.now(), completions=set()
        )
        self._routines.insert(0, routine)
        self._selected_id = routine.id
        logger.info(f"Routine {routine.id} added: {normalized!r}")
        self._commit()
        return routine.id

    def delete(self, routine_id: UUID | str) -> None:
        """Удалить рутину. Выбор переходит на первую оставшуюся."""
        routine = self.routine(routine_id)
        if routine is None:
            return

        self._routines.remove(routine)
        if self._selected_id == routine.id:
            self._selected_id = self._routines[0].id if self._routines else None
        logger.info(f"Routine {routine.id} deleted")
        self._commit()

    def update_title(self, routine_id: UUID | str, title: str) -> None:
        """Переименовать. Пустое название отклоняется так же, как в add()."""
        routine = self.routine(routine_id)
        if routine is None:
            return

        normalized = normalize_title(title)
        if normalized is None:
            logger.debug(f"Rejected empty title for routine {routine.id}")
            return

        routine.title = normalized
        self._commit()

    def set_completion(
        self, routine_id: UUID | str, day: DayLike | None = None, completed: bool = True
    ) -> None:
        """Отметить/снять выполнение за день (по умолчанию сегодня)."""
        routine = self.routine(routine_id)
        if routine is None:
            return

        key = self._key(day)
        if completed:
            routine.completions.add(key)
        else:
            routine.completions.discard(key)
        self._commit()

    def toggle_completion(self, routine_id: UUID | str, day: DayLike | None = None) -> None:
        if day is None:
            day = self.now()
        self.set_completion(routine_id, day, not self.is_completed(routine_id, day))

    # ============ Queries ============

    def is_completed(self, routine_id: UUID | str, day: DayLike | None = None) -> bool:
        routine = self.routine(routine_id)
        if routine is None:
            return False
        return self._key(day) in routine.completions

    def completed_count(self, day: DayLike | None = None) -> int:
        key = self._key(day)
        return sum(1 for r in self._routines if key in r.completions)

    def remaining_count(self, day: DayLike | None = None) -> int:
        return max(len(self._routines) - self.completed_count(day), 0)

    def current_streak(
        self, routine: Routine, today: DayLike | None = None
    ) -> StreakInfo | None:
        """Текущая серия рутины (заканчивается сегодня или вчера)."""
        return calculate_current_streak(
            routine.completions, self._day(today), self.calendar
        )

    def calendar_status(
        self, routine: Routine, month: DayLike | None = None, today: DayLike | None = None
    ) -> CalendarMonth:
        """Модель месяца для календаря истории (по умолчанию текущий месяц)."""
        today_day = self._day(today)
        return classify_month(
            routine,
            today_day if month is None else month,
            today_day,
            self.calendar,
        )

    # ============ Bindings ============

    def completion_binding(
        self, routine_id: UUID | str, day: DayLike | None = None
    ) -> Binding[bool]:
        return Binding(
            get=lambda: self.is_completed(routine_id, day),
            set=lambda value: self.set_completion(routine_id, day, value),
        )

    def title_binding(self, routine_id: UUID | str) -> Binding[str]:
        def get_title() -> str:
            routine = self.routine(routine_id)
            return routine.title if routine else ""

        return Binding(
            get=get_title, set=lambda value: self.update_title(routine_id, value)
        )

    # ============ Internals ============

    def _commit(self) -> None:
        self.last_save_ok = routine_repo.save_routines(self.path, self._routines)
        self._notify()

    def _day(self, day: DayLike | None) -> date:
        return self.calendar.local_date(self.now() if day is None else day)

    def _key(self, day: DayLike | None) -> str:
        return day_key_from_date(self._day(day))

    @staticmethod
    def _coerce_id(value: UUID | str) -> UUID | None:
        if isinstance(value, UUID):
            return value
        try:
            return UUID(str(value))
        except ValueError:
            return None
