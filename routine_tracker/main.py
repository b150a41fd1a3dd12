"""
Точка входа Routine Tracker (CLI).

Запуск: routine-tracker <command> или python -m routine_tracker.main <command>
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from routine_tracker.config import config
from routine_tracker.core.domain.calendar_rules import CalendarMonth, weekday_symbols
from routine_tracker.core.domain.day_key import date_from_day_key
from routine_tracker.core.domain.routine_rules import normalize_title
from routine_tracker.database.config import get_preferences_path
from routine_tracker.database.models import Routine
from routine_tracker.services.preferences import PreferencesStore
from routine_tracker.services.routine_store import RoutineStore

logger = logging.getLogger(__name__)

STATUS_MARKS = {
    "completed": "x",
    "missed": "-",
    "future": ".",
    "before_created": " ",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routine-tracker", description="Track daily routines and streaks."
    )
    parser.add_argument(
        "--data-file", type=Path, default=None, help="Path to routines.json"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Show routines, newest first")
    sub.add_parser("summary", help="Done / remaining for today")

    add = sub.add_parser("add", help="Create a routine")
    add.add_argument("title", nargs="+")

    rename = sub.add_parser("rename", help="Rename a routine")
    rename.add_argument("routine")
    rename.add_argument("title", nargs="+")

    delete = sub.add_parser("delete", help="Delete a routine")
    delete.add_argument("routine")

    done = sub.add_parser("done", help="Toggle completion for a day")
    done.add_argument("routine")
    done.add_argument("--date", dest="day", default=None, help="YYYY-MM-DD")

    streak = sub.add_parser("streak", help="Show current streak")
    streak.add_argument("routine")

    cal = sub.add_parser("calendar", help="Show month history")
    cal.add_argument("routine")
    cal.add_argument("--month", default=None, help="YYYY-MM")

    return parser


def resolve_routine(store: RoutineStore, ref: str) -> Routine | None:
    """Найти рутину по полному id или уникальному префиксу id."""
    routine = store.routine(ref)
    if routine:
        return routine
    matches = [r for r in store.routines if str(r.id).startswith(ref.lower())]
    return matches[0] if len(matches) == 1 else None


def format_routine_line(store: RoutineStore, routine: Routine, today: date) -> str:
    mark = "x" if store.is_completed(routine.id, today) else " "
    selected = "*" if routine.id == store.selected_routine_id else " "
    line = f"{selected}[{mark}] {str(routine.id)[:8]}  {routine.title}"
    streak = store.current_streak(routine, today)
    if streak:
        line += f"  ({streak.length} day streak)"
    return line


def format_calendar(month: CalendarMonth, first_weekday: int) -> str:
    """Текстовая сетка месяца: x выполнено, - пропущено, . будущее."""
    lines = [month.title, " ".join(f"{s[:2]:>3}" for s in weekday_symbols(first_weekday))]
    row: list[str] = []
    for cell in month.cells():
        if cell is None:
            row.append("   ")
        else:
            row.append(f"{cell.day:>2}{STATUS_MARKS[cell.status.value]}")
        if len(row) == 7:
            lines.append(" ".join(row).rstrip())
            row = []
    if row:
        lines.append(" ".join(row).rstrip())
    lines.append("x done  - missed  . future")
    return "\n".join(lines)


def _parse_month(value: str) -> date | None:
    return date_from_day_key(f"{value}-01")


def run(args: argparse.Namespace, store: RoutineStore, preferences: PreferencesStore) -> int:
    today = store.calendar.local_date(store.now())

    if args.command == "list":
        if not store.routines:
            print("No routines yet. Add one with: routine-tracker add <title>")
        for routine in store.routines:
            print(format_routine_line(store, routine, today))
        return 0

    if args.command == "summary":
        total = len(store.routines)
        print(
            f"{store.completed_count(today)} done, "
            f"{store.remaining_count(today)} remaining / {total} total"
        )
        return 0

    if args.command == "add":
        routine_id = store.add(" ".join(args.title))
        if routine_id is None:
            print("Title must not be empty.", file=sys.stderr)
            return 1
        print(f"Added {routine_id}")
        return 0

    routine = resolve_routine(store, args.routine)
    if routine is None:
        print(f"Routine {args.routine!r} not found.", file=sys.stderr)
        return 1

    if args.command == "rename":
        title = " ".join(args.title)
        if normalize_title(title) is None:
            print("Title must not be empty.", file=sys.stderr)
            return 1
        store.update_title(routine.id, title)
        print(f"Renamed to {routine.title!r}")
    elif args.command == "delete":
        store.delete(routine.id)
        print(f"Deleted {routine.title!r}")
    elif args.command == "done":
        day = today if args.day is None else date_from_day_key(args.day)
        if day is None:
            print(f"Invalid date {args.day!r}, expected YYYY-MM-DD.", file=sys.stderr)
            return 1
        store.toggle_completion(routine.id, day)
        state = "done" if store.is_completed(routine.id, day) else "not done"
        print(f"{routine.title}: {day.isoformat()} {state}")
    elif args.command in ("streak", "calendar"):
        if not preferences.preferences.streaks_enabled:
            print("Enable streaks in preferences to see streak history.")
            return 0
        if args.command == "streak":
            streak = store.current_streak(routine, today)
            if streak is None:
                print("No active streak. Complete today to start a new streak.")
            else:
                print(
                    f"Current streak: {streak.length} days "
                    f"(from {streak.start.isoformat()} to {streak.end.isoformat()})"
                )
        else:
            month = today if args.month is None else _parse_month(args.month)
            if month is None:
                print(f"Invalid month {args.month!r}, expected YYYY-MM.", file=sys.stderr)
                return 1
            grid = store.calendar_status(routine, month, today)
            print(format_calendar(grid, store.calendar.first_weekday))

    if not store.last_save_ok:
        logger.warning("Last change was not saved to disk")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Запуск CLI."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    store = RoutineStore(path=args.data_file)
    preferences_path = (
        args.data_file.with_name(config.PREFERENCES_FILENAME)
        if args.data_file
        else get_preferences_path()
    )
    preferences = PreferencesStore(preferences_path)
    preferences.load()

    return run(args, store, preferences)


if __name__ == "__main__":
    sys.exit(main())
