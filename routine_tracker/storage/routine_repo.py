"""
Routine Repository - загрузка и сохранение коллекции рутин.

AICODE-NOTE: Репозиторий содержит только доступ к данным, БЕЗ бизнес-логики.
Ошибки не пробрасываются: load → пустая коллекция, save → False.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from routine_tracker.database.models import Routine, routines_from_json, routines_to_json
from routine_tracker.storage.json_file import read_bytes, write_atomic

logger = logging.getLogger(__name__)


def load_routines(path: Path) -> list[Routine]:
    """
    Загрузить коллекцию рутин.

    Отсутствующий файл, битый JSON, лишние или пропущенные поля -
    весь документ считается невалидным, возвращаем пустой список.
    """
    try:
        raw = read_bytes(path)
    except OSError as e:
        logger.error(f"Failed to read routines from {path}: {e}")
        return []

    if raw is None:
        return []

    try:
        routines = routines_from_json(raw)
    except (ValidationError, ValueError) as e:
        logger.warning(f"Routines document {path} is corrupted, starting empty: {e}")
        return []

    logger.info(f"Loaded {len(routines)} routines from {path}")
    return routines


def save_routines(path: Path, routines: list[Routine]) -> bool:
    """
    Сохранить коллекцию целиком.

    Returns:
        True если запись прошла, False если ошибка (уже залогирована)
    """
    try:
        write_atomic(path, routines_to_json(routines))
    except (OSError, ValueError) as e:
        logger.error(f"Failed to save {len(routines)} routines to {path}: {e}")
        return False

    logger.debug(f"Saved {len(routines)} routines to {path}")
    return True
