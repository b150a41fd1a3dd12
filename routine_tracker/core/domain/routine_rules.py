"""
Routine Rules Domain - чистые правила валидации для рутин.

AICODE-NOTE: Чистые функции БЕЗ доступа к файлам, БЕЗ side-effects.
Одно правило и для создания, и для переименования: название после
trim не может быть пустым.
"""


def normalize_title(title: str | None) -> str | None:
    """
    Привести название к каноническому виду.

    Правила:
    - Пробелы и переводы строк по краям обрезаются
    - Пустой результат → None (название отклонено)
    """
    if title is None:
        return None
    trimmed = str(title).strip()
    return trimmed or None
