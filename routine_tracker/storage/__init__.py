"""Storage layer - тупые репозитории JSON документов без бизнес-логики."""

from . import preferences_repo, routine_repo

__all__ = ["preferences_repo", "routine_repo"]
