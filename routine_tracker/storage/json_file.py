"""
Атомарная запись JSON документов.

AICODE-NOTE: Сначала пишем во временный файл в той же директории,
fsync, затем os.replace. Прерванная запись не портит прошлую версию.
"""

import contextlib
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def write_atomic(path: Path, payload: bytes) -> None:
    """Записать байты атомарно. Бросает OSError, вызывающий решает что делать."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink(missing_ok=True)
        raise


def read_bytes(path: Path) -> bytes | None:
    """Прочитать файл. None если файла нет."""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        logger.debug(f"{path} does not exist yet")
        return None
