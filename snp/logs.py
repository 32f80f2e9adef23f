"""Logging setup.

The interactive session owns the terminal, so records go to a file under the
platform log directory instead of stderr. The handler opens its file lazily,
so nothing is created on disk until a record is actually emitted.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "snp.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def _level_from_name(level: str) -> int:
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.WARNING


class _LazyDirFileHandler(logging.FileHandler):
    """``FileHandler`` that creates its parent directory on first write."""

    def _open(self):
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()


def configure_logging(level: str = "WARNING", path: Path | None = None) -> logging.Handler:
    """Attach a delayed file handler to the ``snp`` logger and return it.

    Calling again replaces the previously installed handler.
    """
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, _LazyDirFileHandler):
            logger.removeHandler(handler)
            handler.close()

    handler = _LazyDirFileHandler(path or default_log_path(), encoding="utf-8", delay=True)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_level_from_name(level))
    logger.propagate = False
    return handler
