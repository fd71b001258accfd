"""
Diagnostic logging for gogo.

GogoLogger sends gogo's internal diagnostics to stderr (--verbose or
``logging.console``) and/or to a rotating file under ~/.gogo
(``logging.file``). With neither enabled it has no handlers and every call
is a no-op inside stdlib logging.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from ..core.interfaces.logger import ILogger

DEFAULT_LOG_FILE = Path.home() / ".gogo" / "gogo.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_level(name: str) -> int:
    """Map a settings level name (any case) to a logging level; unknown names mean WARNING."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


class GogoLogger(ILogger):
    """
    ILogger backed by a stdlib logger.

    Worker threads of a parallel run share one instance; the thread name in
    each record tells their lines apart.
    """

    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 3

    def __init__(
        self,
        name: str = "gogo",
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = False,
        log_file: Path | None = None,
    ) -> None:
        """
        Args:
            name: stdlib logger name
            level: Threshold for both handlers (debug, info, warning, error)
            console_enabled: Log to stderr
            file_enabled: Log to ``log_file``
            log_file: Defaults to ~/.gogo/gogo.log
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        threshold = parse_level(level)
        self._console_handler: logging.Handler | None = None
        self._file_handler: logging.Handler | None = None

        if console_enabled:
            self._console_handler = self._attach(logging.StreamHandler(sys.stderr), threshold)
        if file_enabled:
            path = log_file or DEFAULT_LOG_FILE
            path.parent.mkdir(parents=True, exist_ok=True)
            rotating = RotatingFileHandler(
                path,
                maxBytes=self.MAX_FILE_SIZE,
                backupCount=self.BACKUP_COUNT,
                encoding="utf-8",
            )
            self._file_handler = self._attach(rotating, threshold)

    def _attach(self, handler: logging.Handler, threshold: int) -> logging.Handler:
        handler.setLevel(threshold)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        self._logger.addHandler(handler)
        return handler

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)


class NullLogger(ILogger):
    """Logger used before bootstrap and in library use."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass
