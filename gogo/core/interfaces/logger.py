"""
Logger interface for gogo's own diagnostics.

Diagnostics (spawns, exit codes, timeouts, skipped config files) go through
ILogger and are off unless enabled in settings or with --verbose. Anything
the user is meant to read goes through IPresenter instead.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    """Leveled diagnostic logger taking %-style lazy arguments."""

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass
