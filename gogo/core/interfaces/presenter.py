"""
Presenter interface definitions for output formatting.

Enables pluggable output formats (console, JSON) for loop progress and
results.
"""

from abc import ABC, abstractmethod

from ..models.execution import DirectoryResult, RunSummary


class IPresenter(ABC):
    """
    Interface for output presentation.

    Implementations handle formatting and displaying loop output
    to the user.
    """

    @abstractmethod
    def print(self, message: str) -> None:
        """Print a plain message to output."""
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        """Print an informational message."""
        pass

    @abstractmethod
    def success(self, message: str) -> None:
        """Print a success message."""
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        """Print a warning message."""
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        """Print an error message."""
        pass

    @abstractmethod
    def header(self, directory: str) -> None:
        """Announce that work on ``directory`` is starting."""
        pass

    @abstractmethod
    def result(self, result: DirectoryResult) -> None:
        """Render the captured output of one finished directory."""
        pass

    @abstractmethod
    def project_status(self, directory: str, ok: bool, message: str | None = None) -> None:
        """Print a one-line status for a project."""
        pass

    @abstractmethod
    def summary(self, summary: RunSummary) -> None:
        """Print the aggregate summary of a run."""
        pass
