"""
Console presenter for terminal output.

Renders loop progress and results for a human reading a terminal.
"""

from __future__ import annotations

import sys
from typing import TextIO

from ..core.interfaces.presenter import IPresenter
from ..core.models.execution import DirectoryResult, RunSummary
from .formatting import format_duration, summary_line

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
CYAN = "\033[96m"


class ConsolePresenter(IPresenter):
    """
    Console output presenter.

    Normal output goes to stdout; warnings, errors and child stderr go to
    stderr. Colors are only used when the output is a terminal.
    """

    def __init__(
        self,
        use_color: bool = True,
        file: TextIO | None = None,
        err_file: TextIO | None = None,
        show_durations: bool = False,
    ) -> None:
        """
        Initialize console presenter.

        Args:
            use_color: Whether to use ANSI color codes
            file: Output file (defaults to sys.stdout)
            err_file: Error output file (defaults to sys.stderr)
            show_durations: Print each project's duration and exit code after its output
        """
        self._file = file or sys.stdout
        self._err_file = err_file or sys.stderr
        self._use_color = use_color and self._file.isatty()
        self._show_durations = show_durations

    def _color(self, text: str, *codes: str) -> str:
        if not self._use_color:
            return text
        return f"{''.join(codes)}{text}{RESET}"

    def print(self, message: str) -> None:
        """Print a message to output."""
        print(message, file=self._file)

    def info(self, message: str) -> None:
        print(f"{self._color('ℹ', BLUE)} {message}", file=self._file)

    def success(self, message: str) -> None:
        print(f"{self._color('✓', GREEN)} {message}", file=self._file)

    def warning(self, message: str) -> None:
        print(f"{self._color('⚠', YELLOW)} {self._color(message, YELLOW)}", file=self._err_file)

    def error(self, message: str) -> None:
        print(f"{self._color('✗', RED)} {self._color(message, RED)}", file=self._err_file)

    def dim(self, message: str) -> None:
        print(self._color(message, DIM), file=self._file)

    def header(self, directory: str) -> None:
        """Print the blank line and arrow that introduce a project's output."""
        print("", file=self._file)
        print(f"{self._color('→', CYAN)} {self._color(directory, BOLD, CYAN)}", file=self._file)

    def result(self, result: DirectoryResult) -> None:
        """Print captured stdout, then child stderr dimmed on stderr."""
        outcome = result.outcome
        if outcome.stdout.strip():
            print(outcome.stdout, file=self._file)
        if outcome.stderr.strip():
            print(self._color(outcome.stderr, DIM), file=self._err_file)
        if outcome.timed_out:
            self.error(f"{result.directory} timed out after {format_duration(result.duration_ms)}")
        elif self._show_durations:
            self.dim(f"  {format_duration(result.duration_ms)}, exit {outcome.exit_code}")

    def project_status(self, directory: str, ok: bool, message: str | None = None) -> None:
        symbol = self._color("✓", GREEN) if ok else self._color("✗", RED)
        name = self._color(directory, GREEN if ok else RED)
        suffix = f" {self._color(message, DIM)}" if message else ""
        print(f"{symbol} {name}{suffix}", file=self._file)

    def summary(self, summary: RunSummary) -> None:
        print("", file=self._file)
        text = summary_line(summary.succeeded, summary.failed, summary.total)
        if summary.failed == 0:
            print(f"{self._color('✓', GREEN)} {self._color(text, GREEN)}", file=self._file)
        else:
            print(f"{self._color('⚠', YELLOW)} {self._color(text, YELLOW)}", file=self._file)
