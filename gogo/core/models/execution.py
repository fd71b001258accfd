"""
Execution domain models.

Provides the values produced and consumed by the execution engine:
per-directory outcomes, ordered results, summaries and the tagged command
and filter specifications.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

from pydantic import Field, computed_field

from .base import ImmutableModel

TIMEOUT_EXIT_CODE = 124
SPAWN_FAILURE_EXIT_CODE = 1
DEFAULT_CONCURRENCY = 4


class ExecutionOutcome(ImmutableModel):
    """Result of running one command in one directory."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @classmethod
    def ok(cls, stdout: str = "") -> ExecutionOutcome:
        """Build a successful outcome without running anything."""
        return cls(exit_code=0, stdout=stdout)

    @classmethod
    def failure(cls, message: str, exit_code: int = SPAWN_FAILURE_EXIT_CODE) -> ExecutionOutcome:
        """Build a failed outcome carrying ``message`` as stderr."""
        return cls(exit_code=exit_code, stderr=message)


class DirectoryResult(ImmutableModel):
    """Outcome of one directory in a run, with its wall-clock duration."""

    directory: Annotated[str, Field(min_length=1)]
    outcome: ExecutionOutcome
    duration_ms: Annotated[int, Field(ge=0)]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success(self) -> bool:
        """Check if the command exited with status 0."""
        return self.outcome.exit_code == 0


class RunSummary(ImmutableModel):
    """Success and failure counts over a set of directory results."""

    succeeded: Annotated[int, Field(ge=0)]
    failed: Annotated[int, Field(ge=0)]
    total: Annotated[int, Field(ge=0)]

    @classmethod
    def from_results(cls, results: tuple[DirectoryResult, ...] | list[DirectoryResult]) -> RunSummary:
        succeeded = sum(1 for r in results if r.success)
        return cls(succeeded=succeeded, failed=len(results) - succeeded, total=len(results))


class RunReport(ImmutableModel):
    """Ordered results of one engine invocation.

    An empty report means no directory matched the filters, which callers
    must treat differently from a run where every directory succeeded.
    """

    results: tuple[DirectoryResult, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def nothing_matched(self) -> bool:
        return not self.results

    @computed_field  # type: ignore[prop-decorator]
    @property
    def summary(self) -> RunSummary:
        from ...services.execution.aggregate import summarize

        return summarize(self.results)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def exit_code(self) -> int:
        from ...services.execution.aggregate import exit_code

        return exit_code(self.results)

    @property
    def directories(self) -> list[str]:
        return [r.directory for r in self.results]


class ExecutionMode(ImmutableModel):
    """Sequential or bounded-parallel execution policy."""

    parallel: bool = False
    concurrency: Annotated[int, Field(ge=1)] = DEFAULT_CONCURRENCY

    @classmethod
    def sequential(cls) -> ExecutionMode:
        return cls(parallel=False)

    @classmethod
    def concurrent(cls, concurrency: int = DEFAULT_CONCURRENCY) -> ExecutionMode:
        return cls(parallel=True, concurrency=concurrency)

    def worker_count(self, directory_count: int) -> int:
        """Number of workers to start for ``directory_count`` directories."""
        if not self.parallel:
            return min(1, directory_count)
        return min(self.concurrency, directory_count)


# =============================================================================
# Command and filter specifications
# =============================================================================

CommandFn = Callable[[Path, str], ExecutionOutcome]


@dataclass(frozen=True)
class LiteralCommand:
    """A shell command string run unchanged in every directory."""

    command: str


@dataclass(frozen=True)
class GeneratedCommand:
    """A per-directory function producing an outcome.

    ``fn`` receives the absolute directory and the project's relative path.
    """

    fn: CommandFn
    label: str = "<generated>"


CommandSpec = LiteralCommand | GeneratedCommand


def as_command_spec(command: str | CommandFn | CommandSpec) -> CommandSpec:
    """Wrap a plain string or callable in the matching CommandSpec variant."""
    if isinstance(command, (LiteralCommand, GeneratedCommand)):
        return command
    if isinstance(command, str):
        return LiteralCommand(command)
    if callable(command):
        return GeneratedCommand(command, label=getattr(command, "__name__", "<generated>"))
    raise TypeError(f"Unsupported command type: {type(command).__name__}")


@dataclass(frozen=True)
class FilterSpec:
    """Include/exclude rules applied to project paths.

    Evaluation order is include_only, exclude_only, include_pattern,
    exclude_pattern; each step narrows the previous one. Exact sets match
    either the full relative path or its last segment.
    """

    include_only: frozenset[str] | None = None
    exclude_only: frozenset[str] | None = None
    include_pattern: re.Pattern[str] | None = None
    exclude_pattern: re.Pattern[str] | None = None

    @property
    def is_empty(self) -> bool:
        return (
            not self.include_only
            and not self.exclude_only
            and self.include_pattern is None
            and self.exclude_pattern is None
        )
