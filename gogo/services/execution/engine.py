"""
Execution engine: run one command over an ordered list of directories.

Two policies:

- Sequential: one directory at a time, in order. ``on_start`` fires before
  and ``on_complete`` after each directory, so output appears as it is
  produced. Required for commands whose side effects or prompts must not
  overlap (rebase, merge, commit, ...).
- Parallel: a bounded thread pool of ``min(concurrency, len(directories))``
  workers. Each submitted task owns one result slot, identified by its
  input index, so results come back in input order whatever the completion
  order. Hooks fire for every directory, in input order, once the whole
  batch is done.

Every directory is always attempted. Non-zero exits, timeouts and spawn
failures are recorded on the results; nothing is retried.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from ...core.interfaces.logger import ILogger
from ...core.models.execution import (
    CommandFn,
    CommandSpec,
    DirectoryResult,
    ExecutionMode,
    ExecutionOutcome,
    GeneratedCommand,
    LiteralCommand,
    RunReport,
    as_command_spec,
)
from .process_runner import ProcessRunner

StartHook = Callable[[str], None]
CompleteHook = Callable[[DirectoryResult], None]
DirectoryRunner = Callable[[str], ExecutionOutcome]


class ExecutionEngine:
    """Drives a ProcessRunner (or a per-directory function) across directories."""

    def __init__(self, runner: ProcessRunner | None = None, logger: ILogger | None = None) -> None:
        """
        Initialize execution engine.

        Args:
            runner: Process runner for literal commands (a default one is created if omitted)
            logger: Logger for internal diagnostics
        """
        self._runner = runner or ProcessRunner(logger=logger)
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    @property
    def runner(self) -> ProcessRunner:
        return self._runner

    def execute(
        self,
        command: str | CommandFn | CommandSpec,
        directories: Sequence[str],
        root: str | Path,
        mode: ExecutionMode | None = None,
        timeout: float | None = None,
        on_start: StartHook | None = None,
        on_complete: CompleteHook | None = None,
    ) -> RunReport:
        """
        Run ``command`` in each of ``directories`` (relative to ``root``).

        Args:
            command: Shell command string, per-directory function, or CommandSpec
            directories: Relative project paths, in the order results must follow
            root: Meta repository root the paths are joined to
            mode: Sequential (default) or parallel execution policy
            timeout: Per-directory timeout in seconds for literal commands
            on_start: Called with the directory name before its output is shown
            on_complete: Called with each finished DirectoryResult

        Returns:
            RunReport with one result per directory in input order. An empty
            ``directories`` yields an empty report (``nothing_matched``).
        """
        spec = as_command_spec(command)
        mode = mode or ExecutionMode.sequential()
        ordered = list(directories)

        if not ordered:
            self.logger.debug("No directories to run %s in", _describe(spec))
            return RunReport()

        run_one = self._bind(spec, Path(root), timeout)
        workers = mode.worker_count(len(ordered))
        self.logger.debug(
            "Running %s in %d directories (parallel=%s, workers=%d)",
            _describe(spec),
            len(ordered),
            mode.parallel,
            workers,
        )

        if mode.parallel:
            results = self._run_parallel(ordered, run_one, workers)
            for result in results:
                if on_start is not None:
                    on_start(result.directory)
                if on_complete is not None:
                    on_complete(result)
        else:
            results = self._run_sequential(ordered, run_one, on_start, on_complete)

        return RunReport(results=tuple(results))

    def _bind(self, spec: CommandSpec, root: Path, timeout: float | None) -> DirectoryRunner:
        """Resolve the command variant once into a single per-directory callable."""
        if isinstance(spec, LiteralCommand):

            def run_literal(directory: str) -> ExecutionOutcome:
                return self._runner.run(spec.command, root / directory, timeout=timeout)

            return run_literal

        if isinstance(spec, GeneratedCommand):

            def run_generated(directory: str) -> ExecutionOutcome:
                try:
                    return spec.fn(root / directory, directory)
                except Exception as e:
                    self.logger.error("Command %s failed in %s: %s", spec.label, directory, e)
                    return ExecutionOutcome.failure(f"{type(e).__name__}: {e}")

            return run_generated

        raise TypeError(f"Unsupported command spec: {spec!r}")

    def _run_directory(self, directory: str, run_one: DirectoryRunner) -> DirectoryResult:
        start = time.monotonic()
        outcome = run_one(directory)
        duration_ms = int((time.monotonic() - start) * 1000)
        self.logger.debug(
            "%s finished: exit=%d timed_out=%s duration=%dms",
            directory,
            outcome.exit_code,
            outcome.timed_out,
            duration_ms,
        )
        return DirectoryResult(directory=directory, outcome=outcome, duration_ms=duration_ms)

    def _run_sequential(
        self,
        directories: list[str],
        run_one: DirectoryRunner,
        on_start: StartHook | None,
        on_complete: CompleteHook | None,
    ) -> list[DirectoryResult]:
        results: list[DirectoryResult] = []
        for directory in directories:
            if on_start is not None:
                on_start(directory)
            result = self._run_directory(directory, run_one)
            if on_complete is not None:
                on_complete(result)
            results.append(result)
        return results

    def _run_parallel(
        self,
        directories: list[str],
        run_one: DirectoryRunner,
        workers: int,
    ) -> list[DirectoryResult]:
        slots: list[DirectoryResult | None] = [None] * len(directories)

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="gogo-worker") as pool:
            futures = {
                pool.submit(self._run_directory, directory, run_one): index
                for index, directory in enumerate(directories)
            }
            for future in as_completed(futures):
                slots[futures[future]] = future.result()

        return [result for result in slots if result is not None]


def _describe(spec: CommandSpec) -> str:
    if isinstance(spec, LiteralCommand):
        return repr(spec.command)
    return spec.label
