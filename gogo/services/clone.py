"""
Cloning of child repositories into a meta repository.

Used by ``gogo git clone`` (after the meta repository itself is cloned),
``gogo git update`` and ``gogo project import``. Clones go through the
execution engine as a generated per-directory command, so they honor the
same ordering, concurrency and timeout rules as every other loop.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..core.interfaces.presenter import IPresenter
from ..core.models.config import MetaConfig
from ..core.models.execution import (
    DirectoryResult,
    ExecutionMode,
    ExecutionOutcome,
    GeneratedCommand,
    RunReport,
)
from .commands import git
from .execution.engine import ExecutionEngine
from .execution.process_runner import ProcessRunner

ALREADY_EXISTS = "already exists"


def clone_into(
    url: str,
    target: Path,
    runner: ProcessRunner,
    timeout: float | None = None,
) -> ExecutionOutcome:
    """Clone ``url`` to ``target``, creating parent directories as needed."""
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return ExecutionOutcome.failure(str(e))
    return runner.run(git.clone(url, target.name), target.parent, timeout=timeout)


def find_missing(config: MetaConfig, meta_dir: Path, paths: Sequence[str]) -> list[str]:
    """The subset of ``paths`` (in order) that has no directory on disk yet."""
    return [p for p in paths if p in config.projects and not (meta_dir / p).exists()]


def clone_projects(
    config: MetaConfig,
    meta_dir: Path,
    paths: Sequence[str],
    runner: ProcessRunner | None = None,
    mode: ExecutionMode | None = None,
    timeout: float | None = None,
    presenter: IPresenter | None = None,
) -> RunReport:
    """
    Clone the given projects of ``config`` below ``meta_dir``.

    Projects whose directory already exists count as successes and are
    left alone.
    """
    runner = runner or ProcessRunner()

    def clone_one(directory: Path, project: str) -> ExecutionOutcome:
        if directory.exists():
            return ExecutionOutcome.ok(ALREADY_EXISTS)
        return clone_into(config.projects[project], directory, runner, timeout=timeout)

    def report_status(result: DirectoryResult) -> None:
        if presenter is None:
            return
        if result.success:
            note = ALREADY_EXISTS if result.outcome.stdout == ALREADY_EXISTS else "cloned"
            presenter.project_status(result.directory, True, note)
        else:
            presenter.project_status(result.directory, False, result.outcome.stderr or "clone failed")

    engine = ExecutionEngine(runner=runner)
    return engine.execute(
        GeneratedCommand(clone_one, label="git-clone"),
        list(paths),
        meta_dir,
        mode=mode,
        on_complete=report_status,
    )
