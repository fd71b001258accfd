"""
Loop service: the pipeline every looping command goes through.

manifest paths -> .looprc ignore -> filters -> engine -> presenter summary
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ...config import get_project_paths, read_loop_rc
from ...core.interfaces.presenter import IPresenter
from ...core.models.config import MetaConfig
from ...core.models.execution import (
    CommandFn,
    CommandSpec,
    DirectoryResult,
    ExecutionMode,
    FilterSpec,
    RunReport,
)
from .engine import ExecutionEngine
from .filter import apply_filters, filter_from_loop_rc

NO_MATCH_MESSAGE = "No projects match the specified filters"


@dataclass
class LoopContext:
    """The loaded manifest and the directory it lives in."""

    config: MetaConfig
    meta_dir: Path


@dataclass
class LoopOptions:
    """Per-invocation knobs for run_loop()."""

    filters: FilterSpec = field(default_factory=FilterSpec)
    mode: ExecutionMode = field(default_factory=ExecutionMode.sequential)
    timeout: float | None = None
    suppress_output: bool = False


def select_directories(context: LoopContext, filters: FilterSpec) -> list[str]:
    """Project paths the loop will visit, in declaration order."""
    directories = get_project_paths(context.config)

    loop_rc = read_loop_rc(context.meta_dir)
    if loop_rc is not None and loop_rc.ignore:
        directories = filter_from_loop_rc(directories, loop_rc.ignore)

    return apply_filters(directories, filters)


def run_loop(
    command: str | CommandFn | CommandSpec,
    context: LoopContext,
    options: LoopOptions | None = None,
    engine: ExecutionEngine | None = None,
    presenter: IPresenter | None = None,
) -> RunReport:
    """
    Run ``command`` across the selected projects of a meta repository.

    Args:
        command: Shell command string, per-directory function, or CommandSpec
        context: Manifest and meta directory
        options: Filters, execution mode, timeout and output suppression
        engine: Engine to use (a default one is created if omitted)
        presenter: Output sink (resolved from the container if omitted)

    Returns:
        RunReport in declaration order; empty when nothing matched
    """
    options = options or LoopOptions()
    engine = engine or ExecutionEngine()
    if presenter is None:
        presenter = _get_presenter()

    directories = select_directories(context, options.filters)

    if not directories:
        presenter.warning(NO_MATCH_MESSAGE)
        return RunReport()

    on_start = None
    on_complete = None
    if not options.suppress_output:
        on_start = presenter.header

        def on_complete(result: DirectoryResult) -> None:
            presenter.result(result)

    report = engine.execute(
        command,
        directories,
        context.meta_dir,
        mode=options.mode,
        timeout=options.timeout,
        on_start=on_start,
        on_complete=on_complete,
    )

    if not options.suppress_output:
        presenter.summary(report.summary)

    return report


def _get_presenter() -> IPresenter:
    from ...core.di import resolve_or_default
    from ...presenters.console import ConsolePresenter

    return resolve_or_default(IPresenter, ConsolePresenter)  # type: ignore[type-abstract]
