"""
Shared helpers for looping commands.

Every command that fans out over projects goes through run_planned(): it
resolves filters and the execution mode (CLI flag, then named-command
default, then settings), runs the loop and turns the aggregate exit code
into the process exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.models.execution import ExecutionMode, FilterSpec, RunReport
from ...presenters.report import JsonReportPresenter
from ...services.commands import PlannedCommand
from ...services.execution import (
    ExecutionEngine,
    LoopContext,
    LoopOptions,
    create_filter_spec,
    merge_filter_specs,
    run_loop,
)

if TYPE_CHECKING:
    from ..context import GogoContext


def resolve_mode(
    ctx: GogoContext,
    parallel: bool | None,
    concurrency: int | None,
    sequential: bool = False,
    default_parallel: bool | None = None,
    default_concurrency: int | None = None,
) -> ExecutionMode:
    """Pick the execution mode; commands flagged sequential never run in parallel."""
    if sequential:
        return ExecutionMode.sequential()

    use_parallel = parallel if parallel is not None else bool(default_parallel)
    if not use_parallel:
        return ExecutionMode.sequential()

    limit = concurrency or default_concurrency or ctx.settings.execution.concurrency
    return ExecutionMode.concurrent(limit)


def build_filters(
    include_only: str | None = None,
    exclude_only: str | None = None,
    include_pattern: str | None = None,
    exclude_pattern: str | None = None,
    defaults: FilterSpec | None = None,
) -> FilterSpec:
    """
    Raises:
        FilterPatternError: If a pattern does not compile
    """
    spec = create_filter_spec(
        include_only=include_only,
        exclude_only=exclude_only,
        include_pattern=include_pattern,
        exclude_pattern=exclude_pattern,
    )
    return merge_filter_specs(spec, defaults) if defaults is not None else spec


def run_planned(
    ctx: GogoContext,
    planned: PlannedCommand,
    *,
    include_only: str | None = None,
    exclude_only: str | None = None,
    include_pattern: str | None = None,
    exclude_pattern: str | None = None,
    parallel: bool | None = None,
    concurrency: int | None = None,
    timeout: float | None = None,
    json_output: bool = False,
    default_filters: FilterSpec | None = None,
    default_parallel: bool | None = None,
    default_concurrency: int | None = None,
) -> RunReport:
    """
    Run a planned command over the meta repository and exit with its status.

    Raises:
        GogoConfigError: On manifest or filter problems (before anything runs)
        SystemExit: With the aggregate exit code when any project failed
    """
    filters = build_filters(include_only, exclude_only, include_pattern, exclude_pattern, default_filters)
    mode = resolve_mode(
        ctx,
        parallel,
        concurrency,
        sequential=planned.sequential,
        default_parallel=default_parallel,
        default_concurrency=default_concurrency,
    )
    config = ctx.load_meta()
    meta_dir = ctx.meta_dir or ctx.cwd

    presenter = JsonReportPresenter() if json_output else ctx.presenter
    presenter.info(planned.message)

    report = run_loop(
        planned.command,
        LoopContext(config=config, meta_dir=meta_dir),
        LoopOptions(filters=filters, mode=mode, timeout=timeout),
        engine=ExecutionEngine(runner=ctx.create_runner()),
        presenter=presenter,
    )

    if isinstance(presenter, JsonReportPresenter):
        label = planned.command if isinstance(planned.command, str) else None
        presenter.show_report(report, command=label)

    if report.exit_code != 0:
        raise SystemExit(report.exit_code)
    return report
