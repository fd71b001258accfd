"""
Native Click implementation of the npm command group.

Usage: gogo npm install|ci|run <script> [options]
       gogo npm link [--all] [filters]
"""

import click

from ...services.commands import npm as builders
from ...services.execution import LoopContext, select_directories
from ...services.execution.loop import NO_MATCH_MESSAGE
from ...services.link import find_local_packages, link_globally, link_siblings
from ..context import GogoContext
from ..decorators import handle_errors, require_meta
from ..options import filter_options, loop_options
from ._loop import build_filters, run_planned


@click.group("npm")
def npm() -> None:
    """npm operations across all repositories."""
    pass


@npm.command("install")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def install(ctx: GogoContext, **options) -> None:
    """Run npm install in all projects."""
    run_planned(ctx, builders.install(), **options)


@npm.command("ci")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def ci(ctx: GogoContext, **options) -> None:
    """Run npm ci in all projects."""
    run_planned(ctx, builders.ci(), **options)


@npm.command("run")
@click.argument("script")
@click.option("--if-present", is_flag=True, help="Skip projects whose package.json lacks the script")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def run_script(ctx: GogoContext, script: str, if_present: bool, **options) -> None:
    """Run an npm script in all projects."""
    planned = builders.run_script(
        script,
        if_present=if_present,
        runner=ctx.create_runner(),
        timeout=options.get("timeout"),
    )
    run_planned(ctx, planned, **options)


@npm.command("link")
@click.option("--all", "link_all", is_flag=True, help="Symlink local packages into each other's node_modules")
@filter_options
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None, metavar="SECONDS")
@click.pass_obj
@handle_errors
@require_meta
def link(
    ctx: GogoContext,
    link_all: bool,
    include_only: str | None,
    exclude_only: str | None,
    include_pattern: str | None,
    exclude_pattern: str | None,
    timeout: float | None,
) -> None:
    """Link local packages globally, or to each other with --all."""
    presenter = ctx.presenter
    filters = build_filters(include_only, exclude_only, include_pattern, exclude_pattern)
    meta_dir = ctx.meta_dir or ctx.cwd

    paths = select_directories(LoopContext(config=ctx.load_meta(), meta_dir=meta_dir), filters)
    if not paths:
        presenter.warning(NO_MATCH_MESSAGE)
        return

    packages = find_local_packages(meta_dir, paths)
    if not packages:
        presenter.warning("No projects with package.json found")
        return

    presenter.info(f"Found {len(packages)} linkable projects")
    if link_all:
        result = link_siblings(packages, presenter)
    else:
        result = link_globally(packages, ctx.create_runner(), presenter, timeout=timeout)

    presenter.success(f"Created {result.linked} links")
    if result.failed:
        raise SystemExit(1)
