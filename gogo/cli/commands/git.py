"""
Native Click implementation of the git command group.

Usage: gogo git <subcommand> [options]
"""

from __future__ import annotations

import click

from ...config import META_FILE, read_meta_config
from ...services.clone import clone_into, clone_projects, find_missing
from ...services.commands import git as builders
from ...services.execution import select_directories
from ...services.execution.loop import NO_MATCH_MESSAGE, LoopContext
from ...services.ssh import ensure_ssh_hosts_known
from ..context import GogoContext
from ..decorators import handle_errors, require_meta
from ..options import filter_options, loop_options, parallel_options
from ._loop import build_filters, resolve_mode, run_planned


@click.group("git")
def git() -> None:
    """Git operations across all repositories."""
    pass


# =============================================================================
# Cloning
# =============================================================================


@git.command("clone")
@click.argument("url")
@click.option("-d", "--directory", default=None, help="Target directory name")
@parallel_options
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None, metavar="SECONDS")
@click.pass_obj
@handle_errors
def clone(
    ctx: GogoContext,
    url: str,
    directory: str | None,
    parallel: bool | None,
    concurrency: int | None,
    timeout: float | None,
) -> None:
    """Clone a meta repository and all of its child repositories."""
    presenter = ctx.presenter
    name = directory or builders.extract_repo_name(url)
    target = ctx.cwd / name

    if target.exists():
        raise click.ClickException(f'Directory "{name}" already exists')

    runner = ctx.create_runner()
    ensure_ssh_hosts_known([url], presenter=presenter)

    presenter.info(f"Cloning meta repository: {url}")
    outcome = clone_into(url, target, runner, timeout=timeout)
    if outcome.exit_code != 0:
        presenter.error("Failed to clone meta repository")
        if outcome.stderr:
            presenter.print(outcome.stderr)
        raise SystemExit(1)
    presenter.success(f"Cloned meta repository to {name}")

    if not (target / META_FILE).exists():
        presenter.warning(f"No {META_FILE} file found in cloned repository")
        return

    config = read_meta_config(target)
    paths = list(config.projects)
    if not paths:
        presenter.info(f"No child repositories defined in {META_FILE}")
        return

    ensure_ssh_hosts_known(config.projects.values(), presenter=presenter)

    presenter.info(f"Cloning {len(paths)} child repositories...")
    report = clone_projects(
        config,
        target,
        paths,
        runner=runner,
        mode=resolve_mode(ctx, parallel, concurrency),
        timeout=timeout,
        presenter=presenter,
    )
    presenter.summary(report.summary)

    if report.exit_code != 0:
        raise SystemExit(report.exit_code)


@git.command("update")
@filter_options
@parallel_options
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None, metavar="SECONDS")
@click.pass_obj
@handle_errors
@require_meta
def update(
    ctx: GogoContext,
    include_only: str | None,
    exclude_only: str | None,
    include_pattern: str | None,
    exclude_pattern: str | None,
    parallel: bool | None,
    concurrency: int | None,
    timeout: float | None,
) -> None:
    """Clone any child repositories listed in .gogo that are missing."""
    presenter = ctx.presenter
    filters = build_filters(include_only, exclude_only, include_pattern, exclude_pattern)
    config = ctx.load_meta()
    meta_dir = ctx.meta_dir or ctx.cwd

    paths = select_directories(LoopContext(config=config, meta_dir=meta_dir), filters)
    if not paths:
        presenter.warning(NO_MATCH_MESSAGE)
        return

    presenter.info(f"Checking {len(paths)} repositories...")
    missing = find_missing(config, meta_dir, paths)
    if not missing:
        presenter.success("All repositories are already cloned")
        return

    ensure_ssh_hosts_known([config.projects[p] for p in missing], presenter=presenter)

    presenter.info(f"Cloning {len(missing)} missing repositories...")
    report = clone_projects(
        config,
        meta_dir,
        missing,
        runner=ctx.create_runner(),
        mode=resolve_mode(ctx, parallel, concurrency),
        timeout=timeout,
        presenter=presenter,
    )
    presenter.summary(report.summary)

    if report.exit_code != 0:
        raise SystemExit(report.exit_code)


# =============================================================================
# Looping commands (may run in parallel)
# =============================================================================


@git.command("status")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def status(ctx: GogoContext, **options) -> None:
    """Show git status across all repositories."""
    run_planned(ctx, builders.status(), **options)


@git.command("fetch")
@click.option("--all", "all_remotes", is_flag=True, help="Fetch all remotes")
@click.option("--prune", is_flag=True, help="Remove deleted remote branches")
@click.option("--tags", is_flag=True, help="Fetch all tags")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def fetch(ctx: GogoContext, all_remotes: bool, prune: bool, tags: bool, **options) -> None:
    """Fetch from remotes in all repositories."""
    run_planned(ctx, builders.fetch(all_remotes=all_remotes, prune=prune, tags=tags), **options)


@git.command("pull")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def pull(ctx: GogoContext, **options) -> None:
    """Pull changes in all repositories."""
    run_planned(ctx, builders.pull(), **options)


@git.command("push")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def push(ctx: GogoContext, **options) -> None:
    """Push changes in all repositories."""
    run_planned(ctx, builders.push(), **options)


@git.command("diff")
@click.argument("target", required=False)
@click.option("--cached", is_flag=True, help="Show staged changes")
@click.option("--stat", is_flag=True, help="Show diffstat only")
@click.option("--name-only", is_flag=True, help="Show only names of changed files")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def diff(
    ctx: GogoContext,
    target: str | None,
    cached: bool,
    stat: bool,
    name_only: bool,
    **options,
) -> None:
    """Show changes across all repositories."""
    run_planned(ctx, builders.diff(target, cached=cached, stat=stat, name_only=name_only), **options)


@git.command("log")
@click.option("-n", "--number", type=click.IntRange(min=1), default=None, help="Limit number of commits")
@click.option("--oneline", is_flag=True, help="One line per commit")
@click.option("--since", default=None, help="Show commits more recent than a date")
@click.option("--format", "fmt", default=None, help="Pretty-print format")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def log(
    ctx: GogoContext,
    number: int | None,
    oneline: bool,
    since: str | None,
    fmt: str | None,
    **options,
) -> None:
    """Show commit logs across all repositories."""
    run_planned(ctx, builders.log(number=number, oneline=oneline, since=since, fmt=fmt), **options)


@git.command("branch")
@click.argument("name", required=False)
@click.option("-d", "--delete", is_flag=True, help="Delete the branch")
@click.option("-a", "--all", "all_branches", is_flag=True, help="List local and remote branches")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def branch(ctx: GogoContext, name: str | None, delete: bool, all_branches: bool, **options) -> None:
    """List, create, or delete branches."""
    run_planned(ctx, builders.branch(name, delete=delete, all_branches=all_branches), **options)


@git.command("checkout")
@click.argument("name")
@click.option("-b", "--create", is_flag=True, help="Create the branch if it does not exist")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def checkout(ctx: GogoContext, name: str, create: bool, **options) -> None:
    """Check out a branch in all repositories."""
    run_planned(ctx, builders.checkout(name, create=create), **options)


@git.command("add")
@click.argument("files", nargs=-1)
@click.option("-A", "--all", "all_changes", is_flag=True, help="Stage all changes")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def add(ctx: GogoContext, files: tuple[str, ...], all_changes: bool, **options) -> None:
    """Stage files in all repositories (default: everything under each root)."""
    run_planned(ctx, builders.add(files, all_changes=all_changes), **options)


@git.command("tag")
@click.argument("name", required=False)
@click.option("-d", "--delete", is_flag=True, help="Delete the tag")
@click.option("-m", "--message", default=None, help="Tag message (implies -a)")
@click.option("-a", "--annotate", is_flag=True, help="Create an annotated tag")
@click.option("-l", "--list", "list_tags", is_flag=True, help="List tags")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def tag(
    ctx: GogoContext,
    name: str | None,
    delete: bool,
    message: str | None,
    annotate: bool,
    list_tags: bool,
    **options,
) -> None:
    """List, create, or delete tags."""
    planned = builders.tag(name, delete=delete, message=message, annotate=annotate, list_tags=list_tags)
    run_planned(ctx, planned, **options)


@git.command("clean")
@click.option("-f", "--force", is_flag=True, help="Actually remove files")
@click.option("-d", "directories", is_flag=True, help="Remove untracked directories too")
@click.option("-n", "--dry-run", is_flag=True, help="Only show what would be removed")
@click.option("-x", "ignored", is_flag=True, help="Remove ignored files too")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def clean(
    ctx: GogoContext,
    force: bool,
    directories: bool,
    dry_run: bool,
    ignored: bool,
    **options,
) -> None:
    """Remove untracked files in all repositories."""
    planned = builders.clean(force=force, directories=directories, dry_run=dry_run, ignored=ignored)
    run_planned(ctx, planned, **options)


# =============================================================================
# Sequential-only commands
# =============================================================================


@git.command("commit")
@click.option("-m", "--message", required=True, help="Commit message")
@loop_options(parallel=False)
@click.pass_obj
@handle_errors
@require_meta
def commit(ctx: GogoContext, message: str, **options) -> None:
    """Commit staged changes in all repositories (always sequential)."""
    run_planned(ctx, builders.commit(message), **options)


@git.command("merge")
@click.argument("name", required=False)
@click.option("--abort", is_flag=True, help="Abort the current merge")
@click.option("--no-ff", is_flag=True, help="Always create a merge commit")
@click.option("--ff-only", is_flag=True, help="Refuse to merge unless fast-forward")
@click.option("--squash", is_flag=True, help="Squash the merged changes")
@loop_options(parallel=False)
@click.pass_obj
@handle_errors
@require_meta
def merge(
    ctx: GogoContext,
    name: str | None,
    abort: bool,
    no_ff: bool,
    ff_only: bool,
    squash: bool,
    **options,
) -> None:
    """Merge a branch in all repositories (always sequential)."""
    planned = builders.merge(name, abort=abort, no_ff=no_ff, ff_only=ff_only, squash=squash)
    run_planned(ctx, planned, **options)


@git.command("rebase")
@click.argument("target", required=False)
@click.option("--abort", is_flag=True, help="Abort the current rebase")
@click.option("--continue", "continue_", is_flag=True, help="Continue the current rebase")
@click.option("--skip", is_flag=True, help="Skip the current patch")
@click.option("--onto", default=None, help="Rebase onto a different base")
@click.option("--autosquash", is_flag=True, help="Apply fixup!/squash! commits non-interactively")
@click.option("-i", "--interactive", is_flag=True, help="Interactive rebase, accepting the default todo list")
@loop_options(parallel=False)
@click.pass_obj
@handle_errors
@require_meta
def rebase(
    ctx: GogoContext,
    target: str | None,
    abort: bool,
    continue_: bool,
    skip: bool,
    onto: str | None,
    autosquash: bool,
    interactive: bool,
    **options,
) -> None:
    """Rebase in all repositories (always sequential)."""
    planned = builders.rebase(
        target,
        abort=abort,
        continue_=continue_,
        skip=skip,
        onto=onto,
        autosquash=autosquash,
        interactive=interactive,
    )
    run_planned(ctx, planned, **options)


@git.command("cherry-pick")
@click.argument("commits", nargs=-1)
@click.option("--abort", is_flag=True, help="Abort the current cherry-pick")
@click.option("--continue", "continue_", is_flag=True, help="Continue the current cherry-pick")
@click.option("-n", "--no-commit", is_flag=True, help="Apply changes without committing")
@loop_options(parallel=False)
@click.pass_obj
@handle_errors
@require_meta
def cherry_pick(
    ctx: GogoContext,
    commits: tuple[str, ...],
    abort: bool,
    continue_: bool,
    no_commit: bool,
    **options,
) -> None:
    """Cherry-pick commits in all repositories (always sequential)."""
    planned = builders.cherry_pick(commits, abort=abort, continue_=continue_, no_commit=no_commit)
    run_planned(ctx, planned, **options)


@git.command("stash")
@click.argument("action", required=False, type=click.Choice(builders.STASH_ACTIONS))
@click.option("-m", "--message", default=None, help="Stash message")
@loop_options(parallel=False)
@click.pass_obj
@handle_errors
@require_meta
def stash(ctx: GogoContext, action: str | None, message: str | None, **options) -> None:
    """Stash changes, or pop/list/drop/show stashes (always sequential)."""
    run_planned(ctx, builders.stash(action, message=message), **options)


@git.command("reset")
@click.argument("target", required=False)
@click.option("--soft", is_flag=True, help="Keep index and working tree")
@click.option("--hard", is_flag=True, help="Discard index and working tree changes")
@click.option("--mixed", is_flag=True, help="Reset index, keep working tree")
@loop_options(parallel=False)
@click.pass_obj
@handle_errors
@require_meta
def reset(
    ctx: GogoContext,
    target: str | None,
    soft: bool,
    hard: bool,
    mixed: bool,
    **options,
) -> None:
    """Reset HEAD in all repositories (always sequential)."""
    run_planned(ctx, builders.reset(target, soft=soft, hard=hard, mixed=mixed), **options)
