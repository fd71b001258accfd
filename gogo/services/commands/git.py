"""
Git command builders.

User-supplied values (branch names, messages, refs, paths) are shell-quoted
with shlex.quote; flags are fixed strings.
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Sequence

from ...core.exceptions import CommandArgumentError
from .planned import PlannedCommand

STASH_ACTIONS = ("push", "pop", "list", "drop", "show")


def _join(parts: Sequence[str]) -> str:
    return " ".join(parts)


def extract_repo_name(url: str) -> str:
    """
    Directory name git would clone ``url`` into.

    Examples:
        git@github.com:org/api.git  -> api
        https://host/org/web        -> web
    """
    match = re.search(r"[/:]([^/:]+?)(\.git)?/?$", url)
    return match.group(1) if match else "repo"


def clone(url: str, directory: str) -> str:
    return _join(["git", "clone", shlex.quote(url), shlex.quote(directory)])


def status() -> PlannedCommand:
    return PlannedCommand("git status", "Checking status across repositories...")


def fetch(all_remotes: bool = False, prune: bool = False, tags: bool = False) -> PlannedCommand:
    parts = ["git", "fetch"]
    if all_remotes:
        parts.append("--all")
    if prune:
        parts.append("--prune")
    if tags:
        parts.append("--tags")
    return PlannedCommand(_join(parts), "Fetching across repositories...")


def pull() -> PlannedCommand:
    return PlannedCommand("git pull", "Pulling changes across repositories...")


def push() -> PlannedCommand:
    return PlannedCommand("git push", "Pushing changes across repositories...")


def diff(
    target: str | None = None,
    cached: bool = False,
    stat: bool = False,
    name_only: bool = False,
) -> PlannedCommand:
    parts = ["git", "diff"]
    if cached:
        parts.append("--cached")
    if stat:
        parts.append("--stat")
    if name_only:
        parts.append("--name-only")
    if target:
        parts.append(shlex.quote(target))
    return PlannedCommand(_join(parts), "Running git diff across repositories...")


def log(
    number: int | None = None,
    oneline: bool = False,
    since: str | None = None,
    fmt: str | None = None,
) -> PlannedCommand:
    parts = ["git", "log"]
    if oneline:
        parts.append("--oneline")
    if number:
        parts.append(f"-{number}")
    if since:
        parts.append(f"--since={shlex.quote(since)}")
    if fmt:
        parts.append(f"--format={shlex.quote(fmt)}")
    return PlannedCommand(_join(parts), "Running git log across repositories...")


def branch(name: str | None = None, delete: bool = False, all_branches: bool = False) -> PlannedCommand:
    """List branches, or create/delete ``name``."""
    if name:
        if delete:
            return PlannedCommand(
                f"git branch -d {shlex.quote(name)}",
                f'Deleting branch "{name}" across repositories...',
            )
        return PlannedCommand(
            f"git branch {shlex.quote(name)}",
            f'Creating branch "{name}" across repositories...',
        )
    return PlannedCommand(
        "git branch -a" if all_branches else "git branch",
        "Listing branches across repositories...",
    )


def checkout(name: str, create: bool = False) -> PlannedCommand:
    flag = "-b " if create else ""
    message = (
        f'Creating and checking out branch "{name}" across repositories...'
        if create
        else f'Checking out branch "{name}" across repositories...'
    )
    return PlannedCommand(f"git checkout {flag}{shlex.quote(name)}", message)


def commit(message: str) -> PlannedCommand:
    """
    Commit staged changes with ``message``.

    Raises:
        CommandArgumentError: If the message is empty
    """
    if not message or not message.strip():
        raise CommandArgumentError("Commit message must not be empty")
    return PlannedCommand(
        f"git commit -m {shlex.quote(message)}",
        "Committing changes across repositories...",
        sequential=True,
    )


def add(files: Sequence[str] = (), all_changes: bool = False) -> PlannedCommand:
    parts = ["git", "add"]
    if all_changes:
        parts.append("-A")
    elif files:
        parts.extend(shlex.quote(f) for f in files)
    else:
        parts.append(".")
    return PlannedCommand(_join(parts), "Staging files across repositories...")


def tag(
    name: str | None = None,
    delete: bool = False,
    message: str | None = None,
    annotate: bool = False,
    list_tags: bool = False,
) -> PlannedCommand:
    """List tags, or create/delete tag ``name``. A message implies an annotated tag."""
    if name and delete:
        return PlannedCommand(
            f"git tag -d {shlex.quote(name)}",
            f'Deleting tag "{name}" across repositories...',
        )
    if name:
        parts = ["git", "tag"]
        if annotate or message:
            parts.append("-a")
        parts.append(shlex.quote(name))
        if message:
            parts.extend(["-m", shlex.quote(message)])
        return PlannedCommand(_join(parts), f'Creating tag "{name}" across repositories...')
    return PlannedCommand(
        "git tag -l" if list_tags else "git tag",
        "Listing tags across repositories...",
    )


def merge(
    name: str | None = None,
    abort: bool = False,
    no_ff: bool = False,
    ff_only: bool = False,
    squash: bool = False,
) -> PlannedCommand:
    """
    Merge ``name`` into the current branch, or abort a merge in progress.

    Raises:
        CommandArgumentError: If neither a branch nor --abort is given
    """
    if abort:
        return PlannedCommand("git merge --abort", "Aborting merge across repositories...", sequential=True)
    if not name:
        raise CommandArgumentError("Branch name is required for merge")

    parts = ["git", "merge"]
    if no_ff:
        parts.append("--no-ff")
    if ff_only:
        parts.append("--ff-only")
    if squash:
        parts.append("--squash")
    parts.append(shlex.quote(name))
    return PlannedCommand(_join(parts), f'Merging "{name}" across repositories...', sequential=True)


def rebase(
    target: str | None = None,
    abort: bool = False,
    continue_: bool = False,
    skip: bool = False,
    onto: str | None = None,
    autosquash: bool = False,
    interactive: bool = False,
) -> PlannedCommand:
    """
    Rebase, or control a rebase in progress.

    --autosquash and --interactive run with GIT_SEQUENCE_EDITOR=true so the
    todo list is accepted as generated instead of opening an editor in
    every repository.
    """
    if abort:
        return PlannedCommand("git rebase --abort", "Aborting rebase across repositories...", sequential=True)
    if continue_:
        return PlannedCommand(
            "git rebase --continue", "Continuing rebase across repositories...", sequential=True
        )
    if skip:
        return PlannedCommand(
            "git rebase --skip", "Skipping current patch across repositories...", sequential=True
        )

    if autosquash:
        parts = ["GIT_SEQUENCE_EDITOR=true", "git", "rebase", "-i", "--autosquash"]
    elif interactive:
        parts = ["GIT_SEQUENCE_EDITOR=true", "git", "rebase", "-i"]
    else:
        parts = ["git", "rebase"]
    if onto:
        parts.extend(["--onto", shlex.quote(onto)])
    if target:
        parts.append(shlex.quote(target))

    message = (
        f'Rebasing onto "{target}" across repositories...' if target else "Rebasing across repositories..."
    )
    return PlannedCommand(_join(parts), message, sequential=True)


def cherry_pick(
    commits: Sequence[str] = (),
    abort: bool = False,
    continue_: bool = False,
    no_commit: bool = False,
) -> PlannedCommand:
    """
    Raises:
        CommandArgumentError: If no commits are given and no --abort/--continue
    """
    if abort:
        return PlannedCommand(
            "git cherry-pick --abort", "Aborting cherry-pick across repositories...", sequential=True
        )
    if continue_:
        return PlannedCommand(
            "git cherry-pick --continue", "Continuing cherry-pick across repositories...", sequential=True
        )
    if not commits:
        raise CommandArgumentError("Commit SHA(s) required for cherry-pick")

    parts = ["git", "cherry-pick"]
    if no_commit:
        parts.append("--no-commit")
    parts.extend(shlex.quote(c) for c in commits)
    return PlannedCommand(
        _join(parts), f"Cherry-picking {' '.join(commits)} across repositories...", sequential=True
    )


def stash(action: str | None = None, message: str | None = None) -> PlannedCommand:
    """
    Stash changes, or pop/list/drop/show the latest stash.

    Raises:
        CommandArgumentError: If ``action`` is not a known stash action
    """
    if action is not None and action not in STASH_ACTIONS:
        raise CommandArgumentError(
            f"Unknown stash action: {action}", context={"choices": ", ".join(STASH_ACTIONS)}
        )

    if action in ("pop", "list", "drop", "show"):
        verbs = {"pop": "Popping", "list": "Listing", "drop": "Dropping", "show": "Showing"}
        noun = "stashes" if action == "list" else "stash"
        return PlannedCommand(
            f"git stash {action}", f"{verbs[action]} {noun} across repositories...", sequential=True
        )

    if action is None and not message:
        command = "git stash"
    else:
        parts = ["git", "stash", "push"]
        if message:
            parts.extend(["-m", shlex.quote(message)])
        command = _join(parts)
    return PlannedCommand(command, "Stashing changes across repositories...", sequential=True)


def reset(
    target: str | None = None,
    soft: bool = False,
    hard: bool = False,
    mixed: bool = False,
) -> PlannedCommand:
    """Reset HEAD; --soft wins over --hard, which wins over --mixed."""
    parts = ["git", "reset"]
    if soft:
        parts.append("--soft")
    elif hard:
        parts.append("--hard")
    elif mixed:
        parts.append("--mixed")
    if target:
        parts.append(shlex.quote(target))
    return PlannedCommand(_join(parts), "Running git reset across repositories...", sequential=True)


def clean(
    force: bool = False,
    directories: bool = False,
    dry_run: bool = False,
    ignored: bool = False,
) -> PlannedCommand:
    parts = ["git", "clean"]
    if force:
        parts.append("-f")
    if directories:
        parts.append("-d")
    if dry_run:
        parts.append("-n")
    if ignored:
        parts.append("-x")
    return PlannedCommand(_join(parts), "Cleaning working directories across repositories...")
