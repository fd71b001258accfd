"""npm command builders."""

from __future__ import annotations

import json
import shlex
from pathlib import Path

from ...core.models.execution import ExecutionOutcome
from ..execution.process_runner import ProcessRunner
from .planned import PlannedCommand

PACKAGE_JSON = "package.json"


def install() -> PlannedCommand:
    return PlannedCommand("npm install", "Installing dependencies across repositories...")


def ci() -> PlannedCommand:
    return PlannedCommand("npm ci", "Running clean install across repositories...")


def has_script(directory: Path, script: str) -> bool:
    """Check whether package.json in ``directory`` defines ``script``."""
    package_json = directory / PACKAGE_JSON
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return False
    scripts = data.get("scripts") if isinstance(data, dict) else None
    return isinstance(scripts, dict) and script in scripts


def run_script(
    script: str,
    if_present: bool = False,
    runner: ProcessRunner | None = None,
    timeout: float | None = None,
) -> PlannedCommand:
    """
    Run an npm script in every project.

    With ``if_present`` the command becomes a per-directory function that
    skips (successfully) projects whose package.json lacks the script.
    """
    command = f"npm run {shlex.quote(script)}"
    message = f'Running "npm run {script}" across repositories...'

    if not if_present:
        return PlannedCommand(command, message)

    def run_if_present(directory: Path, project: str) -> ExecutionOutcome:
        if not has_script(directory, script):
            return ExecutionOutcome.ok(f'Script "{script}" not found, skipping')
        return (runner or ProcessRunner()).run(command, directory, timeout=timeout)

    run_if_present.__name__ = f"npm-run-if-present:{script}"
    return PlannedCommand(run_if_present, message)
