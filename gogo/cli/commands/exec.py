"""
Native Click implementation of the exec command.

Usage: gogo exec [options] <command>
"""

import click

from ...services.commands import PlannedCommand
from ..context import GogoContext
from ..decorators import handle_errors, require_meta
from ..options import loop_options
from ._loop import run_planned


@click.command("exec")
@click.argument("command")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def exec_(ctx: GogoContext, command: str, **options) -> None:
    """Execute a shell command in every project directory.

    \b
    Examples:
        gogo exec "git status --short"
        gogo exec "npm test" --parallel --concurrency 8
        gogo exec "make lint" --include-pattern '^services/'
    """
    if not command.strip():
        raise click.UsageError("Command must not be empty")
    run_planned(ctx, PlannedCommand(command, f"Executing: {command}"), **options)
