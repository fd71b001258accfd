"""
Native Click implementation of the run command.

Usage: gogo run [name] [options]
       gogo run --list
"""

import click

from ...config import ResolvedCommand, get_command, list_commands
from ...core.exceptions import UnknownCommandError
from ...services.commands import PlannedCommand
from ..context import GogoContext
from ..decorators import handle_errors, require_meta
from ..options import loop_options
from ._loop import run_planned


@click.command("run")
@click.argument("name", required=False)
@click.option("-l", "--list", "list_only", is_flag=True, help="List all available commands")
@loop_options()
@click.pass_obj
@handle_errors
@require_meta
def run(ctx: GogoContext, name: str | None, list_only: bool, **options) -> None:
    """Run a named command from the .gogo file.

    Command-line flags override the command's own defaults field by field.

    \b
    Examples:
        gogo run --list
        gogo run build
        gogo run test --parallel --exclude-only legacy
    """
    config = ctx.load_meta()

    if list_only or name is None:
        _print_command_list(ctx, list_commands(config))
        return

    command = get_command(config, name)
    if command is None:
        raise UnknownCommandError(name, list((config.commands or {}).keys()))

    run_planned(
        ctx,
        PlannedCommand(command.cmd, f'Running "{name}": {command.cmd}'),
        default_filters=command.filter_spec(),
        default_parallel=command.parallel,
        default_concurrency=command.concurrency,
        **options,
    )


def _print_command_list(ctx: GogoContext, commands: list[ResolvedCommand]) -> None:
    presenter = ctx.presenter

    if not commands:
        presenter.info("No commands defined in .gogo file")
        presenter.print("  Add commands to your .gogo file:")
        presenter.print('  "commands": { "build": "npm run build" }')
        return

    presenter.info("Available commands:")
    presenter.print("")

    width = max(len(c.name) for c in commands)
    for c in commands:
        presenter.print(f"  {c.name.ljust(width)}  {c.description or c.cmd}")
