"""
Click-based CLI for gogo.

This module provides the main Click command group and serves as the
entry point for the gogo CLI.

Usage:
    from gogo.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click
from pydantic import ValidationError

from .. import __version__
from .context import GogoContext


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="gogo")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """gogo - run commands across many repositories

    A meta repository lists its child repositories in a .gogo file;
    gogo runs git, npm or any shell command in each of them.

    \b
    Quick Start:
        gogo init                         Create a .gogo file here
        gogo project import api <url>     Add a child repository
        gogo git clone <url>              Clone a meta repository and its children

    \b
    Looping:
        gogo exec "<command>"             Run a shell command in every project
        gogo run <name>                   Run a named command from .gogo
        gogo git status --parallel        Git across all projects
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        try:
            ctx.obj = GogoContext.create(verbose=verbose)
        except ValidationError as e:
            raise click.ClickException(f"Invalid gogo settings:\n{e}") from e


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


register_commands()


__all__ = [
    "GogoContext",
    "cli",
    "register_commands",
]
