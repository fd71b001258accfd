"""
Native Click implementation of the init command.

Usage: gogo init [--force]
"""

import click

from ...config import META_FILE, create_default_config, write_meta_config
from ..context import GogoContext
from ..decorators import handle_errors


@click.command("init")
@click.option("-f", "--force", is_flag=True, help=f"Overwrite an existing {META_FILE} file")
@click.pass_obj
@handle_errors
def init(ctx: GogoContext, force: bool) -> None:
    """Initialize a new gogo-meta repository in the current directory.

    Writes a .gogo manifest with no projects and the default ignore list.
    """
    presenter = ctx.presenter
    meta_path = ctx.cwd / META_FILE

    if meta_path.exists():
        if not force:
            raise click.ClickException(f"{META_FILE} file already exists. Use --force to overwrite.")
        presenter.warning(f"Overwriting existing {META_FILE} file")

    write_meta_config(ctx.cwd, create_default_config())

    presenter.success(f"Created {META_FILE} file in {ctx.cwd}")
    presenter.info("Add projects with: gogo project import <folder> <repo-url>")
