"""
Native Click implementation of the project command group.

Usage: gogo project create <folder> <url>
       gogo project import <folder> [url] [--no-clone]
"""

import click

from ...services.project import ProjectService
from ..context import GogoContext
from ..decorators import handle_errors, require_meta


@click.group("project")
def project() -> None:
    """Project management commands."""
    pass


def _service(ctx: GogoContext) -> ProjectService:
    return ProjectService(ctx.meta_dir or ctx.cwd, ctx.presenter, runner=ctx.create_runner())


@project.command("create")
@click.argument("folder")
@click.argument("url")
@click.pass_obj
@handle_errors
@require_meta
def create(ctx: GogoContext, folder: str, url: str) -> None:
    """Create and initialize a new child repository."""
    _service(ctx).create(folder, url)


@project.command("import")
@click.argument("folder")
@click.argument("url", required=False)
@click.option("--clone/--no-clone", default=True, help="Clone the repository (default) or only register it")
@click.pass_obj
@handle_errors
@require_meta
def import_(ctx: GogoContext, folder: str, url: str | None, clone: bool) -> None:
    """Import an existing repository as a child project."""
    _service(ctx).import_(folder, url, clone=clone)
