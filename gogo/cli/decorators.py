"""
Click decorators for gogo CLI commands.

- require_meta: Ensures the command runs inside a meta repository
- handle_errors: Turns GogoException into click.ClickException
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import click

from ..core.exceptions import GogoException

if TYPE_CHECKING:
    from .context import GogoContext

F = TypeVar("F", bound=Callable[..., Any])

NOT_INITIALIZED_MESSAGE = 'Not in a gogo-meta repository. Run "gogo init" first.'


def require_meta(f: F) -> F:
    """Decorator to require a .gogo manifest in cwd or a parent.

    Usage:
        @click.command()
        @click.pass_obj
        @require_meta
        def status(ctx: GogoContext):
            ...

    Note:
        This decorator should be applied AFTER @click.pass_obj so that
        the GogoContext is available.
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        ctx_maybe: Any = args[0] if args else kwargs.get("ctx")

        if ctx_maybe is None:
            raise click.ClickException(
                "Internal error: GogoContext not available. "
                "Ensure @click.pass_obj is applied before @require_meta."
            )
        ctx: GogoContext = ctx_maybe

        if not ctx.is_initialized:
            raise click.ClickException(NOT_INITIALIZED_MESSAGE)

        return f(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def handle_errors(f: F) -> F:
    """Decorator reporting gogo errors as click errors (exit status 1).

    Configuration problems, bad arguments and project errors are raised as
    GogoException subclasses by the services; the CLI shows their message
    and exits instead of printing a traceback.
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except GogoException as e:
            from ..core.di import get_logger

            get_logger().debug("Command failed: %r", e)
            exc = click.ClickException(e.message)
            exc.exit_code = e.exit_code
            raise exc from e

    return wrapper  # type: ignore[return-value]
