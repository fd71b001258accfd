"""
Shared click options for looping commands.

Every looping command takes the same filter flags; parallel-capable
commands add --parallel/--concurrency.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

F = TypeVar("F", bound=Callable[..., Any])


def filter_options(f: F) -> F:
    """Add --include-only, --exclude-only, --include-pattern and --exclude-pattern."""
    decorators = [
        click.option(
            "--include-only",
            metavar="DIRS",
            default=None,
            help="Only include specified directories (comma-separated)",
        ),
        click.option(
            "--exclude-only",
            metavar="DIRS",
            default=None,
            help="Exclude specified directories (comma-separated)",
        ),
        click.option(
            "--include-pattern",
            metavar="REGEX",
            default=None,
            help="Include directories matching regex pattern",
        ),
        click.option(
            "--exclude-pattern",
            metavar="REGEX",
            default=None,
            help="Exclude directories matching regex pattern",
        ),
    ]
    for decorator in reversed(decorators):
        f = decorator(f)
    return f


def parallel_options(f: F) -> F:
    """Add --parallel and --concurrency."""
    f = click.option(
        "--concurrency",
        type=click.IntRange(min=1),
        default=None,
        help="Max parallel processes (default: 4)",
    )(f)
    f = click.option(
        "--parallel/--no-parallel",
        "parallel",
        default=None,
        help="Execute commands in parallel",
    )(f)
    return f


def output_options(f: F) -> F:
    """Add --timeout and --json."""
    f = click.option(
        "--json",
        "json_output",
        is_flag=True,
        default=False,
        help="Print the run report as JSON",
    )(f)
    f = click.option(
        "--timeout",
        type=click.FloatRange(min=0, min_open=True),
        default=None,
        metavar="SECONDS",
        help="Per-project timeout (default: 300)",
    )(f)
    return f


def loop_options(parallel: bool = True) -> Callable[[F], F]:
    """All looping flags; ``parallel=False`` for commands that must run sequentially."""

    def decorator(f: F) -> F:
        f = output_options(f)
        if parallel:
            f = parallel_options(f)
        return filter_options(f)

    return decorator
