"""
Dependency injection helpers for gogo.

Lazy resolution with a fallback, so services work the same whether or not
the CLI has bootstrapped the container (library use, unit tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from .interfaces.logger import ILogger

T = TypeVar("T")


def resolve_or_default(
    interface: type[T],
    default_factory: Callable[[], T],
) -> T:
    """Resolve a service from the container or create a default.

    Args:
        interface: The interface type to resolve
        default_factory: Callable that creates the default implementation

    Returns:
        Resolved service instance or default

    Example:
        >>> from gogo.core.interfaces.logger import ILogger
        >>> from gogo.services.logging import NullLogger
        >>> logger = resolve_or_default(ILogger, NullLogger)
    """
    from .container import get_container

    instance = get_container().try_resolve(interface)
    if instance is not None:
        return instance
    return default_factory()


def get_logger() -> ILogger:
    """Return the registered logger, or a NullLogger when none is configured."""
    from ..services.logging import NullLogger
    from .interfaces.logger import ILogger

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
