"""
Application bootstrap for gogo.

Registers the logger and presenter in the DI container. Called once by the
CLI before any command runs.
"""

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.presenter import IPresenter
from .settings import GogoSettings

_initialized = False


def bootstrap(settings: GogoSettings, verbose: bool = False) -> ServiceContainer:
    """
    Bootstrap the gogo application.

    Args:
        settings: Loaded runtime settings
        verbose: Force debug logging to stderr

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    from ..presenters.console import ConsolePresenter
    from ..services.logging import GogoLogger

    container.register_singleton(
        IPresenter,  # type: ignore[type-abstract]
        implementation=ConsolePresenter(
            use_color=settings.output.color,
            show_durations=settings.output.durations,
        ),
    )

    def create_logger() -> ILogger:
        return GogoLogger(
            level="debug" if verbose else settings.logging.level,
            console_enabled=verbose or settings.logging.console,
            file_enabled=settings.logging.file,
        )

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]
    container.register_singleton(GogoSettings, implementation=settings)

    _initialized = True
    return container


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
