"""
Click context extension for gogo CLI.

Provides GogoContext dataclass that holds gogo-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.interfaces.presenter import IPresenter
    from ..core.models.config import MetaConfig
    from ..core.settings import GogoSettings
    from ..services.execution.process_runner import ProcessRunner


@dataclass
class GogoContext:
    """Extended context passed through Click command chain.

    Created once at CLI startup and handed to commands via Click's ctx.obj.

    Attributes:
        cwd: Current working directory
        settings: Loaded runtime settings
        verbose: Whether --verbose was given
        is_interactive: Whether stdin is a TTY
        meta_dir: Meta repository root (None outside a meta repository)
    """

    cwd: Path
    settings: GogoSettings
    verbose: bool = False
    is_interactive: bool = False
    meta_dir: Path | None = field(default=None)

    @classmethod
    def create(cls, cwd: Path | None = None, verbose: bool = False) -> GogoContext:
        """Create a GogoContext for the current environment.

        Loads settings (walking up from cwd) and bootstraps the container.

        Args:
            cwd: Working directory override (defaults to Path.cwd())
            verbose: Force debug logging to stderr

        Returns:
            Configured GogoContext instance
        """
        from ..config import get_meta_dir
        from ..core.bootstrap import bootstrap
        from ..core.settings import load_settings

        if cwd is None:
            cwd = Path.cwd()

        settings = load_settings(start_dir=cwd)
        bootstrap(settings, verbose=verbose)

        return cls(
            cwd=cwd,
            settings=settings,
            verbose=verbose,
            is_interactive=sys.stdin.isatty(),
            meta_dir=get_meta_dir(cwd),
        )

    @property
    def is_initialized(self) -> bool:
        """Check if cwd is inside a meta repository (a .gogo file exists)."""
        return self.meta_dir is not None

    def load_meta(self) -> MetaConfig:
        """Read the manifest of the enclosing meta repository.

        Raises:
            MetaNotFoundError, ConfigFileError, ConfigValidationError
        """
        from ..config import read_meta_config

        return read_meta_config(self.meta_dir or self.cwd)

    @property
    def presenter(self) -> IPresenter:
        from ..core.di import resolve_or_default
        from ..core.interfaces.presenter import IPresenter
        from ..presenters.console import ConsolePresenter

        return resolve_or_default(
            IPresenter,  # type: ignore[type-abstract]
            lambda: ConsolePresenter(
                use_color=self.settings.output.color,
                show_durations=self.settings.output.durations,
            ),
        )

    def create_runner(self) -> ProcessRunner:
        """ProcessRunner configured from the execution and env settings."""
        from ..services.execution.process_runner import ProcessRunner

        return ProcessRunner(
            timeout=self.settings.execution.timeout,
            kill_grace=self.settings.execution.kill_grace,
            extra_env=self.settings.env,
        )
