"""
Configuration models.

Provides Pydantic models for the .gogo manifest, the .looprc ignore file
and the runtime settings sections.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import GogoBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_IGNORE = [".git", "node_modules", ".vagrant", ".vscode"]


class ConfigBaseModel(GogoBaseModel):
    """Base model for config sections with relaxed strict mode for JSON/TOML loading."""

    model_config = ConfigDict(
        strict=False,
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


def validate_project_path(path: str) -> str:
    """Check that a manifest key is a usable relative directory path.

    Raises:
        ValueError: If the path is empty, absolute, contains a NUL byte, or has
            empty or ``..`` segments
    """
    if not path or not path.strip():
        raise ValueError("project path must not be empty")
    if "\x00" in path:
        raise ValueError(f"project path contains a NUL byte: {path!r}")
    if path.startswith(("/", "\\")) or (len(path) > 1 and path[1] == ":"):
        raise ValueError(f"project path must be relative: {path!r}")
    segments = path.replace("\\", "/").split("/")
    if any(seg in ("", "..") for seg in segments):
        raise ValueError(f"project path has an invalid segment: {path!r}")
    return path


# =============================================================================
# Manifest (.gogo)
# =============================================================================


class CommandConfig(ConfigBaseModel):
    """Object form of a named command in the manifest ``commands`` table."""

    cmd: Annotated[str, Field(min_length=1)]
    description: str | None = None
    parallel: bool | None = None
    concurrency: Annotated[int, Field(gt=0)] | None = None
    include_only: list[str] | None = Field(default=None, alias="includeOnly")
    exclude_only: list[str] | None = Field(default=None, alias="excludeOnly")
    include_pattern: str | None = Field(default=None, alias="includePattern")
    exclude_pattern: str | None = Field(default=None, alias="excludePattern")


class MetaConfig(ConfigBaseModel):
    """Parsed .gogo manifest.

    ``projects`` preserves declaration order, which is the default
    execution order for every command.
    """

    projects: dict[str, str] = Field(default_factory=dict)
    ignore: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE))
    commands: dict[str, str | CommandConfig] | None = None

    @field_validator("projects")
    @classmethod
    def validate_projects(cls, v: dict[str, str]) -> dict[str, str]:
        """Reject project keys that are not relative directory paths."""
        for path in v:
            validate_project_path(path)
        return v


class LoopRc(ConfigBaseModel):
    """Parsed .looprc file: extra directories to skip in every loop."""

    ignore: list[str] = Field(default_factory=list)


# =============================================================================
# Runtime settings sections
# =============================================================================


class ExecutionConfig(ConfigBaseModel):
    """Execution defaults used when the command line does not override them."""

    concurrency: Annotated[int, Field(gt=0)] = 4
    timeout: Annotated[float, Field(gt=0)] = 300.0
    kill_grace: Annotated[float, Field(ge=0)] = 5.0


class OutputConfig(ConfigBaseModel):
    """Output configuration section."""

    color: bool = True
    durations: bool = False


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.lower() if isinstance(v, str) else v
