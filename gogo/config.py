"""Manifest (.gogo) and .looprc loading, editing and named-command lookup."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from .core.di import get_logger
from .core.exceptions import ConfigFileError, ConfigValidationError, MetaNotFoundError
from .core.models.config import DEFAULT_IGNORE, CommandConfig, LoopRc, MetaConfig
from .core.models.execution import FilterSpec

META_FILE = ".gogo"
LOOPRC_FILE = ".looprc"
GITIGNORE_FILE = ".gitignore"


def find_file_up(filename: str, start_dir: str | Path) -> Path | None:
    """
    Find ``filename`` in start_dir or the nearest parent containing it.

    Returns:
        Path to the file, or None if not found.
    """
    start = Path(start_dir).resolve()
    for parent in [start, *list(start.parents)]:
        candidate = parent / filename
        if candidate.is_file():
            return candidate
    return None


def get_meta_dir(cwd: str | Path) -> Path | None:
    """Return the meta repository root (the directory holding .gogo), if any."""
    meta_path = find_file_up(META_FILE, cwd)
    return meta_path.parent if meta_path else None


def read_meta_config(cwd: str | Path) -> MetaConfig:
    """
    Load and validate the nearest .gogo manifest.

    Raises:
        MetaNotFoundError: If no .gogo file exists in cwd or its parents
        ConfigFileError: If the file cannot be read or is not valid JSON
        ConfigValidationError: If the JSON does not match the manifest schema
    """
    meta_path = find_file_up(META_FILE, cwd)
    if meta_path is None:
        raise MetaNotFoundError(
            f"No {META_FILE} file found. Run 'gogo init' to create one, "
            f"or navigate to a directory with a {META_FILE} file."
        )

    try:
        data = json.loads(meta_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigFileError(f"Invalid JSON in {META_FILE} file", file_path=str(meta_path), cause=e) from e
    except OSError as e:
        raise ConfigFileError(f"Failed to read {META_FILE} file", file_path=str(meta_path), cause=e) from e

    try:
        config = MetaConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid {META_FILE} file structure: {e}",
            file_path=str(meta_path),
            cause=e,
        ) from e

    get_logger().debug("Loaded %s with %d projects", meta_path, len(config.projects))
    return config


def write_meta_config(directory: str | Path, config: MetaConfig) -> Path:
    """Write ``config`` as indented JSON to ``directory``/.gogo."""
    meta_path = Path(directory) / META_FILE
    data = config.model_dump(by_alias=True, exclude_none=True)
    meta_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return meta_path


def read_loop_rc(cwd: str | Path) -> LoopRc | None:
    """Load the nearest .looprc, or None when it is missing or invalid."""
    looprc_path = find_file_up(LOOPRC_FILE, cwd)
    if looprc_path is None:
        return None

    try:
        return LoopRc.model_validate(json.loads(looprc_path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        get_logger().warning("Ignoring unreadable %s at %s: %s", LOOPRC_FILE, looprc_path, e)
        return None


def create_default_config() -> MetaConfig:
    return MetaConfig(projects={}, ignore=list(DEFAULT_IGNORE))


def add_project(config: MetaConfig, path: str, url: str) -> MetaConfig:
    """Return a copy of ``config`` with ``path`` mapped to ``url``."""
    projects = dict(config.projects)
    projects[path] = url
    return MetaConfig.model_validate({**config.model_dump(by_alias=True), "projects": projects})


def remove_project(config: MetaConfig, path: str) -> MetaConfig:
    """Return a copy of ``config`` without ``path``."""
    projects = {k: v for k, v in config.projects.items() if k != path}
    return MetaConfig.model_validate({**config.model_dump(by_alias=True), "projects": projects})


def get_project_paths(config: MetaConfig) -> list[str]:
    """Project paths in declaration order."""
    return list(config.projects)


def get_project_url(config: MetaConfig, path: str) -> str | None:
    return config.projects.get(path)


def add_to_gitignore(meta_dir: str | Path, entry: str) -> bool:
    """
    Append ``entry`` to the meta repository's .gitignore.

    Returns:
        True if the entry was added, False if it was already listed
    """
    gitignore = Path(meta_dir) / GITIGNORE_FILE
    existing = gitignore.read_text(encoding="utf-8") if gitignore.exists() else ""
    if entry in (line.strip() for line in existing.splitlines()):
        return False

    prefix = "" if not existing or existing.endswith("\n") else "\n"
    with open(gitignore, "a", encoding="utf-8") as f:
        f.write(f"{prefix}{entry}\n")
    return True


# =============================================================================
# Named commands
# =============================================================================


@dataclass(frozen=True)
class ResolvedCommand:
    """A named command from the manifest, normalized to the object form."""

    name: str
    cmd: str
    description: str | None = None
    parallel: bool | None = None
    concurrency: int | None = None
    include_only: tuple[str, ...] | None = None
    exclude_only: tuple[str, ...] | None = None
    include_pattern: str | None = None
    exclude_pattern: str | None = None

    def filter_spec(self) -> FilterSpec:
        """Default filters of this command.

        Raises:
            FilterPatternError: If a manifest pattern is not a valid regex
        """
        from .services.execution.filter import create_filter_spec

        return create_filter_spec(
            include_only=self.include_only,
            exclude_only=self.exclude_only,
            include_pattern=self.include_pattern,
            exclude_pattern=self.exclude_pattern,
        )


def _resolve(name: str, entry: str | CommandConfig) -> ResolvedCommand:
    if isinstance(entry, str):
        return ResolvedCommand(name=name, cmd=entry)
    return ResolvedCommand(
        name=name,
        cmd=entry.cmd,
        description=entry.description,
        parallel=entry.parallel,
        concurrency=entry.concurrency,
        include_only=tuple(entry.include_only) if entry.include_only is not None else None,
        exclude_only=tuple(entry.exclude_only) if entry.exclude_only is not None else None,
        include_pattern=entry.include_pattern,
        exclude_pattern=entry.exclude_pattern,
    )


def get_command(config: MetaConfig, name: str) -> ResolvedCommand | None:
    """Look up a named command, or None if the manifest does not define it."""
    entry = (config.commands or {}).get(name)
    if entry is None:
        return None
    return _resolve(name, entry)


def list_commands(config: MetaConfig) -> list[ResolvedCommand]:
    """All named commands in declaration order."""
    return [_resolve(name, entry) for name, entry in (config.commands or {}).items()]
