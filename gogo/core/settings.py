"""
Runtime settings for gogo.

Settings control how commands run and report (concurrency, timeouts, colors,
logging, extra child environment). They are separate from the .gogo
manifest, which lists projects and lives in gogo.config.

Sources, highest priority first: explicit values, ``GOGO_*`` environment
variables (``GOGO_EXECUTION__TIMEOUT=60``), the nearest ``.gogorc.toml`` or
``[tool.gogo]`` table of a ``pyproject.toml``, then model defaults.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .models.config import ExecutionConfig, LoggingConfig, OutputConfig

SETTINGS_FILE = ".gogorc.toml"
PYPROJECT_FILE = "pyproject.toml"

# TOML table for the GogoSettings() call currently being made by load_settings()
_file_table: ContextVar[dict[str, Any]] = ContextVar("gogo_settings_table", default={})


def _log():
    from .di import get_logger

    return get_logger()


def _read_toml(path: Path) -> dict[str, Any] | None:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        _log().warning("Ignoring settings file %s: %s", path, e)
        return None


def _gogo_table(pyproject: dict[str, Any]) -> dict[str, Any] | None:
    table = pyproject.get("tool", {}).get("gogo")
    return table if isinstance(table, dict) else None


def find_settings_file(start_dir: str | Path | None = None) -> Path | None:
    """
    Nearest .gogorc.toml, or pyproject.toml with a [tool.gogo] table,
    walking up from ``start_dir`` (default: cwd).
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for directory in (start, *start.parents):
        rc = directory / SETTINGS_FILE
        if rc.is_file():
            return rc
        pyproject = directory / PYPROJECT_FILE
        if pyproject.is_file():
            data = _read_toml(pyproject)
            if data is not None and _gogo_table(data) is not None:
                return pyproject
    return None


def read_settings_table(path: Path) -> dict[str, Any]:
    """The gogo settings held by ``path``; empty if it is unreadable."""
    data = _read_toml(path)
    if data is None:
        return {}
    if path.name == PYPROJECT_FILE:
        return _gogo_table(data) or {}
    return data


class TomlTableSource(PydanticBaseSettingsSource):
    """Settings source serving an already-parsed TOML table."""

    def __init__(self, settings_cls: type[BaseSettings], table: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._table = table

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._table.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._table)


class GogoSettings(BaseSettings):
    """gogo runtime settings."""

    model_config = {
        "env_prefix": "GOGO_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    execution: ExecutionConfig = ExecutionConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    env: dict[str, str] = {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlTableSource(settings_cls, _file_table.get()),
        )


def load_settings(
    config_path: Path | None = None,
    start_dir: str | None = None,
    **overrides: Any,
) -> GogoSettings:
    """Load settings, reading ``config_path`` or the nearest settings file.

    Args:
        config_path: Explicit TOML settings file
        start_dir: Where to start looking when ``config_path`` is not given
        **overrides: Values that beat every other source

    Raises:
        pydantic.ValidationError: If a source holds an invalid value
    """
    path = config_path or find_settings_file(start_dir)
    table = read_settings_table(path) if path is not None else {}
    if path is not None:
        _log().debug("Settings file: %s", path)

    token = _file_table.set(table)
    try:
        return GogoSettings(**overrides)
    finally:
        _file_table.reset(token)
