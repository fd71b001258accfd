"""
Shared pytest fixtures for gogo tests.

- reset_container: Clears the DI container and bootstrap state between tests
- meta_repo: A temporary meta repository with three child project directories
- write_meta: Helper to (re)write the .gogo manifest of a directory
- gogo_cli: Helper to invoke the gogo CLI in-process from the meta repository
"""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from gogo.core.bootstrap import reset

PROJECTS = {
    "api": "git@github.com:acme/api.git",
    "web": "git@github.com:acme/web.git",
    "libs/shared": "https://github.com/acme/shared.git",
}


@pytest.fixture(autouse=True)
def reset_container():
    """Start and finish every test with an empty container."""
    reset()
    yield
    reset()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path: Path):
    """Keep user-level settings and environment overrides out of tests."""
    for var in (
        "GOGO_EXECUTION__CONCURRENCY",
        "GOGO_EXECUTION__TIMEOUT",
        "GOGO_OUTPUT__COLOR",
        "GOGO_OUTPUT__DURATIONS",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


def _write_meta(directory: Path, data: dict) -> Path:
    path = directory / ".gogo"
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


@pytest.fixture
def write_meta() -> Callable[[Path, dict], Path]:
    """Provide a helper that writes ``data`` as the .gogo file of a directory."""
    return _write_meta


@pytest.fixture
def meta_repo(tmp_path: Path) -> Path:
    """
    Create a meta repository with child directories.

    Sets up:
    - .gogo listing api, web and libs/shared
    - an empty directory for every project

    Returns:
        Path to the meta repository root
    """
    root = tmp_path / "meta"
    root.mkdir()
    _write_meta(root, {"projects": dict(PROJECTS), "ignore": [".git", "node_modules"]})
    for project in PROJECTS:
        (root / project).mkdir(parents=True)
    return root


@pytest.fixture
def gogo_cli(meta_repo: Path, monkeypatch) -> Callable[..., Result]:
    """
    Provide a helper that runs gogo CLI commands from the meta repository.

    Returns:
        A callable taking CLI arguments and returning the click Result
    """
    from gogo.cli import cli

    monkeypatch.chdir(meta_repo)
    runner = CliRunner()

    def run_gogo(*args: str) -> Result:
        reset()
        return runner.invoke(cli, list(args))

    return run_gogo
