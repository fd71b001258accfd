"""
Linking of sibling npm packages inside a meta repository.

``gogo npm link`` either registers every project's package globally with
``npm link``, or (``--all``) symlinks each project that another project
depends on straight into that project's node_modules.
"""

from __future__ import annotations

import json
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.di import get_logger
from ..core.interfaces.presenter import IPresenter
from .commands.npm import PACKAGE_JSON
from .execution.process_runner import ProcessRunner


@dataclass(frozen=True)
class LocalPackage:
    """A project whose package.json has a name."""

    name: str
    project: str
    directory: Path
    manifest: dict[str, Any]

    def dependency_names(self) -> list[str]:
        """Names from dependencies then devDependencies, without duplicates."""
        names: dict[str, None] = {}
        for section in ("dependencies", "devDependencies"):
            deps = self.manifest.get(section)
            if isinstance(deps, dict):
                names.update(dict.fromkeys(deps))
        return list(names)


@dataclass
class LinkResult:
    linked: int = 0
    failed: int = 0


def read_package_json(directory: Path) -> dict[str, Any] | None:
    """Parsed package.json of ``directory``; None if missing, unreadable or not an object."""
    path = directory / PACKAGE_JSON
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError) as e:
        get_logger().warning("Skipping unreadable %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None


def find_local_packages(meta_dir: Path, paths: Sequence[str]) -> dict[str, LocalPackage]:
    """Named packages among ``paths``, keyed by package name, in project order."""
    packages: dict[str, LocalPackage] = {}
    for project in paths:
        directory = meta_dir / project
        manifest = read_package_json(directory)
        name = manifest.get("name") if manifest else None
        if isinstance(name, str) and name:
            packages[name] = LocalPackage(name, project, directory, manifest)
    return packages


def create_symlink(target: Path, link: Path) -> None:
    """
    Point ``link`` at ``target``, replacing an existing link or file.

    Scoped names (``@org/pkg``) get their scope directory created.

    Raises:
        OSError: If ``link`` is a real directory or the link cannot be made
    """
    if link.is_symlink() or link.is_file():
        link.unlink()
    link.parent.mkdir(parents=True, exist_ok=True)
    os.symlink(target, link, target_is_directory=True)


def link_siblings(packages: dict[str, LocalPackage], presenter: IPresenter) -> LinkResult:
    """Symlink every local package into the node_modules of the local packages that depend on it."""
    result = LinkResult()
    for consumer in packages.values():
        for dep in consumer.dependency_names():
            provider = packages.get(dep)
            if provider is None or provider is consumer:
                continue
            link = consumer.directory / "node_modules" / dep
            try:
                create_symlink(provider.directory, link)
            except OSError as e:
                get_logger().debug("Symlink %s -> %s failed: %s", link, provider.directory, e)
                presenter.error(f"Failed to create symlink: {link} -> {provider.directory}")
                result.failed += 1
                continue
            presenter.project_status(consumer.name, True, f"linked {dep}")
            result.linked += 1
    return result


def link_globally(
    packages: dict[str, LocalPackage],
    runner: ProcessRunner,
    presenter: IPresenter,
    timeout: float | None = None,
) -> LinkResult:
    """Run ``npm link`` in every local package, one at a time."""
    result = LinkResult()
    for package in packages.values():
        presenter.info(f"Creating global link for {package.name}...")
        outcome = runner.run("npm link", package.directory, timeout=timeout)
        if outcome.exit_code == 0:
            presenter.project_status(package.name, True, "linked globally")
            result.linked += 1
        else:
            presenter.project_status(package.name, False, outcome.stderr or f"exit {outcome.exit_code}")
            result.failed += 1
    return result
