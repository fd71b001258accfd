"""
Adding child projects to a meta repository.

ProjectService.create() starts a brand-new repository; import_() registers
an existing directory or clones a remote one. Both record the project in
.gogo and list its directory in the meta repository's .gitignore.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from ..config import add_project, add_to_gitignore, read_meta_config, write_meta_config
from ..core.exceptions import ProjectError
from ..core.interfaces.presenter import IPresenter
from ..core.models.config import validate_project_path
from .clone import clone_into
from .execution.process_runner import ProcessRunner
from .ssh import ensure_ssh_hosts_known


class ProjectService:
    """Creates and imports child projects of one meta repository."""

    def __init__(
        self,
        meta_dir: Path,
        presenter: IPresenter,
        runner: ProcessRunner | None = None,
    ) -> None:
        self.meta_dir = meta_dir
        self._out = presenter
        self._runner = runner or ProcessRunner()

    def _project_dir(self, folder: str) -> Path:
        try:
            validate_project_path(folder)
        except ValueError as e:
            raise ProjectError(str(e), project=folder, cause=e) from e
        return self.meta_dir / folder

    def _register(self, folder: str, url: str) -> None:
        config = read_meta_config(self.meta_dir)
        write_meta_config(self.meta_dir, add_project(config, folder, url))

    def _ignore(self, folder: str) -> None:
        if add_to_gitignore(self.meta_dir, folder):
            self._out.info(f"Added {folder} to .gitignore")

    def _git(self, command: str, cwd: Path, failure: str, folder: str) -> str:
        outcome = self._runner.run(command, cwd)
        if outcome.exit_code != 0:
            raise ProjectError(f"{failure}: {outcome.stderr}", project=folder)
        return outcome.stdout

    def remote_url(self, directory: Path) -> str | None:
        """URL of the ``origin`` remote of ``directory``, if it has one."""
        outcome = self._runner.run("git remote get-url origin", directory)
        if outcome.exit_code == 0 and outcome.stdout.strip():
            return outcome.stdout.strip()
        return None

    def create(self, folder: str, url: str) -> None:
        """
        Create ``folder``, git-init it with ``url`` as origin, and register it.

        Raises:
            ProjectError: If the directory exists or a git step fails
        """
        project_dir = self._project_dir(folder)
        if project_dir.exists():
            raise ProjectError(f'Directory "{folder}" already exists', project=folder)

        self._out.info(f"Creating new project: {folder}")
        project_dir.mkdir(parents=True)

        self._git("git init", project_dir, "Failed to initialize git repository", folder)
        self._git(
            f"git remote add origin {shlex.quote(url)}",
            project_dir,
            "Failed to add remote",
            folder,
        )

        self._register(folder, url)
        self._ignore(folder)

        self._out.success(f'Created project "{folder}"')
        self._out.info(f"Repository initialized with remote: {url}")

    def import_(self, folder: str, url: str | None = None, clone: bool = True) -> None:
        """
        Register an existing directory, or clone ``url`` into ``folder``.

        Raises:
            ProjectError: If no URL can be determined or the clone fails
        """
        project_dir = self._project_dir(folder)

        if project_dir.exists():
            existing = self.remote_url(project_dir)
            if existing is None and not url:
                raise ProjectError(
                    f'Directory "{folder}" exists but has no remote. Provide a URL to set one.',
                    project=folder,
                )
            if url and existing and url != existing:
                self._out.warning("Existing remote URL differs from provided URL")
                self._out.info(f"Existing: {existing}")
                self._out.info(f"Provided: {url}")

            final_url = url or existing or ""
            self._register(folder, final_url)
            self._out.success(f'Imported existing project "{folder}"')
            self._out.info(f"Repository URL: {final_url}")
            self._ignore(folder)
            return

        if not url:
            raise ProjectError("URL is required when importing a non-existent project", project=folder)

        if not clone:
            self._register(folder, url)
            self._out.success(f'Registered project "{folder}" (not cloned)')
            self._ignore(folder)
            self._out.info('Run "gogo git update" to clone missing projects')
            return

        ensure_ssh_hosts_known([url], presenter=self._out)
        self._out.info(f"Cloning {url} into {folder}...")
        outcome = clone_into(url, project_dir, self._runner)
        if outcome.exit_code != 0:
            raise ProjectError(f"Failed to clone repository: {outcome.stderr}", project=folder)

        self._register(folder, url)
        self._out.success(f'Imported project "{folder}"')
        self._ignore(folder)
