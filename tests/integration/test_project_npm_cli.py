"""
Integration tests for ``gogo project`` and ``gogo npm``.
"""

import json
import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

needs_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
posix_only = pytest.mark.skipif(sys.platform == "win32", reason="requires a POSIX shell")


def _manifest(meta_repo: Path) -> dict:
    return json.loads((meta_repo / ".gogo").read_text())


def _gitignore(meta_repo: Path) -> list[str]:
    path = meta_repo / ".gitignore"
    return path.read_text().splitlines() if path.exists() else []


class TestProjectImport:
    """Tests for ``gogo project import``."""

    def test_register_without_cloning(self, gogo_cli, meta_repo):
        result = gogo_cli("project", "import", "tools/cli", "git@github.com:acme/cli.git", "--no-clone")

        assert result.exit_code == 0, result.output
        assert _manifest(meta_repo)["projects"]["tools/cli"] == "git@github.com:acme/cli.git"
        assert list(_manifest(meta_repo)["projects"])[-1] == "tools/cli"
        assert "tools/cli" in _gitignore(meta_repo)
        assert 'Run "gogo git update" to clone missing projects' in result.output
        assert not (meta_repo / "tools" / "cli").exists()

    def test_gitignore_entry_not_duplicated(self, gogo_cli, meta_repo):
        (meta_repo / ".gitignore").write_text("tools/cli\n")
        gogo_cli("project", "import", "tools/cli", "https://example.com/cli.git", "--no-clone")
        assert _gitignore(meta_repo).count("tools/cli") == 1

    def test_url_required_for_new_project(self, gogo_cli, meta_repo):
        result = gogo_cli("project", "import", "newproj")
        assert result.exit_code == 1
        assert "URL is required" in result.output

    def test_existing_directory_without_remote(self, gogo_cli, meta_repo):
        (meta_repo / "local").mkdir()
        result = gogo_cli("project", "import", "local")

        assert result.exit_code == 1
        assert "has no remote" in result.output
        assert "local" not in _manifest(meta_repo)["projects"]

    def test_existing_directory_with_url(self, gogo_cli, meta_repo):
        (meta_repo / "local").mkdir()
        result = gogo_cli("project", "import", "local", "https://example.com/local.git")

        assert result.exit_code == 0, result.output
        assert _manifest(meta_repo)["projects"]["local"] == "https://example.com/local.git"
        assert 'Imported existing project "local"' in result.output

    def test_rejects_path_escaping_meta_repo(self, gogo_cli, meta_repo):
        result = gogo_cli("project", "import", "../outside", "https://example.com/x.git", "--no-clone")
        assert result.exit_code == 1
        assert "../outside" not in _manifest(meta_repo)["projects"]

    @needs_git
    def test_clone_from_local_remote(self, gogo_cli, meta_repo, tmp_path, monkeypatch):
        for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
            monkeypatch.setenv(var, "gogo tests")
        for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
            monkeypatch.setenv(var, "tests@example.com")
        source = tmp_path / "src"
        source.mkdir()
        (source / "README.md").write_text("# src\n")
        for args in (["init", "-q"], ["add", "."], ["commit", "-q", "-m", "initial"]):
            subprocess.run(["git", *args], cwd=source, check=True, capture_output=True)

        result = gogo_cli("project", "import", "libs/src", str(source))

        assert result.exit_code == 0, result.output
        assert (meta_repo / "libs" / "src" / "README.md").exists()
        assert _manifest(meta_repo)["projects"]["libs/src"] == str(source)


@needs_git
class TestProjectCreate:
    """Tests for ``gogo project create``."""

    def test_creates_repository(self, gogo_cli, meta_repo):
        url = "git@github.com:acme/new.git"
        result = gogo_cli("project", "create", "services/new", url)

        assert result.exit_code == 0, result.output
        project_dir = meta_repo / "services" / "new"
        assert (project_dir / ".git").is_dir()
        remote = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            cwd=project_dir,
            capture_output=True,
            text=True,
            check=True,
        )
        assert remote.stdout.strip() == url
        assert _manifest(meta_repo)["projects"]["services/new"] == url
        assert "services/new" in _gitignore(meta_repo)

    def test_existing_directory(self, gogo_cli, meta_repo):
        result = gogo_cli("project", "create", "api", "git@github.com:acme/api.git")
        assert result.exit_code == 1
        assert 'Directory "api" already exists' in result.output


@pytest.fixture
def fake_npm(tmp_path, monkeypatch):
    """Put an ``npm`` on PATH that echoes its arguments."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    npm = bin_dir / "npm"
    npm.write_text('#!/bin/sh\necho "npm $*"\n')
    npm.chmod(0o755)
    monkeypatch.setenv("PATH", f"{bin_dir}:{os.environ.get('PATH', '')}")
    return npm


@posix_only
class TestNpm:
    """Tests for ``gogo npm``."""

    def test_install(self, gogo_cli, fake_npm):
        result = gogo_cli("npm", "install", "--json")
        report = json.loads(result.stdout)
        assert [r["outcome"]["stdout"] for r in report["results"]] == ["npm install"] * 3

    def test_run_script(self, gogo_cli, fake_npm):
        result = gogo_cli("npm", "run", "build", "--include-only", "api")
        assert result.exit_code == 0
        assert "npm run build" in result.output

    def test_run_if_present_skips_missing_script(self, gogo_cli, meta_repo, fake_npm):
        (meta_repo / "api" / "package.json").write_text(json.dumps({"scripts": {"build": "tsc"}}))
        (meta_repo / "web" / "package.json").write_text(json.dumps({"scripts": {"test": "jest"}}))

        result = gogo_cli("npm", "run", "build", "--if-present", "--json")

        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        stdout = [r["outcome"]["stdout"] for r in report["results"]]
        assert stdout == [
            "npm run build",
            'Script "build" not found, skipping',
            'Script "build" not found, skipping',
        ]
        assert report["summary"]["succeeded"] == 3

    def test_link_all_symlinks_local_packages(self, gogo_cli, meta_repo):
        (meta_repo / "api" / "package.json").write_text(
            json.dumps({"name": "@acme/api", "dependencies": {"@acme/shared": "*"}})
        )
        (meta_repo / "web" / "package.json").write_text(
            json.dumps({"name": "@acme/web", "devDependencies": {"@acme/shared": "*", "@acme/api": "*"}})
        )
        (meta_repo / "libs" / "shared" / "package.json").write_text(json.dumps({"name": "@acme/shared"}))

        result = gogo_cli("npm", "link", "--all")

        assert result.exit_code == 0, result.output
        assert "Found 3 linkable projects" in result.output
        assert "Created 3 links" in result.output
        shared_link = meta_repo / "api" / "node_modules" / "@acme" / "shared"
        assert shared_link.is_symlink()
        assert shared_link.resolve() == (meta_repo / "libs" / "shared").resolve()
        assert (meta_repo / "web" / "node_modules" / "@acme" / "api").resolve() == (meta_repo / "api").resolve()

    def test_link_all_honors_filters(self, gogo_cli, meta_repo):
        (meta_repo / "api" / "package.json").write_text(
            json.dumps({"name": "api", "dependencies": {"shared": "*"}})
        )
        (meta_repo / "libs" / "shared" / "package.json").write_text(json.dumps({"name": "shared"}))

        result = gogo_cli("npm", "link", "--all", "--exclude-only", "shared")

        assert result.exit_code == 0
        assert "Created 0 links" in result.output
        assert not (meta_repo / "api" / "node_modules").exists()

    def test_link_globally(self, gogo_cli, meta_repo, fake_npm):
        (meta_repo / "web" / "package.json").write_text(json.dumps({"name": "web"}))

        result = gogo_cli("npm", "link")

        assert result.exit_code == 0, result.output
        assert "Creating global link for web..." in result.output
        assert "Created 1 links" in result.output

    def test_link_without_packages(self, gogo_cli):
        result = gogo_cli("npm", "link", "--all")
        assert result.exit_code == 0
        assert "No projects with package.json found" in result.output
