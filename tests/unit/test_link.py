"""
Unit tests for linking local npm packages.
"""

import json
from unittest.mock import MagicMock

import pytest

from gogo.core.interfaces.presenter import IPresenter
from gogo.core.models import ExecutionOutcome
from gogo.services.execution.process_runner import ProcessRunner
from gogo.services.link import (
    create_symlink,
    find_local_packages,
    link_globally,
    link_siblings,
    read_package_json,
)


def _package(root, project, **manifest):
    directory = root / project
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "package.json").write_text(json.dumps(manifest))
    return directory


@pytest.fixture
def presenter():
    return MagicMock(spec=IPresenter)


class TestReadPackageJson:
    """Tests for read_package_json."""

    def test_missing(self, tmp_path):
        assert read_package_json(tmp_path) is None

    def test_invalid_json(self, tmp_path):
        (tmp_path / "package.json").write_text("{oops")
        assert read_package_json(tmp_path) is None

    def test_not_an_object(self, tmp_path):
        (tmp_path / "package.json").write_text("[]")
        assert read_package_json(tmp_path) is None


class TestFindLocalPackages:
    """Tests for find_local_packages."""

    def test_keyed_by_name_in_project_order(self, tmp_path):
        _package(tmp_path, "web", name="@acme/web")
        _package(tmp_path, "libs/shared", name="@acme/shared")
        (tmp_path / "docs").mkdir()
        _package(tmp_path, "tools", version="1.0.0")

        packages = find_local_packages(tmp_path, ["web", "docs", "libs/shared", "tools"])

        assert list(packages) == ["@acme/web", "@acme/shared"]
        assert packages["@acme/shared"].directory == tmp_path / "libs/shared"

    def test_dependency_names(self, tmp_path):
        _package(
            tmp_path,
            "web",
            name="web",
            dependencies={"react": "^18", "@acme/shared": "*"},
            devDependencies={"@acme/shared": "*", "jest": "^29"},
        )
        package = find_local_packages(tmp_path, ["web"])["web"]
        assert package.dependency_names() == ["react", "@acme/shared", "jest"]


class TestCreateSymlink:
    """Tests for create_symlink."""

    def test_creates_scope_directory(self, tmp_path):
        target = tmp_path / "shared"
        target.mkdir()
        link = tmp_path / "web" / "node_modules" / "@acme" / "shared"

        create_symlink(target, link)

        assert link.is_symlink()
        assert link.resolve() == target.resolve()

    def test_replaces_existing_link(self, tmp_path):
        old, new = tmp_path / "old", tmp_path / "new"
        old.mkdir()
        new.mkdir()
        link = tmp_path / "node_modules" / "pkg"
        create_symlink(old, link)

        create_symlink(new, link)

        assert link.resolve() == new.resolve()

    def test_real_directory_is_not_replaced(self, tmp_path):
        target = tmp_path / "shared"
        target.mkdir()
        link = tmp_path / "node_modules" / "shared"
        link.mkdir(parents=True)

        with pytest.raises(OSError):
            create_symlink(target, link)
        assert not link.is_symlink()


class TestLinkSiblings:
    """Tests for link_siblings."""

    def test_links_only_local_dependencies(self, tmp_path, presenter):
        _package(tmp_path, "api", name="api", dependencies={"shared": "*", "express": "^4"})
        _package(tmp_path, "web", name="web", devDependencies={"shared": "*"})
        shared = _package(tmp_path, "libs/shared", name="shared")
        packages = find_local_packages(tmp_path, ["api", "web", "libs/shared"])

        result = link_siblings(packages, presenter)

        assert result.linked == 2
        assert result.failed == 0
        for consumer in ("api", "web"):
            link = tmp_path / consumer / "node_modules" / "shared"
            assert link.is_symlink()
            assert link.resolve() == shared.resolve()
        assert not (tmp_path / "api" / "node_modules" / "express").exists()
        presenter.project_status.assert_any_call("api", True, "linked shared")

    def test_failure_reported_and_counted(self, tmp_path, presenter):
        _package(tmp_path, "api", name="api", dependencies={"shared": "*"})
        _package(tmp_path, "shared", name="shared")
        (tmp_path / "api" / "node_modules" / "shared").mkdir(parents=True)
        packages = find_local_packages(tmp_path, ["api", "shared"])

        result = link_siblings(packages, presenter)

        assert result.failed == 1
        assert result.linked == 0
        presenter.error.assert_called_once()


class TestLinkGlobally:
    """Tests for link_globally."""

    def test_runs_npm_link_in_each_package(self, tmp_path, presenter):
        _package(tmp_path, "api", name="api")
        _package(tmp_path, "web", name="web")
        runner = MagicMock(spec=ProcessRunner)
        runner.run.side_effect = [ExecutionOutcome.ok(), ExecutionOutcome.failure("EACCES")]

        result = link_globally(find_local_packages(tmp_path, ["api", "web"]), runner, presenter)

        assert (result.linked, result.failed) == (1, 1)
        assert [c.args for c in runner.run.call_args_list] == [
            ("npm link", tmp_path / "api"),
            ("npm link", tmp_path / "web"),
        ]
        presenter.project_status.assert_any_call("web", False, "EACCES")
