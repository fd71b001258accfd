"""
Unit tests for git and npm command builders.

Checks the command lines produced for each flag combination, quoting of
user-supplied values, and which commands are forced to run sequentially.
"""

import json
from unittest.mock import MagicMock

import pytest

from gogo.core.exceptions import CommandArgumentError
from gogo.core.models import ExecutionOutcome
from gogo.services.commands import git, npm
from gogo.services.execution.process_runner import ProcessRunner


class TestGitBuilders:
    """Tests for git command lines."""

    def test_status(self):
        planned = git.status()
        assert planned.command == "git status"
        assert planned.sequential is False

    def test_fetch_flags(self):
        assert git.fetch().command == "git fetch"
        assert git.fetch(all_remotes=True, prune=True, tags=True).command == "git fetch --all --prune --tags"

    def test_diff(self):
        planned = git.diff("main", cached=True, stat=True, name_only=True)
        assert planned.command == "git diff --cached --stat --name-only main"

    def test_log(self):
        planned = git.log(number=5, oneline=True, since="2 weeks ago", fmt="%h %s")
        assert planned.command == "git log --oneline -5 --since='2 weeks ago' --format='%h %s'"

    def test_branch_variants(self):
        assert git.branch().command == "git branch"
        assert git.branch(all_branches=True).command == "git branch -a"
        assert git.branch("feature/x").command == "git branch feature/x"
        assert git.branch("old", delete=True).command == "git branch -d old"

    def test_checkout(self):
        assert git.checkout("main").command == "git checkout main"
        assert git.checkout("new", create=True).command == "git checkout -b new"

    def test_user_values_are_quoted(self):
        """Shell metacharacters in arguments never reach the shell unquoted."""
        planned = git.checkout("x; rm -rf /")
        assert planned.command == "git checkout 'x; rm -rf /'"

    def test_commit_is_sequential_and_quoted(self):
        planned = git.commit('fix "quotes" and $HOME')
        assert planned.command == "git commit -m 'fix \"quotes\" and $HOME'"
        assert planned.sequential is True

    def test_commit_requires_message(self):
        with pytest.raises(CommandArgumentError):
            git.commit("  ")

    def test_add(self):
        assert git.add().command == "git add ."
        assert git.add(all_changes=True).command == "git add -A"
        assert git.add(["a.txt", "b c.txt"]).command == "git add a.txt 'b c.txt'"

    def test_tag(self):
        assert git.tag().command == "git tag"
        assert git.tag(list_tags=True).command == "git tag -l"
        assert git.tag("v1").command == "git tag v1"
        assert git.tag("v1", delete=True).command == "git tag -d v1"
        assert git.tag("v1", message="Release 1").command == "git tag -a v1 -m 'Release 1'"
        assert git.tag("v1", annotate=True).command == "git tag -a v1"

    def test_merge(self):
        assert git.merge("dev", no_ff=True).command == "git merge --no-ff dev"
        assert git.merge(abort=True).command == "git merge --abort"
        assert git.merge("dev").sequential is True

    def test_merge_requires_branch(self):
        with pytest.raises(CommandArgumentError, match="Branch name is required"):
            git.merge()

    def test_rebase(self):
        assert git.rebase("main").command == "git rebase main"
        assert git.rebase(abort=True).command == "git rebase --abort"
        assert git.rebase(continue_=True).command == "git rebase --continue"
        assert git.rebase(skip=True).command == "git rebase --skip"
        assert git.rebase("main", onto="dev").command == "git rebase --onto dev main"
        assert git.rebase("main").sequential is True

    def test_rebase_autosquash_never_opens_editor(self):
        planned = git.rebase("main", autosquash=True)
        assert planned.command == "GIT_SEQUENCE_EDITOR=true git rebase -i --autosquash main"

    def test_cherry_pick(self):
        assert git.cherry_pick(["abc", "def"]).command == "git cherry-pick abc def"
        assert git.cherry_pick(["abc"], no_commit=True).command == "git cherry-pick --no-commit abc"
        assert git.cherry_pick(abort=True).command == "git cherry-pick --abort"
        with pytest.raises(CommandArgumentError):
            git.cherry_pick()

    def test_stash(self):
        assert git.stash().command == "git stash"
        assert git.stash("push").command == "git stash push"
        assert git.stash(message="wip").command == "git stash push -m wip"
        assert git.stash("pop").command == "git stash pop"
        assert git.stash("list").message == "Listing stashes across repositories..."
        assert git.stash().sequential is True

    def test_stash_unknown_action(self):
        with pytest.raises(CommandArgumentError):
            git.stash("apply")

    def test_reset(self):
        assert git.reset().command == "git reset"
        assert git.reset("HEAD~1", hard=True).command == "git reset --hard 'HEAD~1'"
        assert git.reset(soft=True, hard=True).command == "git reset --soft"
        assert git.reset().sequential is True

    def test_clean(self):
        assert git.clean(force=True, directories=True, dry_run=True, ignored=True).command == "git clean -f -d -n -x"

    @pytest.mark.parametrize(
        ("url", "name"),
        [
            ("git@github.com:org/api.git", "api"),
            ("https://github.com/org/web", "web"),
            ("https://github.com/org/web/", "web"),
            ("git@host:solo.git", "solo"),
        ],
    )
    def test_extract_repo_name(self, url, name):
        assert git.extract_repo_name(url) == name

    def test_clone_command(self):
        assert git.clone("git@h:o/r.git", "my dir") == "git clone git@h:o/r.git 'my dir'"


class TestNpmBuilders:
    """Tests for npm builders."""

    def test_install_and_ci(self):
        assert npm.install().command == "npm install"
        assert npm.ci().command == "npm ci"

    def test_run_script(self):
        planned = npm.run_script("build")
        assert planned.command == "npm run build"
        assert planned.message == 'Running "npm run build" across repositories...'

    def test_if_present_skips_projects_without_script(self, tmp_path):
        runner = MagicMock(spec=ProcessRunner)
        planned = npm.run_script("lint", if_present=True, runner=runner)

        outcome = planned.command(tmp_path, "api")

        assert outcome.exit_code == 0
        assert outcome.stdout == 'Script "lint" not found, skipping'
        runner.run.assert_not_called()

    def test_if_present_runs_existing_script(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"scripts": {"lint": "eslint ."}}))
        runner = MagicMock(spec=ProcessRunner)
        runner.run.return_value = ExecutionOutcome.ok("linted")
        planned = npm.run_script("lint", if_present=True, runner=runner, timeout=30.0)

        outcome = planned.command(tmp_path, "api")

        assert outcome.stdout == "linted"
        runner.run.assert_called_once_with("npm run lint", tmp_path, timeout=30.0)

    def test_has_script_with_broken_package_json(self, tmp_path):
        (tmp_path / "package.json").write_text("{broken")
        assert npm.has_script(tmp_path, "build") is False
