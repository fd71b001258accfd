"""
Unit tests for the loop pipeline (selection, warnings, presenter calls).
"""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from gogo.core.interfaces.presenter import IPresenter
from gogo.core.models import ExecutionMode, ExecutionOutcome, MetaConfig
from gogo.services.execution.filter import create_filter_spec
from gogo.services.execution.loop import (
    NO_MATCH_MESSAGE,
    LoopContext,
    LoopOptions,
    run_loop,
    select_directories,
)


@pytest.fixture
def context(tmp_path):
    config = MetaConfig(projects={"api": "u1", "web": "u2", "libs/shared": "u3"})
    return LoopContext(config=config, meta_dir=tmp_path)


@pytest.fixture
def presenter():
    return MagicMock(spec=IPresenter)


def _name(directory: Path, project: str) -> ExecutionOutcome:
    return ExecutionOutcome.ok(project)


class TestSelectDirectories:
    """Tests for select_directories."""

    def test_declaration_order(self, context):
        assert select_directories(context, create_filter_spec()) == ["api", "web", "libs/shared"]

    def test_looprc_ignore_applied_before_filters(self, context, tmp_path):
        (tmp_path / ".looprc").write_text(json.dumps({"ignore": ["web"]}))
        spec = create_filter_spec(include_only="web,api")
        assert select_directories(context, spec) == ["api"]


class TestRunLoop:
    """Tests for run_loop."""

    def test_scenario_no_match_warns_and_returns_empty(self, context, presenter):
        """Filters that exclude everything: warning, no execution, exit code 0."""
        fn = MagicMock()
        options = LoopOptions(filters=create_filter_spec(include_only="nope"))

        report = run_loop(fn, context, options, presenter=presenter)

        assert report.nothing_matched is True
        assert report.exit_code == 0
        presenter.warning.assert_called_once_with(NO_MATCH_MESSAGE)
        presenter.summary.assert_not_called()
        fn.assert_not_called()

    def test_presenter_receives_headers_results_and_summary(self, context, presenter):
        report = run_loop(_name, context, presenter=presenter)

        assert [c.args[0] for c in presenter.header.call_args_list] == ["api", "web", "libs/shared"]
        assert [c.args[0].directory for c in presenter.result.call_args_list] == ["api", "web", "libs/shared"]
        presenter.summary.assert_called_once_with(report.summary)

    def test_suppress_output(self, context, presenter):
        run_loop(_name, context, LoopOptions(suppress_output=True), presenter=presenter)
        presenter.header.assert_not_called()
        presenter.result.assert_not_called()
        presenter.summary.assert_not_called()

    def test_parallel_mode_preserves_order(self, context, presenter):
        options = LoopOptions(mode=ExecutionMode.concurrent(2))
        report = run_loop(_name, context, options, presenter=presenter)
        assert report.directories == ["api", "web", "libs/shared"]
