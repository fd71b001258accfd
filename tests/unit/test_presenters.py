"""
Unit tests for console and JSON presenters.
"""

import io
import json

import pytest

from gogo.core.models import DirectoryResult, ExecutionOutcome, RunReport, RunSummary
from gogo.presenters.console import ConsolePresenter
from gogo.presenters.formatting import format_duration, summary_line
from gogo.presenters.report import JsonReportPresenter


def _result(directory="api", code=0, stdout="", stderr="", timed_out=False, ms=10):
    outcome = ExecutionOutcome(exit_code=code, stdout=stdout, stderr=stderr, timed_out=timed_out)
    return DirectoryResult(directory=directory, outcome=outcome, duration_ms=ms)


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


@pytest.fixture
def presenter(streams):
    out, err = streams
    return ConsolePresenter(use_color=True, file=out, err_file=err)


class TestFormatting:
    """Tests for formatting helpers."""

    @pytest.mark.parametrize(
        ("ms", "text"),
        [(None, "?"), (0, "0ms"), (999, "999ms"), (1500, "1.5s"), (125000, "2m 5s")],
    )
    def test_format_duration(self, ms, text):
        assert format_duration(ms) == text

    def test_summary_line(self):
        assert summary_line(3, 0, 3) == "All 3 projects completed successfully"
        assert summary_line(1, 0, 1) == "All 1 project completed successfully"
        assert summary_line(2, 1, 3) == "2/3 projects succeeded, 1 failed"


class TestConsolePresenter:
    """Tests for ConsolePresenter."""

    def test_no_color_when_not_a_tty(self, presenter, streams):
        """StringIO is not a terminal, so no escape codes are written."""
        presenter.success("done")
        assert "\033[" not in streams[0].getvalue()
        assert streams[0].getvalue() == "✓ done\n"

    def test_header(self, presenter, streams):
        presenter.header("libs/shared")
        assert streams[0].getvalue() == "\n→ libs/shared\n"

    def test_result_writes_stdout_and_stderr_separately(self, presenter, streams):
        presenter.result(_result(stdout="On branch main", stderr="warning: x"))
        assert streams[0].getvalue() == "On branch main\n"
        assert streams[1].getvalue() == "warning: x\n"

    def test_result_skips_blank_output(self, presenter, streams):
        presenter.result(_result())
        assert streams[0].getvalue() == ""
        assert streams[1].getvalue() == ""

    def test_timed_out_result_reported(self, presenter, streams):
        presenter.result(_result(code=124, timed_out=True, ms=2000))
        assert "api timed out after 2.0s" in streams[1].getvalue()

    def test_durations_shown_when_enabled(self, streams):
        out, err = streams
        presenter = ConsolePresenter(file=out, err_file=err, show_durations=True)
        presenter.result(_result(stdout="ok", code=3, ms=1500))
        assert out.getvalue() == "ok\n  1.5s, exit 3\n"

    def test_durations_hidden_by_default(self, presenter, streams):
        presenter.result(_result(stdout="ok", ms=1500))
        assert "1.5s" not in streams[0].getvalue()

    def test_warning_goes_to_stderr(self, presenter, streams):
        presenter.warning("No projects match the specified filters")
        assert streams[0].getvalue() == ""
        assert "⚠ No projects match the specified filters" in streams[1].getvalue()

    def test_summary_success(self, presenter, streams):
        presenter.summary(RunSummary(succeeded=2, failed=0, total=2))
        assert "✓ All 2 projects completed successfully" in streams[0].getvalue()

    def test_summary_failure(self, presenter, streams):
        presenter.summary(RunSummary(succeeded=1, failed=1, total=2))
        assert "⚠ 1/2 projects succeeded, 1 failed" in streams[0].getvalue()

    def test_project_status(self, presenter, streams):
        presenter.project_status("api", True, "cloned")
        presenter.project_status("web", False)
        assert streams[0].getvalue() == "✓ api cloned\n✗ web\n"


class TestJsonReportPresenter:
    """Tests for JsonReportPresenter."""

    def test_show_report(self):
        out = io.StringIO()
        presenter = JsonReportPresenter(file=out)
        presenter.info("Executing: ls")
        presenter.header("api")

        report = RunReport(results=(_result("api", stdout="x"), _result("web", code=2)))
        presenter.show_report(report, command="ls")

        data = json.loads(out.getvalue())
        assert data["command"] == "ls"
        assert data["exit_code"] == 1
        assert data["nothing_matched"] is False
        assert data["summary"] == {"succeeded": 1, "failed": 1, "total": 2}
        assert [r["directory"] for r in data["results"]] == ["api", "web"]
        assert "warnings" not in data

    def test_warnings_included(self):
        out = io.StringIO()
        presenter = JsonReportPresenter(file=out)
        presenter.warning("No projects match the specified filters")
        presenter.show_report(RunReport())

        data = json.loads(out.getvalue())
        assert data["results"] == []
        assert data["nothing_matched"] is True
        assert data["warnings"] == ["No projects match the specified filters"]
