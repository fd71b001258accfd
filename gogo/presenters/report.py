"""
JSON report presenter for ``--json`` output.

Swallows progress output and prints a single JSON document describing the
run once it is over, so the output can be piped into other tools.
"""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO

from ..core.interfaces.presenter import IPresenter
from ..core.models.execution import DirectoryResult, RunReport, RunSummary


def report_to_dict(report: RunReport, command: str | None = None) -> dict[str, Any]:
    """Serialize a RunReport (with its computed fields) to plain data."""
    data = report.model_dump(mode="json")
    if command is not None:
        data = {"command": command, **data}
    return data


class JsonReportPresenter(IPresenter):
    """Collects messages quietly and emits the final report as JSON."""

    def __init__(self, file: TextIO | None = None) -> None:
        self._file = file or sys.stdout
        self._err_file = sys.stderr
        self.messages: list[dict[str, str]] = []

    def _record(self, level: str, message: str) -> None:
        self.messages.append({"level": level, "message": message})

    def print(self, message: str) -> None:
        self._record("info", message)

    def info(self, message: str) -> None:
        self._record("info", message)

    def success(self, message: str) -> None:
        self._record("success", message)

    def warning(self, message: str) -> None:
        self._record("warning", message)

    def error(self, message: str) -> None:
        self._record("error", message)
        print(message, file=self._err_file)

    def header(self, directory: str) -> None:
        pass

    def result(self, result: DirectoryResult) -> None:
        pass

    def project_status(self, directory: str, ok: bool, message: str | None = None) -> None:
        self._record("success" if ok else "error", f"{directory}: {message or ('ok' if ok else 'failed')}")

    def summary(self, summary: RunSummary) -> None:
        pass

    def show_report(self, report: RunReport, command: str | None = None) -> None:
        """Print the report, plus any warnings raised while it ran."""
        data = report_to_dict(report, command)
        warnings = [m["message"] for m in self.messages if m["level"] in ("warning", "error")]
        if warnings:
            data["warnings"] = warnings
        print(json.dumps(data, indent=2), file=self._file)
