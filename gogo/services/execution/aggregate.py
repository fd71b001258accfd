"""Reduction of per-directory results to counts and a process exit code."""

from __future__ import annotations

from collections.abc import Iterable

from ...core.models.execution import DirectoryResult, RunSummary

FAILURE_EXIT_CODE = 1


def summarize(results: Iterable[DirectoryResult]) -> RunSummary:
    """Count succeeded, failed and total results."""
    return RunSummary.from_results(tuple(results))


def has_failures(results: Iterable[DirectoryResult]) -> bool:
    return any(not r.success for r in results)


def exit_code(results: Iterable[DirectoryResult]) -> int:
    """0 when every result succeeded (including no results at all), else 1."""
    return FAILURE_EXIT_CODE if has_failures(results) else 0
