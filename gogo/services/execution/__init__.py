"""Execution services for looping commands over projects."""

from .aggregate import exit_code, has_failures, summarize
from .engine import ExecutionEngine
from .filter import (
    apply_filters,
    create_filter_spec,
    filter_from_loop_rc,
    merge_filter_specs,
    parse_filter_list,
    parse_filter_pattern,
)
from .loop import LoopContext, LoopOptions, run_loop, select_directories
from .process_runner import ProcessRunner

__all__ = [
    "ExecutionEngine",
    "LoopContext",
    "LoopOptions",
    "ProcessRunner",
    "apply_filters",
    "create_filter_spec",
    "exit_code",
    "filter_from_loop_rc",
    "has_failures",
    "merge_filter_specs",
    "parse_filter_list",
    "parse_filter_pattern",
    "run_loop",
    "select_directories",
    "summarize",
]
