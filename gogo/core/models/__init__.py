"""
Pydantic models for gogo.

This package provides typed, validated models for the manifest, the runtime
settings and the execution results.
"""

from .base import GogoBaseModel, ImmutableModel
from .config import (
    DEFAULT_IGNORE,
    CommandConfig,
    ExecutionConfig,
    LoggingConfig,
    LoopRc,
    MetaConfig,
    OutputConfig,
)
from .execution import (
    DEFAULT_CONCURRENCY,
    SPAWN_FAILURE_EXIT_CODE,
    TIMEOUT_EXIT_CODE,
    CommandFn,
    CommandSpec,
    DirectoryResult,
    ExecutionMode,
    ExecutionOutcome,
    FilterSpec,
    GeneratedCommand,
    LiteralCommand,
    RunReport,
    RunSummary,
    as_command_spec,
)

__all__ = [
    "DEFAULT_CONCURRENCY",
    "DEFAULT_IGNORE",
    "SPAWN_FAILURE_EXIT_CODE",
    "TIMEOUT_EXIT_CODE",
    "CommandConfig",
    "CommandFn",
    "CommandSpec",
    "DirectoryResult",
    "ExecutionConfig",
    "ExecutionMode",
    "ExecutionOutcome",
    "FilterSpec",
    "GeneratedCommand",
    "GogoBaseModel",
    "ImmutableModel",
    "LiteralCommand",
    "LoggingConfig",
    "LoopRc",
    "MetaConfig",
    "OutputConfig",
    "RunReport",
    "RunSummary",
    "as_command_spec",
]
