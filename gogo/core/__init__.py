"""
Core infrastructure for gogo.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Runtime settings
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container
from .exceptions import (
    CommandArgumentError,
    ConfigFileError,
    ConfigValidationError,
    FilterPatternError,
    GogoConfigError,
    GogoException,
    MetaNotFoundError,
    ProjectError,
    UnknownCommandError,
)

__all__ = [
    "CommandArgumentError",
    "ConfigFileError",
    "ConfigValidationError",
    "FilterPatternError",
    "GogoConfigError",
    "GogoException",
    "MetaNotFoundError",
    "ProjectError",
    "ServiceContainer",
    "UnknownCommandError",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
]
