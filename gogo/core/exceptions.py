"""
Custom exception hierarchy for gogo.

Only configuration and setup problems are raised as exceptions. Failures of
commands run inside project directories are recorded as data on the
execution results and never raised.
"""

from __future__ import annotations


class GogoException(Exception):
    """
    Base of every error gogo raises on purpose.

    The CLI shows ``message`` and exits with ``exit_code``; ``context``
    (file path, project, pattern) only appears in str() and debug logs.
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{self.message} ({details})"


# =============================================================================
# Configuration Errors
# =============================================================================


class GogoConfigError(GogoException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(GogoConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for invalid JSON in .gogo, unreadable files, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(GogoConfigError, ValueError):
    """
    A manifest or filter value that parses but is not acceptable.

    Also a ValueError, so code validating user input can catch it with the
    pydantic and re errors it wraps.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context={"file_path": file_path} if file_path else None, cause=cause)


class MetaNotFoundError(GogoConfigError):
    """No .gogo manifest found in the working directory or any parent."""

    pass


class FilterPatternError(ConfigValidationError):
    """A directory filter regular expression failed to compile."""

    def __init__(
        self,
        pattern: str,
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(f"Invalid regex pattern: {pattern}", cause=cause)
        self.pattern = pattern


class UnknownCommandError(GogoConfigError):
    """A named command was requested that the manifest does not define."""

    def __init__(self, name: str, available: list[str]) -> None:
        if available:
            message = f'Unknown command: "{name}". Available commands: {", ".join(available)}'
        else:
            message = f'Unknown command: "{name}". No commands are defined in .gogo file.'
        super().__init__(message)
        self.name = name
        self.available = available


# =============================================================================
# Project Errors
# =============================================================================


class ProjectError(GogoException):
    """
    Error creating or importing a project into the meta repository.

    Raised when the target directory already exists, a clone fails, or a
    remote cannot be determined.
    """

    def __init__(
        self,
        message: str,
        *,
        project: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if project:
            ctx["project"] = project
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Command Errors
# =============================================================================


class CommandArgumentError(GogoException, ValueError):
    """Arguments given to a git/npm command cannot form a valid invocation."""

    pass
