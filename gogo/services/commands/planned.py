"""The value every command builder returns."""

from __future__ import annotations

from dataclasses import dataclass

from ...core.models.execution import CommandFn


@dataclass(frozen=True)
class PlannedCommand:
    """
    A command ready to hand to the loop.

    Attributes:
        command: Shell command line, or a per-directory function
        message: Progress line shown before the loop starts
        sequential: True when the command must never run in parallel
            (history rewriting, prompts, index locks)
    """

    command: str | CommandFn
    message: str
    sequential: bool = False
