"""
Click command implementations for gogo CLI.

Each module corresponds to a gogo command or command group (e.g. git.py
implements 'gogo git ...'). Commands are registered with the main CLI
group via register_commands() in gogo.cli.
"""

from .exec import exec_
from .git import git
from .init import init
from .npm import npm
from .project import project
from .run import run

COMMANDS = [
    init,
    exec_,
    run,
    git,
    npm,
    project,
]

__all__ = [
    "COMMANDS",
    "exec_",
    "git",
    "init",
    "npm",
    "project",
    "run",
]
