"""
Command builders for the git and npm sub-commands.

Builders are pure: they turn command-line arguments into a PlannedCommand
and never touch the filesystem or spawn anything themselves. The one
exception is ``npm.run_script(if_present=True)``, whose per-directory
function inspects package.json when the loop calls it.
"""

from . import git, npm
from .planned import PlannedCommand

__all__ = ["PlannedCommand", "git", "npm"]
