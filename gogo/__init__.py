"""
gogo - run one command across every repository of a meta repository.

A meta repository is a directory holding a ``.gogo`` manifest that maps
relative project paths to git remote URLs. gogo fans shell, git and npm
commands out over those projects, sequentially or with bounded
parallelism, and reports an aggregate result.
"""

__all__ = ["__version__"]

__version__ = "0.3.0"
