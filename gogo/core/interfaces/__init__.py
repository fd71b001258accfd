"""
Interface definitions for gogo's pluggable services.
"""

from .logger import ILogger
from .presenter import IPresenter

__all__ = ["ILogger", "IPresenter"]
