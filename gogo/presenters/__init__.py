"""
Output presenters for gogo CLI.

Implements different output formats (console, JSON) behind IPresenter.
"""

from .console import ConsolePresenter
from .report import JsonReportPresenter, report_to_dict

__all__ = ["ConsolePresenter", "JsonReportPresenter", "report_to_dict"]
