"""Adapter layer package for reading reports and publishing review messages."""

from .commenter import Commenter, ConsoleCommenter, StreamCommenter
from .report_reader import JsonReportReader, ReportReader, ReportReadError

__all__ = [
    "Commenter",
    "ConsoleCommenter",
    "JsonReportReader",
    "ReportReadError",
    "ReportReader",
    "StreamCommenter",
]
