"""Command-line interface package for the report reviewer."""

from .app import build_parser, create_commenter, create_service, main, run
from .github_reporting import GitHubActionsCommenter, format_annotation, format_summary

__all__ = [
    "GitHubActionsCommenter",
    "build_parser",
    "create_commenter",
    "create_service",
    "format_annotation",
    "format_summary",
    "main",
    "run",
]
