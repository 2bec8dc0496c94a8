"""Scoping of issues to relevant files and coverage acceptance decisions."""

from .coverage_decision import ACCEPTANCE_SEVERITY, acceptance_decision, decide, describe_coverage
from .issue_filter import filter_summaries
from .path_scope import PathPatternPredicate, changed_file_set, in_scope, normalize_path, relativize

__all__ = [
    "ACCEPTANCE_SEVERITY",
    "PathPatternPredicate",
    "acceptance_decision",
    "changed_file_set",
    "decide",
    "describe_coverage",
    "filter_summaries",
    "in_scope",
    "normalize_path",
    "relativize",
]
