"""Orchestration layer deciding which report results reach the reviewer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from .adapters import Commenter, JsonReportReader, ReportReader, ReportReadError
from .models import (
    IssueBundle,
    IssueCategory,
    IssueSummary,
    PolicyConfiguration,
    Severity,
)
from .scoping import (
    ACCEPTANCE_SEVERITY,
    acceptance_decision,
    changed_file_set,
    describe_coverage,
    filter_summaries,
    relativize,
)

logger = logging.getLogger(__name__)

ReportReaderFactory = Callable[[str], ReportReader]


@dataclass(slots=True)
class ReviewContext:
    """Caller supplied facts about the change under review."""

    working_dir: str
    modified_files: Sequence[str] = field(default_factory=list)
    created_files: Sequence[str] = field(default_factory=list)


@dataclass(slots=True)
class ReportingResult:
    """Snapshot of what a reporting run actually obtained from the report."""

    coverage: Optional[float] = None
    issues: Optional[IssueBundle] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"coverage": self.coverage, "issues": None}
        if self.issues is not None:
            payload["issues"] = {
                category.value: [_serialize_summary(summary) for summary in self.issues.of(category)]
                for category in IssueCategory
            }
        return payload


def _serialize_summary(summary: IssueSummary) -> dict[str, Any]:
    location = None
    if summary.location is not None:
        location = {"path": summary.location.path, "line": summary.location.line}
    return {
        "message": summary.message,
        "location": location,
        "issue_type": summary.issue_type,
        "producing_target": summary.producing_target,
        "test_case_name": summary.test_case_name,
    }


class ReportingService:
    """Post the parts of a build report selected by a policy to a commenter."""

    def __init__(
        self,
        commenter: Commenter,
        context: ReviewContext,
        *,
        reader_factory: ReportReaderFactory | None = None,
    ) -> None:
        self._commenter = commenter
        self._context = context
        self._reader_factory = reader_factory or JsonReportReader
        self._changed_files = changed_file_set(context.modified_files, context.created_files)

    # ------------------------------------------------------------------
    def report(
        self,
        report_path: str | os.PathLike[str],
        configuration: PolicyConfiguration,
        *,
        treat_warnings_as_errors: bool = False,
    ) -> ReportingResult:
        """Post issues and coverage from ``report_path`` and return what was read."""

        reader = self._reader_factory(str(Path(report_path)))

        issues = self._post_issues_if_needed(reader, configuration, treat_warnings_as_errors)
        coverage = self._post_coverage_if_needed(reader, configuration)

        return ReportingResult(coverage=coverage, issues=issues)

    # ------------------------------------------------------------------
    def _post_issues_if_needed(
        self,
        reader: ReportReader,
        configuration: PolicyConfiguration,
        treat_warnings_as_errors: bool,
    ) -> Optional[IssueBundle]:
        if not configuration.needs_issues:
            return None

        try:
            issues = reader.get_issue_summaries()
        except ReportReadError as exc:
            logger.warning("Reading issues from %s failed: %s", reader.source, exc)
            self._commenter.fail(f"Failed to get invocation record from {reader.source}")
            return None

        if configuration.check_build_warnings:
            warnings = filter_summaries(
                issues.build_warnings,
                configuration.file_scope,
                working_root=self._context.working_dir,
                changed_files=self._changed_files,
            )
            severity = Severity.FAILURE if treat_warnings_as_errors else Severity.WARNING
            self._post_summaries(IssueCategory.BUILD_WARNING, warnings, severity)

        if configuration.check_build_errors:
            self._post_summaries(IssueCategory.BUILD_ERROR, issues.build_errors, Severity.FAILURE)

        if configuration.check_analyzer_warnings:
            self._post_summaries(
                IssueCategory.ANALYZER_WARNING, issues.analyzer_warnings, Severity.WARNING
            )

        if configuration.check_test_failures:
            self._post_summaries(IssueCategory.TEST_FAILURE, issues.test_failures, Severity.FAILURE)

        return issues

    def _post_coverage_if_needed(
        self,
        reader: ReportReader,
        configuration: PolicyConfiguration,
    ) -> Optional[float]:
        decision = acceptance_decision(configuration.coverage_requirement)
        if decision is None:
            return None

        try:
            coverage = reader.get_coverage()
        except ReportReadError as exc:
            logger.warning("Reading coverage from %s failed: %s", reader.source, exc)
            self._commenter.warn(f"Failed to get coverage from {reader.source}")
            return None

        acceptance = decision(coverage)
        logger.info("Coverage %.2f%% classified as %s", coverage, acceptance.value)

        message = describe_coverage(coverage, configuration.coverage_requirement.threshold, acceptance)
        self._commenter.post(message, ACCEPTANCE_SEVERITY[acceptance])
        return coverage

    # ------------------------------------------------------------------
    def _post_summaries(
        self,
        category: IssueCategory,
        summaries: Sequence[IssueSummary],
        severity: Severity,
    ) -> None:
        if not summaries:
            return

        logger.info("Posting %d %s as %s", len(summaries), category.value, severity.value)
        for summary in summaries:
            self._commenter.post(self._format_summary(summary), severity)

    def _format_summary(self, summary: IssueSummary) -> str:
        text = summary.message
        if summary.test_case_name:
            text = f"{summary.test_case_name}: {text}"

        location = summary.location
        if location is None:
            return text

        path = relativize(location, self._context.working_dir) or location.path
        if location.line is not None:
            return f"{text} ({path}:{location.line})"
        return f"{text} ({path})"


__all__ = ["ReportingResult", "ReportingService", "ReportReadError", "ReviewContext"]
