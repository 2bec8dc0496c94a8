"""Report reader interfaces and the JSON summary implementation."""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from ..models import DocumentLocation, IssueBundle, IssueCategory, IssueSummary

logger = logging.getLogger(__name__)


class ReportReadError(RuntimeError):
    """Raised when a report section cannot be read."""


class ReportReader(ABC):
    """Abstract base class describing the report reader contract."""

    @property
    @abstractmethod
    def source(self) -> str:
        """Identifying path of the report, used in user-facing messages."""

    @abstractmethod
    def get_issue_summaries(self) -> IssueBundle:
        """Return the issue summaries recorded in the report."""

    @abstractmethod
    def get_coverage(self) -> float:
        """Return the overall line coverage percentage (0-100)."""


class JsonReportReader(ReportReader):
    """Read issues and coverage from a JSON summary exported from a build report."""

    def __init__(self, report_path: str | os.PathLike[str]) -> None:
        self.report_path = Path(report_path)
        self._document: Optional[Mapping[str, Any]] = None

    @property
    def source(self) -> str:
        return str(self.report_path)

    # ------------------------------------------------------------------
    def get_issue_summaries(self) -> IssueBundle:
        issues = self._load().get("issues")
        if not isinstance(issues, Mapping):
            raise ReportReadError(f"Report has no issues section: {self.report_path}")

        bundle = IssueBundle()
        for category in IssueCategory:
            entries = issues.get(category.value) or []
            if not isinstance(entries, list):
                raise ReportReadError(
                    f"Issue section '{category.value}' must be a list in {self.report_path}"
                )
            bundle.of(category).extend(self._parse_summaries(entries))

        logger.debug("Read %d issue summaries from %s", bundle.total, self.report_path)
        return bundle

    def get_coverage(self) -> float:
        coverage = self._load().get("coverage")
        if isinstance(coverage, Mapping):
            coverage = coverage.get("line_coverage")

        if coverage is None or isinstance(coverage, bool):
            raise ReportReadError(f"Report has no coverage data: {self.report_path}")

        try:
            return float(coverage)
        except (TypeError, ValueError) as exc:
            raise ReportReadError(f"Invalid coverage value in {self.report_path}") from exc

    # ------------------------------------------------------------------
    def _load(self) -> Mapping[str, Any]:
        if self._document is not None:
            return self._document

        if not self.report_path.exists():
            raise ReportReadError(f"Report not found: {self.report_path}")

        try:
            with self.report_path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ReportReadError(f"Invalid JSON in report: {self.report_path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ReportReadError(f"Failed to read report {self.report_path}: {exc}") from exc

        if not isinstance(data, Mapping):
            raise ReportReadError(f"Report JSON must be an object: {self.report_path}")

        self._document = data
        return data

    def _parse_summaries(self, entries: Iterable[Any]) -> List[IssueSummary]:
        summaries: List[IssueSummary] = []
        for entry in entries:
            if not isinstance(entry, Mapping):
                logger.warning("Skipping malformed issue entry in %s: %r", self.report_path, entry)
                continue
            message = str(entry.get("message") or "").strip()
            summaries.append(
                IssueSummary(
                    message=message or "Issue reported without message.",
                    location=self._parse_location(entry.get("location")),
                    issue_type=_optional_str(entry.get("issue_type")),
                    producing_target=_optional_str(entry.get("producing_target")),
                    test_case_name=_optional_str(entry.get("test_case_name")),
                )
            )
        return summaries

    def _parse_location(self, raw: Any) -> Optional[DocumentLocation]:
        if not isinstance(raw, Mapping):
            return None

        path = _optional_str(raw.get("path"))
        if not path:
            return None

        line = raw.get("line")
        if isinstance(line, bool) or not isinstance(line, int) or line < 1:
            line = None
        return DocumentLocation(path=path, line=line)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = ["JsonReportReader", "ReportReadError", "ReportReader"]
