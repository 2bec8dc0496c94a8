"""Issue models exposed by report readers and consumed by the reporting layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Severity(str, Enum):
    """Severity classes understood by commenters."""

    COMMENT = "comment"
    WARNING = "warning"
    FAILURE = "failure"


class IssueCategory(str, Enum):
    """Issue categories a build report can expose."""

    BUILD_WARNING = "build_warnings"
    BUILD_ERROR = "build_errors"
    ANALYZER_WARNING = "analyzer_warnings"
    TEST_FAILURE = "test_failures"


@dataclass(frozen=True, slots=True)
class DocumentLocation:
    """Absolute file path plus an optional 1-based line number."""

    path: str
    line: Optional[int] = None


@dataclass(frozen=True, slots=True)
class IssueSummary:
    """A single problem reported by the build or test run."""

    message: str
    location: Optional[DocumentLocation] = None
    issue_type: Optional[str] = None
    producing_target: Optional[str] = None
    test_case_name: Optional[str] = None


@dataclass(slots=True)
class IssueBundle:
    """Issue summaries grouped by category."""

    build_warnings: List[IssueSummary] = field(default_factory=list)
    build_errors: List[IssueSummary] = field(default_factory=list)
    analyzer_warnings: List[IssueSummary] = field(default_factory=list)
    test_failures: List[IssueSummary] = field(default_factory=list)

    def of(self, category: IssueCategory) -> List[IssueSummary]:
        return getattr(self, category.value)

    @property
    def total(self) -> int:
        return sum(len(self.of(category)) for category in IssueCategory)
