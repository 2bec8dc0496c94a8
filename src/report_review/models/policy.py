"""Policy models describing what to check in a report and how strictly."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Union


class CoverageAcceptance(str, Enum):
    """Outcome of comparing a coverage percentage against a threshold."""

    GOOD = "good"
    ACCEPTABLE = "acceptable"
    REJECT = "reject"


@dataclass(frozen=True, slots=True)
class AllFiles:
    """Report issues regardless of the file they point at."""


@dataclass(frozen=True, slots=True)
class ChangedFiles:
    """Only report issues located in modified or created files."""


@dataclass(frozen=True, slots=True)
class CustomFiles:
    """Only report issues whose relative path satisfies ``predicate``."""

    predicate: Callable[[str], bool]


FileScope = Union[AllFiles, ChangedFiles, CustomFiles]


@dataclass(frozen=True, slots=True)
class CoverageThreshold:
    """Coverage percentages (0-100) separating the acceptance tiers.

    Callers must keep ``acceptable <= recommended``. With an inverted pair the
    acceptable tier can never be reached: anything below ``recommended`` is
    rejected.
    """

    recommended: float
    acceptable: float


@dataclass(frozen=True, slots=True)
class NoCoverage:
    """Skip coverage entirely."""


@dataclass(frozen=True, slots=True)
class CoverageRequired:
    """Require coverage to be reported against ``threshold``."""

    threshold: CoverageThreshold


CoverageRequirement = Union[NoCoverage, CoverageRequired]


@dataclass(frozen=True, slots=True)
class PolicyConfiguration:
    """Immutable description of which report sections to surface."""

    check_build_warnings: bool = True
    check_build_errors: bool = True
    check_analyzer_warnings: bool = True
    check_test_failures: bool = True
    file_scope: FileScope = field(default_factory=ChangedFiles)
    coverage_requirement: CoverageRequirement = field(default_factory=NoCoverage)

    @property
    def needs_issues(self) -> bool:
        """Return ``True`` when any issue category is enabled."""

        return (
            self.check_build_warnings
            or self.check_build_errors
            or self.check_analyzer_warnings
            or self.check_test_failures
        )
