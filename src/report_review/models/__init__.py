"""Data models for report issues and review policies."""

from .issue import DocumentLocation, IssueBundle, IssueCategory, IssueSummary, Severity
from .policy import (
    AllFiles,
    ChangedFiles,
    CoverageAcceptance,
    CoverageRequired,
    CoverageRequirement,
    CoverageThreshold,
    CustomFiles,
    FileScope,
    NoCoverage,
    PolicyConfiguration,
)

__all__ = [
    "AllFiles",
    "ChangedFiles",
    "CoverageAcceptance",
    "CoverageRequired",
    "CoverageRequirement",
    "CoverageThreshold",
    "CustomFiles",
    "DocumentLocation",
    "FileScope",
    "IssueBundle",
    "IssueCategory",
    "IssueSummary",
    "NoCoverage",
    "PolicyConfiguration",
    "Severity",
]
