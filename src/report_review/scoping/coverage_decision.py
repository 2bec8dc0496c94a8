"""Tiered acceptance decision for coverage percentages."""

from __future__ import annotations

from typing import Callable, Optional

from ..models import CoverageAcceptance, CoverageRequired, CoverageRequirement, CoverageThreshold, Severity

ACCEPTANCE_SEVERITY = {
    CoverageAcceptance.GOOD: Severity.COMMENT,
    CoverageAcceptance.ACCEPTABLE: Severity.WARNING,
    CoverageAcceptance.REJECT: Severity.FAILURE,
}


def decide(percentage: float, threshold: CoverageThreshold) -> CoverageAcceptance:
    """Map ``percentage`` onto an acceptance tier; lower bounds are inclusive."""

    if percentage >= threshold.recommended:
        return CoverageAcceptance.GOOD
    if percentage >= threshold.acceptable:
        return CoverageAcceptance.ACCEPTABLE
    return CoverageAcceptance.REJECT


def acceptance_decision(
    requirement: CoverageRequirement,
) -> Optional[Callable[[float], CoverageAcceptance]]:
    """Return the decision function for ``requirement`` or ``None`` when coverage is skipped."""

    if not isinstance(requirement, CoverageRequired):
        return None

    threshold = requirement.threshold
    return lambda percentage: decide(percentage, threshold)


def describe_coverage(percentage: float, threshold: CoverageThreshold, acceptance: CoverageAcceptance) -> str:
    if acceptance is CoverageAcceptance.GOOD:
        return (
            f"Code coverage is {percentage:.2f}%, "
            f"meeting the recommended {threshold.recommended:.2f}%."
        )
    if acceptance is CoverageAcceptance.ACCEPTABLE:
        return (
            f"Code coverage is {percentage:.2f}%, below the recommended "
            f"{threshold.recommended:.2f}% but within the acceptable {threshold.acceptable:.2f}%."
        )
    return (
        f"Code coverage is {percentage:.2f}%, "
        f"below the acceptable {threshold.acceptable:.2f}%."
    )
