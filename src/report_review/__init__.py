"""Review policy engine for build and test reports."""

from .service import ReportingResult, ReportingService, ReviewContext

__all__ = ["ReportingResult", "ReportingService", "ReviewContext"]
