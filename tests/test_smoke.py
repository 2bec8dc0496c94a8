"""Minimal smoke tests for the report reviewer package."""


def test_package_importable() -> None:
    """Ensure the top-level package exposes the expected namespace."""
    import report_review

    assert report_review.ReportingService is not None
