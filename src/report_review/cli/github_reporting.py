"""Helpers for publishing review messages to GitHub Actions surfaces."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Sequence, TextIO

from ..adapters import StreamCommenter
from ..models import Severity

logger = logging.getLogger(__name__)

ANNOTATION_LEVELS = {
    Severity.COMMENT: "notice",
    Severity.WARNING: "warning",
    Severity.FAILURE: "error",
}

CATEGORY_TITLES = (
    ("build_errors", "Build errors"),
    ("build_warnings", "Build warnings"),
    ("analyzer_warnings", "Analyzer warnings"),
    ("test_failures", "Test failures"),
)


def escape_data(value: str) -> str:
    """Escape a message body for use in a workflow command."""

    return value.replace("%", "%25").replace("\r", "").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_annotation(
    severity: Severity,
    text: str,
    path: Optional[str] = None,
    line: Optional[int] = None,
) -> str:
    """Render a GitHub Actions workflow command annotation."""

    level = ANNOTATION_LEVELS.get(severity, "notice")

    attributes: list[str] = []
    if path:
        attributes.append(f"file={escape_property(path)}")
    if path and line is not None:
        attributes.append(f"line={line}")

    attribute_segment = ""
    if attributes:
        attribute_segment = " " + ",".join(attributes)

    body = escape_data(text.strip()) or "Review message reported without text."
    return f"::{level}{attribute_segment}::{body}"


def format_summary(result: Mapping[str, object], *, report_path: str | None = None) -> str:
    """Render a Markdown job summary for a serialized reporting result."""

    coverage = result.get("coverage")
    issues: Mapping[str, Sequence[object]] | None = result.get("issues")  # type: ignore[assignment]

    lines: list[str] = ["# Build Report Review", ""]
    if report_path:
        lines.extend([f"**Report:** `{report_path}`", ""])

    if isinstance(coverage, (int, float)):
        lines.append(f"**Coverage:** {float(coverage):.2f}%")
    else:
        lines.append("**Coverage:** not reported")

    if issues is None:
        lines.extend(["", "Issues were not collected."])
    else:
        lines.extend(["", "| Category | Issues |", "| --- | ---: |"])
        for key, title in CATEGORY_TITLES:
            lines.append(f"| {title} | {len(issues.get(key) or [])} |")

    lines.append("")
    return "\n".join(lines)


def default_summary_path() -> Path | None:
    summary_env = os.getenv("GITHUB_STEP_SUMMARY")
    if summary_env:
        return Path(summary_env)
    return None


class GitHubActionsCommenter(StreamCommenter):
    """Commenter emitting workflow command annotations and job summary markdown."""

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        summary_path: Path | None = None,
    ) -> None:
        super().__init__(stream)
        self.summary_path = summary_path

    def markdown(self, text: str) -> None:
        if self.summary_path is None:
            logger.debug("No job summary path configured; writing markdown to the log stream")
            for line in text.splitlines():
                self.stream.write(line + "\n")
            return

        self.summary_path.parent.mkdir(parents=True, exist_ok=True)
        with self.summary_path.open("a", encoding="utf-8") as handle:
            handle.write(text if text.endswith("\n") else text + "\n")

    def format_message(
        self,
        severity: Severity,
        text: str,
        path: Optional[str],
        line: Optional[int],
    ) -> str:
        return format_annotation(severity, text, path, line)


__all__ = [
    "GitHubActionsCommenter",
    "default_summary_path",
    "escape_data",
    "format_annotation",
    "format_summary",
]
