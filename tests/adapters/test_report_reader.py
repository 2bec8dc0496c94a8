import json
import logging
from pathlib import Path

import pytest

from report_review.adapters import JsonReportReader, ReportReadError
from report_review.models import DocumentLocation, IssueBundle, IssueSummary


def write_report(tmp_path: Path, payload) -> Path:
    path = tmp_path / "report.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return path


def test_reads_issue_summaries(tmp_path):
    report = write_report(
        tmp_path,
        {
            "issues": {
                "build_warnings": [
                    {
                        "message": "Variable 'x' was never used",
                        "issue_type": "Swift Compiler Warning",
                        "producing_target": "App",
                        "location": {"path": "/repo/Sources/App.swift", "line": 12},
                    },
                    {"message": "Run script build phase will be run during every build"},
                ],
                "build_errors": [],
                "test_failures": [
                    {
                        "message": "XCTAssertTrue failed",
                        "test_case_name": "AppTests.testLaunch()",
                        "location": {"path": "/repo/Tests/AppTests.swift", "line": 0},
                    }
                ],
            }
        },
    )

    bundle = JsonReportReader(report).get_issue_summaries()

    assert bundle.build_warnings == [
        IssueSummary(
            message="Variable 'x' was never used",
            location=DocumentLocation(path="/repo/Sources/App.swift", line=12),
            issue_type="Swift Compiler Warning",
            producing_target="App",
        ),
        IssueSummary(message="Run script build phase will be run during every build"),
    ]
    assert bundle.build_errors == []
    assert bundle.analyzer_warnings == []
    assert bundle.test_failures == [
        IssueSummary(
            message="XCTAssertTrue failed",
            location=DocumentLocation(path="/repo/Tests/AppTests.swift", line=None),
            test_case_name="AppTests.testLaunch()",
        )
    ]
    assert bundle.total == 3


def test_reads_coverage(tmp_path):
    report = write_report(tmp_path, {"issues": {}, "coverage": {"line_coverage": 82.5}})
    reader = JsonReportReader(report)

    assert reader.get_coverage() == 82.5
    assert reader.get_issue_summaries() == IssueBundle()
    assert reader.source == str(report)


def test_accepts_plain_coverage_number(tmp_path):
    report = write_report(tmp_path, {"coverage": 75})

    assert JsonReportReader(report).get_coverage() == 75.0


@pytest.mark.parametrize(
    "payload",
    [
        {"issues": {}},
        {"coverage": {}},
        {"coverage": {"line_coverage": "n/a"}},
        {"coverage": True},
    ],
)
def test_missing_or_invalid_coverage_raises(tmp_path, payload):
    reader = JsonReportReader(write_report(tmp_path, payload))

    with pytest.raises(ReportReadError):
        reader.get_coverage()


@pytest.mark.parametrize(
    "payload",
    [
        {"coverage": 80},
        {"issues": {"build_errors": {"message": "not a list"}}},
        "[]",
        "{not json",
    ],
)
def test_missing_or_invalid_issues_raise(tmp_path, payload):
    reader = JsonReportReader(write_report(tmp_path, payload))

    with pytest.raises(ReportReadError):
        reader.get_issue_summaries()


def test_missing_report_raises(tmp_path):
    reader = JsonReportReader(tmp_path / "missing.json")

    with pytest.raises(ReportReadError):
        reader.get_issue_summaries()
    with pytest.raises(ReportReadError):
        reader.get_coverage()


def _directory_report(tmp_path):
    path = tmp_path / "result.json"
    path.mkdir()
    return path


def _non_utf8_report(tmp_path):
    path = tmp_path / "result.json"
    path.write_bytes(b'{"issues": {}}\xff\xfe')
    return path


@pytest.mark.parametrize("make_report", [_directory_report, _non_utf8_report])
def test_undecodable_report_raises_read_error(tmp_path, make_report):
    reader = JsonReportReader(make_report(tmp_path))

    with pytest.raises(ReportReadError):
        reader.get_issue_summaries()
    with pytest.raises(ReportReadError):
        reader.get_coverage()


def test_malformed_issue_entries_are_skipped_with_warning(tmp_path, caplog):
    report = write_report(
        tmp_path,
        {"issues": {"build_errors": ["linker failed", {"message": "missing symbol"}]}},
    )

    with caplog.at_level(logging.WARNING, logger="report_review.adapters.report_reader"):
        bundle = JsonReportReader(report).get_issue_summaries()

    assert bundle.build_errors == [IssueSummary(message="missing symbol")]
    assert "Skipping malformed issue entry" in caplog.text
    assert "linker failed" in caplog.text
