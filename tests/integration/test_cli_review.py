"""Integration tests for the ``report-review review`` command."""

from __future__ import annotations

import io
import json
from contextlib import redirect_stdout
from pathlib import Path
from typing import Any

import pytest

from report_review.cli import app


def _report(workspace: Path) -> dict[str, Any]:
    return {
        "issues": {
            "build_warnings": [
                {
                    "message": "Variable 'x' was never used",
                    "location": {"path": str(workspace / "Sources" / "App.swift"), "line": 12},
                },
                {
                    "message": "Deprecated API",
                    "location": {"path": str(workspace / "Sources" / "Legacy.swift"), "line": 3},
                },
                {"message": "Project level warning"},
            ],
            "build_errors": [],
            "analyzer_warnings": [],
            "test_failures": [],
        },
        "coverage": {"line_coverage": 82.0},
    }


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    (root / "Sources").mkdir(parents=True)
    return root


@pytest.fixture
def report_path(tmp_path: Path, workspace: Path) -> Path:
    path = tmp_path / "result.json"
    path.write_text(json.dumps(_report(workspace)), encoding="utf-8")
    return path


@pytest.fixture
def coverage_policy(tmp_path: Path) -> Path:
    path = tmp_path / "policy.yaml"
    path.write_text("coverage:\n  recommended: 85\n  acceptable: 80\n", encoding="utf-8")
    return path


def invoke_cli(args: list[str]) -> tuple[int, str]:
    """Execute the CLI with the provided arguments and capture stdout."""

    stdout = io.StringIO()
    with redirect_stdout(stdout):
        exit_code = app.main(args)
    return exit_code, stdout.getvalue()


def test_review_posts_changed_file_warnings_and_coverage(
    workspace: Path, report_path: Path, coverage_policy: Path
) -> None:
    exit_code, output = invoke_cli(
        [
            "review",
            str(report_path),
            "--working-dir",
            str(workspace),
            "--modified-file",
            "Sources/App.swift",
            "--policy",
            str(coverage_policy),
        ]
    )

    assert exit_code == 0, output
    lines = output.splitlines()
    assert "[warning] Variable 'x' was never used (Sources/App.swift:12)" in lines
    assert not any("Deprecated API" in line for line in lines)
    assert not any("Project level warning" in line for line in lines)
    assert any(line.startswith("[warning] Code coverage is 82.00%") for line in lines)
    assert "# Build Report Review" in output


def test_warnings_as_errors_fails_the_run(
    workspace: Path, report_path: Path, tmp_path: Path
) -> None:
    changed_list = tmp_path / "modified.txt"
    changed_list.write_text("Sources/Legacy.swift\n\n", encoding="utf-8")

    exit_code, output = invoke_cli(
        [
            "review",
            str(report_path),
            "--working-dir",
            str(workspace),
            "--modified-files-list",
            str(changed_list),
            "--warnings-as-errors",
        ]
    )

    assert exit_code == 1
    assert "[failure] Deprecated API (Sources/Legacy.swift:3)" in output.splitlines()


def test_unreadable_report_fails_issues_and_warns_for_coverage(
    tmp_path: Path, coverage_policy: Path
) -> None:
    missing = tmp_path / "missing.json"

    exit_code, output = invoke_cli(["review", str(missing), "--policy", str(coverage_policy)])

    assert exit_code == 1
    assert f"[failure] Failed to get invocation record from {missing}" in output
    assert f"[warning] Failed to get coverage from {missing}" in output


def test_github_commenter_and_result_json(
    workspace: Path,
    report_path: Path,
    coverage_policy: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    summary_path = tmp_path / "step-summary.md"
    result_path = tmp_path / "out" / "result.json"
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(summary_path))

    exit_code, output = invoke_cli(
        [
            "review",
            str(report_path),
            "--working-dir",
            str(workspace),
            "--created-file",
            "Sources/App.swift",
            "--policy",
            str(coverage_policy),
            "--commenter",
            "github",
            "--result-json",
            str(result_path),
        ]
    )

    assert exit_code == 0
    assert output.splitlines() == [
        "::warning::Variable 'x' was never used (Sources/App.swift:12)",
        "::warning::Code coverage is 82.00%, below the recommended 85.00% "
        "but within the acceptable 80.00%.",
    ]
    assert "**Coverage:** 82.00%" in summary_path.read_text(encoding="utf-8")

    payload = json.loads(result_path.read_text(encoding="utf-8"))
    assert payload["coverage"] == 82.0
    assert len(payload["issues"]["build_warnings"]) == 3


def test_invalid_policy_returns_usage_error(tmp_path: Path, report_path: Path) -> None:
    policy = tmp_path / "bad.yaml"
    policy.write_text("file_scope: staged\n", encoding="utf-8")

    exit_code, output = invoke_cli(["review", str(report_path), "--policy", str(policy)])

    assert exit_code == 2
    assert output.startswith("Error: file_scope must be one of")


def test_missing_file_list_returns_usage_error(tmp_path: Path, report_path: Path) -> None:
    exit_code, output = invoke_cli(
        ["review", str(report_path), "--created-files-list", str(tmp_path / "nope.txt")]
    )

    assert exit_code == 2
    assert output.startswith("Error: Unable to read file list")


def test_no_command_prints_help() -> None:
    exit_code, output = invoke_cli([])

    assert exit_code == 0
    assert "usage: report-review" in output
