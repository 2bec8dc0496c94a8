"""Command-line interface implementation for the report reviewer."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from ..adapters import ConsoleCommenter, StreamCommenter
from ..config import PolicyConfigError, PolicyLoader
from ..service import ReportingResult, ReportingService, ReviewContext
from .github_reporting import GitHubActionsCommenter, default_summary_path, format_summary

COMMENTERS = ("console", "github")


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="report-review", description="Surface build report issues and coverage for review"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress information to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    review_parser = subparsers.add_parser(
        "review", help="Post issues and coverage from a build report."
    )
    review_parser.add_argument(
        "report",
        type=Path,
        help="Path to the JSON summary exported from the build report.",
    )
    review_parser.add_argument(
        "--policy",
        dest="policies",
        action="append",
        type=Path,
        default=None,
        help="Policy YAML file; repeat to merge several files in order.",
    )
    review_parser.add_argument(
        "--working-dir",
        type=Path,
        default=None,
        help="Root that issue locations are made relative to. Defaults to the current directory.",
    )
    review_parser.add_argument(
        "--modified-file",
        dest="modified_files",
        action="append",
        default=None,
        help="Path of a file modified by the change, relative to the working directory.",
    )
    review_parser.add_argument(
        "--created-file",
        dest="created_files",
        action="append",
        default=None,
        help="Path of a file created by the change, relative to the working directory.",
    )
    review_parser.add_argument(
        "--modified-files-list",
        type=Path,
        default=None,
        help="Text file listing modified files, one path per line.",
    )
    review_parser.add_argument(
        "--created-files-list",
        type=Path,
        default=None,
        help="Text file listing created files, one path per line.",
    )
    review_parser.add_argument(
        "--warnings-as-errors",
        action="store_true",
        help="Report build warnings as failures.",
    )
    review_parser.add_argument(
        "--commenter",
        choices=COMMENTERS,
        default="console",
        help="Surface used to publish review messages.",
    )
    review_parser.add_argument(
        "--result-json",
        type=Path,
        default=None,
        help="Write the issues and coverage read from the report to this file.",
    )

    return parser


def create_commenter(kind: str) -> StreamCommenter:
    """Create the commenter used to publish review messages."""

    if kind == "github":
        return GitHubActionsCommenter(summary_path=default_summary_path())
    if kind == "console":
        return ConsoleCommenter()
    raise ValueError(f"commenter must be one of {', '.join(COMMENTERS)}")


def create_service(commenter: StreamCommenter, context: ReviewContext) -> ReportingService:
    """Create a reporting service reading JSON report summaries."""

    return ReportingService(commenter, context)


def _read_path_list(path: Path | None) -> list[str]:
    if path is None:
        return []
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Unable to read file list {path}: {exc.strerror}") from exc
    return [line.strip() for line in content.splitlines() if line.strip()]


def _write_result(result: ReportingResult, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(result.to_dict(), indent=2) + "\n", encoding="utf-8")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _handle_review(args: argparse.Namespace) -> int:
    try:
        configuration = PolicyLoader().load(args.policies)
        modified = list(args.modified_files or []) + _read_path_list(args.modified_files_list)
        created = list(args.created_files or []) + _read_path_list(args.created_files_list)
    except (PolicyConfigError, ValueError) as exc:
        print(f"Error: {exc}")
        return 2

    working_dir = (args.working_dir or Path.cwd()).absolute()
    context = ReviewContext(
        working_dir=str(working_dir),
        modified_files=modified,
        created_files=created,
    )

    commenter = create_commenter(args.commenter)
    service = create_service(commenter, context)
    result = service.report(
        args.report,
        configuration,
        treat_warnings_as_errors=args.warnings_as_errors,
    )

    payload = result.to_dict()
    commenter.markdown(format_summary(payload, report_path=str(args.report)))

    if args.result_json is not None:
        _write_result(result, args.result_json)

    return 1 if commenter.failure_count else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "review":
        return _handle_review(args)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
