"""Utilities for loading and merging review policy files."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Sequence

import yaml

from ..models import (
    AllFiles,
    ChangedFiles,
    CoverageRequired,
    CoverageRequirement,
    CoverageThreshold,
    CustomFiles,
    FileScope,
    NoCoverage,
    PolicyConfiguration,
)
from ..scoping import PathPatternPredicate

logger = logging.getLogger(__name__)

_ISSUE_TOGGLES = {
    "build_warnings": "check_build_warnings",
    "build_errors": "check_build_errors",
    "analyzer_warnings": "check_analyzer_warnings",
    "test_failures": "check_test_failures",
}

_FILE_SCOPES = ("all", "changed", "patterns")


class PolicyConfigError(RuntimeError):
    """Raised when policy files cannot be loaded or parsed."""


class PolicyLoader:
    """Load policy files and build a :class:`PolicyConfiguration`."""

    def __init__(self, default_policies: Sequence[Path | str] | None = None) -> None:
        self._default_policies = [Path(path) for path in default_policies or []]

    # ------------------------------------------------------------------
    def load(self, policies: Sequence[Path | str] | None = None) -> PolicyConfiguration:
        """Return the configuration described by the merged policy files."""

        policy_paths = list(self._default_policies)
        if policies:
            policy_paths.extend(Path(path) for path in policies)

        merged: MutableMapping[str, Any] = {}
        for policy_path in policy_paths:
            data = self._load_policy(policy_path)
            for key, value in data.items():
                if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
                    merged[key] = {**merged[key], **value}
                else:
                    merged[key] = value

        return self.build(merged)

    # ------------------------------------------------------------------
    def build(self, data: Mapping[str, Any]) -> PolicyConfiguration:
        """Build a configuration from an already parsed policy mapping."""

        toggles: Dict[str, bool] = {}
        issues = data.get("issues")
        if issues is not None:
            if not isinstance(issues, Mapping):
                raise PolicyConfigError("'issues' must be a mapping of category toggles")
            for key, value in issues.items():
                attribute = _ISSUE_TOGGLES.get(str(key))
                if attribute is None:
                    raise PolicyConfigError(f"Unknown issue category: {key}")
                if not isinstance(value, bool):
                    raise PolicyConfigError(f"Issue toggle '{key}' must be true or false")
                toggles[attribute] = value

        return PolicyConfiguration(
            file_scope=self._build_file_scope(data),
            coverage_requirement=self._build_coverage(data.get("coverage")),
            **toggles,
        )

    # ------------------------------------------------------------------
    def _build_file_scope(self, data: Mapping[str, Any]) -> FileScope:
        scope = str(data.get("file_scope", "changed")).strip().lower()
        if scope not in _FILE_SCOPES:
            raise PolicyConfigError(
                f"file_scope must be one of {', '.join(_FILE_SCOPES)}, got '{scope}'"
            )

        if scope == "all":
            return AllFiles()
        if scope == "changed":
            return ChangedFiles()

        patterns = data.get("patterns") or {}
        if not isinstance(patterns, Mapping):
            raise PolicyConfigError("'patterns' must be a mapping with include/exclude lists")

        include = self._pattern_list(patterns, "include")
        exclude = self._pattern_list(patterns, "exclude")
        if not include and not exclude:
            raise PolicyConfigError("file_scope 'patterns' requires include or exclude patterns")
        return CustomFiles(predicate=PathPatternPredicate(include=include, exclude=exclude))

    def _pattern_list(self, patterns: Mapping[str, Any], key: str) -> list[str]:
        values = patterns.get(key) or []
        if isinstance(values, str):
            values = [values]
        if not isinstance(values, list):
            raise PolicyConfigError(f"'patterns.{key}' must be a list of glob patterns")
        return [str(value).strip() for value in values if str(value).strip()]

    def _build_coverage(self, coverage: Any) -> CoverageRequirement:
        if coverage is None or coverage is False:
            return NoCoverage()
        if not isinstance(coverage, Mapping):
            raise PolicyConfigError("'coverage' must be a mapping with recommended/acceptable")

        recommended = self._percentage(coverage, "recommended")
        acceptable = self._percentage(coverage, "acceptable")
        if acceptable > recommended:
            logger.warning(
                "Acceptable coverage %.2f%% exceeds recommended %.2f%%; "
                "coverage below %.2f%% will be rejected",
                acceptable,
                recommended,
                recommended,
            )

        return CoverageRequired(CoverageThreshold(recommended=recommended, acceptable=acceptable))

    def _percentage(self, coverage: Mapping[str, Any], key: str) -> float:
        if key not in coverage:
            raise PolicyConfigError(f"Coverage threshold '{key}' is required")

        value = coverage[key]
        if isinstance(value, bool):
            raise PolicyConfigError(f"Coverage threshold '{key}' must be a number")
        try:
            percentage = float(value)
        except (TypeError, ValueError) as exc:
            raise PolicyConfigError(f"Coverage threshold '{key}' must be a number") from exc

        if math.isnan(percentage) or not 0 <= percentage <= 100:
            raise PolicyConfigError(f"Coverage threshold '{key}' must be between 0 and 100")
        return percentage

    def _load_policy(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise PolicyConfigError(f"Policy file not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise PolicyConfigError(f"Failed to read policy file {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(f"Invalid YAML in policy file {path}") from exc

        if not isinstance(data, Mapping):
            raise PolicyConfigError(f"Policy file must be a mapping: {path}")

        logger.debug("Loaded policy file %s", path)
        return dict(data)
