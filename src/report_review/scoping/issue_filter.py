"""Filtering of issue summaries down to the files a review cares about."""

from __future__ import annotations

from typing import AbstractSet, List, Sequence

from ..models import AllFiles, FileScope, IssueSummary
from .path_scope import in_scope, relativize


def filter_summaries(
    summaries: Sequence[IssueSummary],
    strategy: FileScope,
    *,
    working_root: str,
    changed_files: AbstractSet[str] = frozenset(),
) -> List[IssueSummary]:
    """Return the summaries eligible under ``strategy``, preserving order.

    Under :class:`AllFiles` the input is returned unchanged, including issues
    without a location. Any other strategy drops issues that cannot be mapped
    to a path below ``working_root``.
    """

    if isinstance(strategy, AllFiles):
        return list(summaries)

    kept: List[IssueSummary] = []
    for summary in summaries:
        relative_path = relativize(summary.location, working_root)
        if relative_path is None:
            continue
        if in_scope(relative_path, strategy, changed_files):
            kept.append(summary)
    return kept
