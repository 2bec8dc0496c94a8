"""Helpers mapping issue locations onto working-directory relative paths."""

from __future__ import annotations

import posixpath
from fnmatch import fnmatchcase
from typing import AbstractSet, Iterable, Optional, Sequence

from ..models import AllFiles, ChangedFiles, CustomFiles, DocumentLocation, FileScope


def normalize_path(path: str) -> str:
    """Return the lexical normal form of ``path`` without touching the filesystem."""

    return posixpath.normpath(path.replace("\\", "/"))


def relativize(location: Optional[DocumentLocation], working_root: str) -> Optional[str]:
    """Return the path of ``location`` relative to ``working_root``.

    ``None`` is returned when there is no location or when the location is not
    below the working root.
    """

    if location is None or not location.path:
        return None

    root = normalize_path(working_root)
    path = normalize_path(location.path)
    prefix = root if root.endswith("/") else root + "/"

    if not path.startswith(prefix):
        return None

    relative = path[len(prefix) :]
    return relative or None


def changed_file_set(modified: Iterable[str], created: Iterable[str]) -> frozenset[str]:
    """Union of modified and created paths in normalized form."""

    return frozenset(normalize_path(path) for group in (modified, created) for path in group if path)


def in_scope(path: str, strategy: FileScope, changed_files: AbstractSet[str] = frozenset()) -> bool:
    """Decide whether a relative ``path`` is eligible for reporting under ``strategy``."""

    if isinstance(strategy, AllFiles):
        return True
    if isinstance(strategy, ChangedFiles):
        return normalize_path(path) in changed_files
    if isinstance(strategy, CustomFiles):
        return bool(strategy.predicate(path))

    raise TypeError(f"Unsupported file scope: {strategy!r}")


class PathPatternPredicate:
    """Glob based predicate usable as a :class:`CustomFiles` strategy.

    A path matches when it matches at least one include pattern (or no include
    patterns are configured) and none of the exclude patterns.
    """

    def __init__(self, include: Sequence[str] = (), exclude: Sequence[str] = ()) -> None:
        self.include = tuple(include)
        self.exclude = tuple(exclude)

    def __call__(self, path: str) -> bool:
        normalized = normalize_path(path)
        if self.include and not any(fnmatchcase(normalized, pattern) for pattern in self.include):
            return False
        return not any(fnmatchcase(normalized, pattern) for pattern in self.exclude)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathPatternPredicate):
            return NotImplemented
        return self.include == other.include and self.exclude == other.exclude

    def __hash__(self) -> int:
        return hash((self.include, self.exclude))

    def __repr__(self) -> str:
        return f"PathPatternPredicate(include={list(self.include)!r}, exclude={list(self.exclude)!r})"
