"""Commenter interfaces used to publish review messages."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections import Counter
from typing import Optional, TextIO

from ..models import Severity


class Commenter(ABC):
    """Abstract base class describing a review surface.

    Inline forms attach the message to ``path`` at the 1-based ``line``.
    """

    @abstractmethod
    def markdown(self, text: str) -> None:
        """Post ``text`` rendered as markdown."""

    @abstractmethod
    def comment(self, text: str) -> None:
        """Post an informational message."""

    @abstractmethod
    def inline_comment(self, text: str, path: str, line: int) -> None:
        """Post an informational message attached to a file location."""

    @abstractmethod
    def warn(self, text: str) -> None:
        """Post a warning."""

    @abstractmethod
    def inline_warning(self, text: str, path: str, line: int) -> None:
        """Post a warning attached to a file location."""

    @abstractmethod
    def fail(self, text: str) -> None:
        """Post a failure."""

    @abstractmethod
    def inline_failure(self, text: str, path: str, line: int) -> None:
        """Post a failure attached to a file location."""

    # ------------------------------------------------------------------
    def post(self, text: str, severity: Severity) -> None:
        """Post a message that is not attached to a file at ``severity``."""

        if severity is Severity.COMMENT:
            self.comment(text)
        elif severity is Severity.WARNING:
            self.warn(text)
        elif severity is Severity.FAILURE:
            self.fail(text)
        else:
            raise ValueError(f"Unsupported severity: {severity!r}")


class StreamCommenter(Commenter):
    """Commenter writing to a text stream and counting posts per severity."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.counts: Counter[Severity] = Counter()

    @property
    def failure_count(self) -> int:
        return self.counts[Severity.FAILURE]

    def comment(self, text: str) -> None:
        self._record(Severity.COMMENT, text)

    def inline_comment(self, text: str, path: str, line: int) -> None:
        self._record(Severity.COMMENT, text, path, line)

    def warn(self, text: str) -> None:
        self._record(Severity.WARNING, text)

    def inline_warning(self, text: str, path: str, line: int) -> None:
        self._record(Severity.WARNING, text, path, line)

    def fail(self, text: str) -> None:
        self._record(Severity.FAILURE, text)

    def inline_failure(self, text: str, path: str, line: int) -> None:
        self._record(Severity.FAILURE, text, path, line)

    # ------------------------------------------------------------------
    def _record(
        self,
        severity: Severity,
        text: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        self.counts[severity] += 1
        self.stream.write(self.format_message(severity, text, path, line) + "\n")

    @abstractmethod
    def format_message(
        self,
        severity: Severity,
        text: str,
        path: Optional[str],
        line: Optional[int],
    ) -> str:
        """Render a single message line for the stream."""


class ConsoleCommenter(StreamCommenter):
    """Plain text commenter used for local runs."""

    def markdown(self, text: str) -> None:
        self.stream.write(text.rstrip("\n") + "\n")

    def format_message(
        self,
        severity: Severity,
        text: str,
        path: Optional[str],
        line: Optional[int],
    ) -> str:
        rendered = f"[{severity.value}] {text}"
        if path:
            rendered += f" ({path}:{line})" if line is not None else f" ({path})"
        return rendered


__all__ = ["Commenter", "ConsoleCommenter", "StreamCommenter"]
