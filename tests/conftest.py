from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest

from report_review.adapters import Commenter
from report_review.models import Severity


@dataclass
class Post:
    kind: str
    text: str
    path: Optional[str] = None
    line: Optional[int] = None

    @property
    def severity(self) -> Severity | None:
        return {
            "comment": Severity.COMMENT,
            "warning": Severity.WARNING,
            "failure": Severity.FAILURE,
        }.get(self.kind)

    @property
    def inline(self) -> bool:
        return self.path is not None


@dataclass
class RecordingCommenter(Commenter):
    posts: list[Post] = field(default_factory=list)

    def markdown(self, text: str) -> None:
        self.posts.append(Post("markdown", text))

    def comment(self, text: str) -> None:
        self.posts.append(Post("comment", text))

    def inline_comment(self, text: str, path: str, line: int) -> None:
        self.posts.append(Post("comment", text, path, line))

    def warn(self, text: str) -> None:
        self.posts.append(Post("warning", text))

    def inline_warning(self, text: str, path: str, line: int) -> None:
        self.posts.append(Post("warning", text, path, line))

    def fail(self, text: str) -> None:
        self.posts.append(Post("failure", text))

    def inline_failure(self, text: str, path: str, line: int) -> None:
        self.posts.append(Post("failure", text, path, line))

    def of(self, severity: Severity) -> list[Post]:
        return [post for post in self.posts if post.severity is severity]


@pytest.fixture
def commenter() -> RecordingCommenter:
    return RecordingCommenter()
