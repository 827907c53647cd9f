"""Type definitions for GitHub operations."""

from dataclasses import dataclass
from typing import Literal

PRState = Literal["OPEN", "MERGED", "CLOSED"]


@dataclass(frozen=True)
class PullRequest:
    """A pull request as seen by stakk."""

    number: int
    html_url: str
    title: str
    head_ref: str
    base_ref: str
    state: PRState


@dataclass(frozen=True)
class Comment:
    """A comment on a pull request."""

    id: int
    body: str


@dataclass(frozen=True)
class CreatePrParams:
    """Parameters for creating a pull request."""

    title: str
    head: str
    base: str
    body: str | None
    draft: bool
